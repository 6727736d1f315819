"""Unit tests for the version quality score."""

import pytest
from modctl.core.quality import score_version
from modctl.core.version import UNKNOWN_VERSION


class TestScoreVersion:
    """Tests for score_version function."""

    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            (UNKNOWN_VERSION, 0),
            ("2.6.2_hotfix", 3),
            ("1.5", 3),
            ("beta_3", 2),
            ("ALPHA_1", 2),
            ("Jan_12_2026", 2),
            ("r15", 1),
            ("3-1", 1),
        ],
    )
    def test_scores(self, version: str, expected: int) -> None:
        """Labels are ranked by how specific they look."""
        assert score_version(version) == expected
