"""Update detection models.

Remote lookups return an explicit result instead of raising, so that the
update detector can tell "no release" apart from "lookup failed" and
callers and tests can assert on either outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RemoteRelease:
    """Latest release information for one mod.

    Attributes:
        version: Release version label (tag name or static version).
        download_url: Archive URL, if the release has one.
        source: Where the release came from ("github" or "static").
    """

    version: str | None
    download_url: str | None
    source: str = "static"

    @property
    def is_installable(self) -> bool:
        """Check if both a version and a download URL are known."""
        return bool(self.version and self.download_url)


@dataclass(frozen=True, slots=True)
class RemoteLookup:
    """Outcome of a per-mod remote lookup.

    Attributes:
        release: Release data when the lookup succeeded (may be None if the
            mod simply has no remote source).
        error: Failure description when the lookup failed.
    """

    release: RemoteRelease | None = None
    error: str | None = None

    @classmethod
    def ok(cls, release: RemoteRelease | None) -> RemoteLookup:
        """Create a successful lookup result."""
        return cls(release=release)

    @classmethod
    def failed(cls, error: str) -> RemoteLookup:
        """Create a failed lookup result."""
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        """Check if the lookup did not fail."""
        return self.error is None


@dataclass(frozen=True, slots=True)
class UpdateCandidate:
    """A mod with an installable newer (or not yet installed) release.

    Attributes:
        mod_id: Catalog id of the mod.
        new_version: Version that would be installed.
        download_url: Where to fetch the archive.
        installed_version: Currently installed version, if installed.
    """

    mod_id: str
    new_version: str
    download_url: str
    installed_version: str | None = None

    @property
    def is_fresh_install(self) -> bool:
        """Check if the mod is not installed yet."""
        return self.installed_version is None

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for JSON serialization."""
        return {
            "mod_id": self.mod_id,
            "new_version": self.new_version,
            "download_url": self.download_url,
            "installed_version": self.installed_version,
        }


@dataclass(frozen=True, slots=True)
class UpdateReport:
    """Result of one update detection pass.

    Attributes:
        candidates: Update candidates in catalog order.
        failures: Mod ids whose remote lookup failed, with the reason.
        checked: Number of catalog entries looked at.
    """

    candidates: tuple[UpdateCandidate, ...]
    failures: dict[str, str] = field(default_factory=dict)
    checked: int = 0

    @property
    def failed_all(self) -> bool:
        """Check if every lookup failed (catalog could not be refreshed)."""
        return self.checked > 0 and len(self.failures) == self.checked

    @property
    def installed_updates(self) -> tuple[UpdateCandidate, ...]:
        """Candidates for mods that are already installed."""
        return tuple(c for c in self.candidates if not c.is_fresh_install)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": {
                "checked": self.checked,
                "updates": len(self.candidates),
                "failed": len(self.failures),
            },
            "updates": [c.to_dict() for c in self.candidates],
            "failures": dict(self.failures),
        }
