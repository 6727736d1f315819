"""Plain-text mod list export.

The list has two sections: archives tracked in the manifest, then the
archives the game downloaded itself into the ``repo`` sub-folder.
"""

from collections.abc import Iterable

from modctl.models.manifest import Manifest

NON_REPO_HEADER = "[Non-Repo Mods]"
REPO_HEADER = "[Repo Mods]"
REPO_SUBDIR = "repo"


def render_mod_list(manifest: Manifest, repo_files: Iterable[str] = ()) -> str:
    """Render the shareable mod list.

    Args:
        manifest: Current manifest.
        repo_files: Archive names found in the ``repo`` sub-folder.

    Returns:
        The list, one archive per line, sections separated by a blank line.
    """
    lines = [NON_REPO_HEADER]
    lines.extend(manifest[mod_id].filename for mod_id in sorted(manifest))
    lines.append("")
    lines.append(REPO_HEADER)
    lines.extend(repo_files)
    return "\n".join(lines)
