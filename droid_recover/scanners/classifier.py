"""Provenance status from where a file was found."""

from ..models.files import FileStatus

# Checked in order; the first rule with a matching marker wins.
PROVENANCE_RULES: tuple[tuple[FileStatus, tuple[str, ...]], ...] = (
    (FileStatus.THUMBNAIL_CACHE, (".thumb", ".thumbnails")),
    (FileStatus.TRASH, (".deleted", ".recycle", ".trash")),
    (FileStatus.ORPHANED, ("Lost.Dir",)),
    (FileStatus.CACHE_REMNANT, ("cache",)),
    (FileStatus.APP_TRASH, (".Statuses", ".Shared")),
)


def classify_provenance(path: str) -> FileStatus:
    for status, markers in PROVENANCE_RULES:
        if any(marker in path for marker in markers):
            return status
    return FileStatus.POTENTIAL
