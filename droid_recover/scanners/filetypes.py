"""Extension tables, type normalization and size formatting."""

PHOTO_EXTENSIONS = ("JPG", "JPEG", "PNG", "GIF", "WEBP")
VIDEO_EXTENSIONS = ("MP4", "AVI", "MKV", "MOV", "3GP", "M4V", "FLV", "WMV")
DOCUMENT_EXTENSIONS = ("PDF", "DOC", "DOCX", "TXT", "XLS", "XLSX")
AUDIO_EXTENSIONS = ("MP3", "WAV", "M4A", "AAC", "OGG")

_ALIASES = {
    "JPEG": "JPG",
    "XLSX": "XLS",
}

_CATEGORIES = (
    ("photo", PHOTO_EXTENSIONS),
    ("video", VIDEO_EXTENSIONS),
    ("document", DOCUMENT_EXTENSIONS),
    ("audio", AUDIO_EXTENSIONS),
)

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def extension_of(path: str) -> str:
    """Uppercase extension of the last path component, without the dot.

    A hidden file such as `.nomedia` counts as all extension (`NOMEDIA`).
    """
    name = path.rstrip("/").rsplit("/", 1)[-1]
    _, dot, ext = name.rpartition(".")
    if not dot:
        return ""
    return ext.upper()


def normalize_type(extension: str) -> str:
    ext = extension.strip().lstrip(".").upper()
    return _ALIASES.get(ext, ext)


def enabled_extensions(photos: bool, videos: bool, documents: bool, audio: bool) -> list[str]:
    """Raw extensions for the enabled toggles, in table order."""
    exts: list[str] = []
    for enabled, table in (
        (photos, PHOTO_EXTENSIONS),
        (videos, VIDEO_EXTENSIONS),
        (documents, DOCUMENT_EXTENSIONS),
        (audio, AUDIO_EXTENSIONS),
    ):
        if enabled:
            exts.extend(table)
    return exts


def category_for_type(file_type: str) -> str:
    tag = file_type.upper()
    for name, table in _CATEGORIES:
        if tag in table:
            return name
    return "other"


def format_size(num_bytes: int) -> str:
    value = float(num_bytes)
    order = 0
    while value >= 1024 and order < len(_SIZE_UNITS) - 1:
        order += 1
        value /= 1024
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[order]}"
