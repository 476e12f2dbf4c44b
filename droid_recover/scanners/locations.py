"""Where deleted, trashed and cached media tends to live on Android storage.

Paths are relative to the storage root chosen for the scan. Vendor skins and
apps each keep their own trash and thumbnail folders, so the list is long and
ordered roughly by how likely each folder is to hold something recoverable.
"""

from enum import Enum
from typing import NamedTuple


class LocationKind(str, Enum):
    THUMBNAIL = "thumbnail"
    TRASH = "trash"
    CACHE = "cache"
    LOST_AND_FOUND = "lost_and_found"
    APP = "app"
    MEDIA = "media"


class Location(NamedTuple):
    template: str
    kind: LocationKind

    def resolve(self, storage_root: str) -> str:
        return self.template.format(root=storage_root.rstrip("/"))


LOCATION_CATALOG: tuple[Location, ...] = (
    # Trash / recently deleted
    Location("{root}/DCIM/.thumbnails", LocationKind.THUMBNAIL),
    Location("{root}/Pictures/.thumbnails", LocationKind.THUMBNAIL),
    Location("{root}/Android/data/com.google.android.apps.photos/files/Trash", LocationKind.TRASH),
    Location("{root}/DCIM/.cache", LocationKind.CACHE),

    # Videos are often deleted straight from these
    Location("{root}/DCIM/Camera", LocationKind.MEDIA),
    Location("{root}/Movies", LocationKind.MEDIA),
    Location("{root}/Videos", LocationKind.MEDIA),
    Location("{root}/Android/data/com.android.providers.media/thumbnail", LocationKind.THUMBNAIL),
    Location("{root}/Android/data/com.google.android.apps.photos/files/videos", LocationKind.APP),

    # Gallery trash (Samsung, Xiaomi, Huawei)
    Location("{root}/.trash", LocationKind.TRASH),
    Location("{root}/.samsung.deleted", LocationKind.TRASH),
    Location("{root}/.recycle", LocationKind.TRASH),
    Location("{root}/.deleted_files", LocationKind.TRASH),

    # Messaging apps
    Location("{root}/WhatsApp/Media/.Statuses", LocationKind.APP),
    Location("{root}/WhatsApp/Media/Video", LocationKind.APP),
    Location("{root}/WhatsApp/.Shared", LocationKind.APP),
    Location("{root}/Android/media/com.whatsapp/WhatsApp/.Statuses", LocationKind.APP),
    Location("{root}/Android/media/com.whatsapp/WhatsApp/Media/Video", LocationKind.APP),

    # Gallery caches and thumbnail databases
    Location("{root}/DCIM/Camera/.thumbdata", LocationKind.THUMBNAIL),
    Location("{root}/Android/data/com.android.gallery3d/files", LocationKind.CACHE),
    Location("{root}/Android/data/com.miui.gallery/files", LocationKind.CACHE),
    Location("{root}/Android/data/com.samsung.android.gallery3d/cache", LocationKind.CACHE),

    # Video player caches
    Location("{root}/Android/data/com.mxtech.videoplayer.ad/cache", LocationKind.CACHE),
    Location("{root}/Android/data/com.videoplayer/thumbnail", LocationKind.THUMBNAIL),

    # Android's lost+found and generic caches
    Location("{root}/Lost.Dir", LocationKind.LOST_AND_FOUND),
    Location("{root}/.cache", LocationKind.CACHE),
    Location("{root}/cache", LocationKind.CACHE),
)

# Swept with plain find when the device grants root.
ROOT_RECOVERY_LOCATIONS: tuple[Location, ...] = (
    Location("/data/local/tmp", LocationKind.CACHE),
    Location("/cache", LocationKind.CACHE),
    Location("/tmp", LocationKind.CACHE),
    Location("{root}/.recovery", LocationKind.LOST_AND_FOUND),
    Location("/data/lost+found", LocationKind.LOST_AND_FOUND),
)

LOST_DIR = Location("{root}/Lost.Dir", LocationKind.LOST_AND_FOUND)

# A path must contain one of these for the orphan sweep to keep it.
DELETION_MARKER_PATTERN = r"(\.(thumb|cache|deleted|recycle|trash)|Lost\.Dir|lost\+found)"


def resolve_catalog(storage_root: str) -> list[str]:
    return [loc.resolve(storage_root) for loc in LOCATION_CATALOG]
