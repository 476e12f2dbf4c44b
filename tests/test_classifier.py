import pytest

from droid_recover.models.files import FileStatus, RecoverableFile
from droid_recover.scanners.classifier import classify_provenance


@pytest.mark.parametrize("path,expected", [
    ("/sdcard/.trash/DCIM/.thumbnails/foo.jpg", FileStatus.THUMBNAIL_CACHE),
    ("/sdcard/DCIM/Camera/.thumbdata/x.jpg", FileStatus.THUMBNAIL_CACHE),
    ("/sdcard/.samsung.deleted/a.mp4", FileStatus.TRASH),
    ("/sdcard/.recycle/cache/a.png", FileStatus.TRASH),
    ("/sdcard/Lost.Dir/12345.jpg", FileStatus.ORPHANED),
    ("/sdcard/Android/data/com.samsung.android.gallery3d/cache/b.jpg", FileStatus.CACHE_REMNANT),
    ("/sdcard/WhatsApp/Media/.Statuses/s.mp4", FileStatus.APP_TRASH),
    ("/sdcard/WhatsApp/.Shared/doc.pdf", FileStatus.APP_TRASH),
    ("/sdcard/DCIM/Camera/IMG_0001.jpg", FileStatus.POTENTIAL),
])
def test_provenance_precedence(path, expected):
    assert classify_provenance(path) == expected


def test_deleted_states():
    deleted = {s for s in FileStatus if s.is_deleted}
    assert deleted == {
        FileStatus.THUMBNAIL_CACHE,
        FileStatus.TRASH,
        FileStatus.ORPHANED,
        FileStatus.CACHE_REMNANT,
        FileStatus.APP_TRASH,
        FileStatus.POTENTIAL,
    }
    assert not FileStatus.RECOVERED.is_deleted
    assert not FileStatus.PERMANENTLY_LOST.is_deleted


def test_status_text_renders_failure_reason():
    record = RecoverableFile(file_name="a.jpg", device_path="/sdcard/.trash/a.jpg")
    record.mark_failed("x" * 500)
    assert record.status_text == "Recovery failed: " + "x" * 200
    record.mark_recovered("/tmp/a.jpg")
    assert record.status_text == "Recovered"
    assert record.device_path == "/tmp/a.jpg"
