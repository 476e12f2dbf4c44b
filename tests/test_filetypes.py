import pytest

from droid_recover.scanners.filetypes import (
    category_for_type,
    enabled_extensions,
    extension_of,
    format_size,
    normalize_type,
)


def test_normalize_aliases():
    assert normalize_type("jpeg") == normalize_type("JPG") == "JPG"
    assert normalize_type("xlsx") == normalize_type("xls") == "XLS"
    assert normalize_type(".Mp4") == "MP4"
    assert normalize_type("heic") == "HEIC"


@pytest.mark.parametrize("num_bytes,expected", [
    (0, "0 B"),
    (1023, "1023 B"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (1048576, "1 MB"),
    (1073741824, "1 GB"),
    (1099511627776 * 2048, "2048 TB"),
])
def test_format_size(num_bytes, expected):
    assert format_size(num_bytes) == expected


def test_format_size_two_decimals():
    assert format_size(1234567) == "1.18 MB"


def test_extension_of():
    assert extension_of("/sdcard/DCIM/IMG_1.jpeg") == "JPEG"
    assert extension_of("/sdcard/.trash/archive.tar.gz") == "GZ"
    assert extension_of("/sdcard/.nomedia") == "NOMEDIA"
    assert extension_of("/sdcard/.trash/stale.") == ""
    assert extension_of("/sdcard/.trash/noext") == ""
    assert extension_of("/sdcard/dir.d/noext") == ""


def test_enabled_extensions_follow_toggles():
    assert enabled_extensions(False, False, False, False) == []
    exts = enabled_extensions(True, False, True, False)
    assert "JPEG" in exts and "XLSX" in exts
    assert "MP4" not in exts and "MP3" not in exts


def test_category_for_type():
    assert category_for_type("JPG") == "photo"
    assert category_for_type("3gp") == "video"
    assert category_for_type("XLS") == "document"
    assert category_for_type("OGG") == "audio"
    assert category_for_type("APK") == "other"
