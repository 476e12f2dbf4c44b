import shutil

import pytest

from droid_recover.utils.adb import AdbClient, resolve_adb_path


def test_override_wins():
    assert resolve_adb_path("/opt/platform-tools/adb") == "/opt/platform-tools/adb"


def test_falls_back_to_plain_name(monkeypatch, tmp_path):
    monkeypatch.setattr("droid_recover.utils.adb.candidate_adb_paths", lambda: [tmp_path / "adb"])
    monkeypatch.setattr("droid_recover.utils.adb.shutil.which", lambda name: None)
    assert resolve_adb_path() == "adb"


def test_finds_bundled_copy(monkeypatch, tmp_path):
    bundled = tmp_path / "adb"
    bundled.write_text("#!/bin/sh\n")
    monkeypatch.setattr("droid_recover.utils.adb.candidate_adb_paths", lambda: [tmp_path / "missing", bundled])
    assert resolve_adb_path() == str(bundled)


async def test_missing_executable_never_raises(tmp_path):
    client = AdbClient(adb_path=str(tmp_path / "no-such-adb"))

    rc, out, err = await client.run("version")
    assert rc == -1 and out == ""
    assert await client.execute("serial", "get-state") == ""
    assert (await client.shell("serial", "ls")).startswith("Error: ")
    assert await client.is_available() is False
    assert await client.get_state("serial") == "unknown"


@pytest.mark.skipif(shutil.which("sleep") is None, reason="needs a sleep binary")
async def test_timeout_kills_the_process():
    client = AdbClient(adb_path=shutil.which("sleep"))
    rc, out, err = await client.run("5", timeout=0.2)
    assert (rc, out, err) == (-1, "", "Command timed out")


@pytest.mark.skipif(shutil.which("false") is None, reason="needs a false binary")
async def test_non_zero_exit_is_empty_for_subcommands():
    client = AdbClient(adb_path=shutil.which("false"))
    assert await client.execute("serial", "get-state") == ""
    assert await client.version() is None
