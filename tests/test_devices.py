from droid_recover.models.device import AuthorizationState
from droid_recover.services.device_service import (
    has_root,
    list_devices,
    parse_device_lines,
    unlock_screen,
)


DEVICES_OUTPUT = """\
* daemon not running; starting now at tcp:5037
* daemon started successfully
List of devices attached
R58M123ABC             device usb:1-1 product:beyond1lteeea model:SM_G973F device:beyond1 transport_id:1
emulator-5554          unauthorized transport_id:2
0123456789ABCDEF       offline

"""


def test_parse_device_lines():
    assert parse_device_lines(DEVICES_OUTPUT) == [
        ("R58M123ABC", "device", "SM G973F"),
        ("emulator-5554", "unauthorized", None),
        ("0123456789ABCDEF", "offline", None),
    ]


def test_single_token_lines_are_ignored():
    assert parse_device_lines("List of devices attached\ngarbage\n") == []


async def test_list_devices(fake_adb):
    fake_adb.devices_output = DEVICES_OUTPUT
    fake_adb.models["emulator-5554"] = "sdk_gphone64_x86_64\n"

    devices = await list_devices(fake_adb)

    assert [d.id for d in devices] == ["R58M123ABC", "emulator-5554", "0123456789ABCDEF"]
    first, second, third = devices
    assert first.name == "SM G973F"
    assert first.state == AuthorizationState.AUTHORIZED
    assert first.status_text == "Authorized"
    assert second.name == "sdk_gphone64_x86_64"
    assert second.state == AuthorizationState.UNAUTHORIZED
    assert second.status_text == "Unauthorized - Tap Allow on Phone"
    assert third.name == "Unknown Device"
    assert third.state == AuthorizationState.OTHER
    assert third.status_text == "offline"
    # inline model means no getprop round trip
    assert ("-s", "R58M123ABC", "shell", "getprop ro.product.model") not in fake_adb.calls


async def test_list_devices_is_rebuilt_each_call(fake_adb):
    fake_adb.devices_output = DEVICES_OUTPUT
    assert len(await list_devices(fake_adb)) == 3
    fake_adb.devices_output = "List of devices attached\n"
    assert await list_devices(fake_adb) == []


async def test_has_root(fake_adb):
    assert await has_root(fake_adb, "R58M123ABC") is False
    fake_adb.root = True
    assert await has_root(fake_adb, "R58M123ABC") is True


async def test_unlock_uses_screen_size(fake_adb):
    fake_adb.extra["wm size"] = "Physical size: 1440x3040\n"

    await unlock_screen(fake_adb, "R58M123ABC")

    assert fake_adb.shell_commands == [
        "input keyevent KEYCODE_WAKEUP",
        "wm dismiss-keyguard",
        "wm size",
        "input swipe 720 2432 720 608 500",
    ]


