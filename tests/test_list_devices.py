import datetime
import io
import json
from unittest.mock import MagicMock, patch

import dbus

from wb.nm_devices import list_devices
from wb.nm_devices.config import ConfigFile
from wb.nm_devices.device_record import DeviceRecord
from wb.nm_devices.exceptions import RemoteCallError

# DUMMY CLASSES


class DummyDevice:  # pylint: disable=R0903
    def __init__(self, path):
        self.path = path

    def get_path(self):
        return self.path


def make_network_manager(*results):
    network_manager = MagicMock()
    network_manager.get_devices.return_value = [DummyDevice(f"/dev/{i}") for i in range(len(results))]
    network_manager.read_device.side_effect = list(results)
    return network_manager


# TESTS


def test_print_devices_empty():
    output = io.StringIO()
    res = list_devices.print_devices(make_network_manager(), output, as_json=False, indent=2)
    assert res == list_devices.EXIT_OK
    assert output.getvalue() == ""


def test_print_devices_one_failure():
    network_manager = make_network_manager(
        DeviceRecord("/dev/0", {"Interface": "wlan0", "DeviceType": 2, "Driver": "brcmfmac", "State": 100}),
        RemoteCallError("org.freedesktop.DBus.Error.UnknownObject", "No such object path"),
    )
    output = io.StringIO()
    res = list_devices.print_devices(network_manager, output, as_json=False, indent=2)
    assert res == list_devices.EXIT_DEVICE_READ_FAILED
    assert output.getvalue().splitlines() == [
        "============================",
        "Interface: wlan0",
        "Type: WiFi",
        "Driver: brcmfmac",
        "State: Activated",
        "Device /dev/1: failed to read properties "
        "(org.freedesktop.DBus.Error.UnknownObject: No such object path)",
    ]


def test_print_devices_failure_does_not_stop_enumeration():
    network_manager = make_network_manager(
        RemoteCallError("org.freedesktop.DBus.Error.NoReply", "Did not receive a reply"),
        DeviceRecord("/dev/1", {"Interface": "eth0", "DeviceType": 1, "State": 30}),
    )
    output = io.StringIO()
    res = list_devices.print_devices(network_manager, output, as_json=False, indent=2)
    assert res == list_devices.EXIT_DEVICE_READ_FAILED
    lines = output.getvalue().splitlines()
    assert lines[0].startswith("Device /dev/0: failed to read properties")
    assert lines[1:] == [
        "============================",
        "Interface: eth0",
        "Type: Ethernet",
        "Driver: ",
        "State: Disconnected",
    ]


def test_print_devices_json():
    network_manager = make_network_manager(
        DeviceRecord("/dev/0", {"Interface": "eth0", "DeviceType": 1, "Driver": "fec", "State": 100}),
        RemoteCallError(None, "GetAll returned Array"),
    )
    output = io.StringIO()
    res = list_devices.print_devices(network_manager, output, as_json=True, indent=2)
    assert res == list_devices.EXIT_DEVICE_READ_FAILED
    assert json.loads(output.getvalue()) == {
        "devices": [
            {"path": "/dev/0", "interface": "eth0", "type": "Ethernet", "driver": "fec", "state": "Activated"}
        ],
        "errors": [{"path": "/dev/1", "error": "GetAll returned Array"}],
    }


def test_run_bus_unavailable():
    output = io.StringIO()
    with patch("wb.nm_devices.bus_session.dbus.SystemBus") as system_bus:
        system_bus.side_effect = dbus.exceptions.DBusException("Failed to connect to socket")
        assert list_devices.run(ConfigFile(), output) == list_devices.EXIT_BUS_CONNECTION_FAILED
    assert output.getvalue() == ""


def test_run_get_devices_timeout():
    output = io.StringIO()
    with patch("wb.nm_devices.list_devices.NetworkManager") as network_manager, patch(
        "wb.nm_devices.bus_session.dbus.SystemBus"
    ) as system_bus:
        network_manager.return_value.get_devices.side_effect = RemoteCallError(
            "org.freedesktop.DBus.Error.NoReply", "Did not receive a reply"
        )
        assert list_devices.run(ConfigFile(), output) == list_devices.EXIT_GET_DEVICES_FAILED
        system_bus.return_value.close.assert_called_once_with()
    assert output.getvalue() == ""


def test_main_uses_config_and_timeout(tmp_path):
    path = tmp_path / "wb-nm-devices.conf"
    path.write_text(json.dumps({"call_timeout_s": 5}), encoding="utf-8")
    with patch("wb.nm_devices.list_devices.run", return_value=0) as run, patch(
        "wb.nm_devices.list_devices.init_logging"
    ):
        assert list_devices.main(["-c", str(path), "--timeout", "1.5", "--json"]) == 0
    config = run.call_args[0][0]
    assert config.call_timeout == datetime.timedelta(seconds=1.5)
    assert run.call_args[0][2] is True


def test_main_bad_config(tmp_path):
    path = tmp_path / "wb-nm-devices.conf"
    path.write_text("{broken", encoding="utf-8")
    with patch("wb.nm_devices.list_devices.run") as run, patch("wb.nm_devices.list_devices.init_logging"):
        assert list_devices.main(["-c", str(path)]) == list_devices.EXIT_NOT_CONFIGURED
    run.assert_not_called()


def test_main_config_not_utf8(tmp_path):
    path = tmp_path / "wb-nm-devices.conf"
    path.write_bytes(b'{"debug": "\xff\xfe"}')
    with patch("wb.nm_devices.list_devices.run") as run, patch("wb.nm_devices.list_devices.init_logging"):
        assert list_devices.main(["-c", str(path)]) == list_devices.EXIT_NOT_CONFIGURED
    run.assert_not_called()


def test_main_bad_timeout(tmp_path):
    with patch("wb.nm_devices.list_devices.run") as run, patch("wb.nm_devices.list_devices.init_logging"):
        res = list_devices.main(["-c", str(tmp_path / "missing.conf"), "--timeout", "0"])
    assert res == list_devices.EXIT_NOT_CONFIGURED
    run.assert_not_called()
