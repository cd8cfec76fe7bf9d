import pytest
from serial.tools.list_ports_common import ListPortInfo

from portwatch.adapters import serial_query_pyserial
from portwatch.adapters.serial_query_pyserial import PySerialDeviceQuery
from portwatch.domain.entities import PortRecord
from portwatch.domain.errors import DeviceQueryUnavailable, DeviceReadError
from portwatch.domain.ports import PROP_FRIENDLY_NAME, PROP_PORT_NAME, SERIAL_PORT_CLASS
from portwatch.usecases.enumerate_ports import EnumeratePorts


def _port(device, description=None):
    info = ListPortInfo(device, skip_link_detection=True)
    if description is not None:
        info.description = description
    return info


def test_query_lists_comports():
    ports = [_port("COM3", "USB Serial Device (COM3)"), _port("COM1")]
    query = PySerialDeviceQuery(comports=lambda include_links=False: ports)

    handles = query.query_present_devices(SERIAL_PORT_CLASS)

    assert handles == ports
    assert query.read_string_property(handles[0], PROP_PORT_NAME) == "COM3"
    assert query.read_string_property(handles[0], PROP_FRIENDLY_NAME) == "USB Serial Device (COM3)"
    # pyserial reports "n/a" for unknown descriptions
    assert query.read_string_property(handles[1], PROP_FRIENDLY_NAME) is None


def test_query_wraps_backend_errors():
    def _boom(include_links=False):
        raise OSError("SetupDiGetClassDevs failed")

    query = PySerialDeviceQuery(comports=_boom)

    with pytest.raises(DeviceQueryUnavailable):
        query.query_present_devices(SERIAL_PORT_CLASS)


def test_query_other_device_class_is_empty():
    query = PySerialDeviceQuery(comports=lambda include_links=False: [_port("COM3")])

    assert query.query_present_devices("HIDClass") == []


def test_unknown_property_raises_read_error():
    query = PySerialDeviceQuery(comports=lambda include_links=False: [])

    with pytest.raises(DeviceReadError):
        query.read_string_property(_port("COM3"), "ContainerID")
    with pytest.raises(DeviceReadError):
        query.read_string_property(_port("COM3"), "Manufacturer")


def test_default_uses_pyserial_comports(monkeypatch):
    calls = []

    def _fake_comports(include_links=False):
        calls.append(include_links)
        return [_port("COM4", "Bluetooth"), _port("COM3", "USB Serial")]

    monkeypatch.setattr(serial_query_pyserial.serial.tools.list_ports, "comports", _fake_comports)
    uc = EnumeratePorts(PySerialDeviceQuery(include_links=True), port_prefixes=("COM",))

    assert list(uc()) == [PortRecord("COM3", "USB Serial"), PortRecord("COM4", "Bluetooth")]
    assert calls == [True]
