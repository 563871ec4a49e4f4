from __future__ import annotations

import logging
from typing import List

import dbus

from .bus_session import NM_SERVICE_NAME, BusSession, ObjectHandle
from .device_record import DeviceRecord
from .exceptions import ERROR_MALFORMED_REPLY, IntrospectionError, RemoteCallError

NM_PATH = "/org/freedesktop/NetworkManager"
NM_IFACE = "org.freedesktop.NetworkManager"
NM_DEVICE_IFACE = "org.freedesktop.NetworkManager.Device"


def list_devices(root: ObjectHandle) -> List[ObjectHandle]:
    paths = root.call(NM_IFACE, "GetDevices")
    if not isinstance(paths, (list, tuple)):
        raise RemoteCallError(ERROR_MALFORMED_REPLY, f"GetDevices returned {type(paths).__name__}")
    session = root.service.session
    res = []
    for path in paths:
        # dbus.ObjectPath validates its value on construction
        if not isinstance(path, dbus.ObjectPath):
            raise RemoteCallError(ERROR_MALFORMED_REPLY, f"GetDevices returned non-path item {path!r}")
        res.append(session.resolve_object(root.service, path))
    logging.debug("NetworkManager reports %d device(s)", len(res))
    return res


def introspect(obj: ObjectHandle) -> None:
    obj.introspect()


def get_all_properties(obj: ObjectHandle, interface_name: str = NM_DEVICE_IFACE) -> DeviceRecord:
    props = obj.get_all_properties(interface_name)
    if not isinstance(props, dict):
        raise RemoteCallError(
            ERROR_MALFORMED_REPLY, f"GetAll({interface_name}) returned {type(props).__name__}"
        )
    return DeviceRecord(obj.get_path(), props)


def read_device(obj: ObjectHandle, interface_name: str = NM_DEVICE_IFACE) -> DeviceRecord:
    """Reads all properties of a device.

    Introspection failures are tolerated; the result of the GetAll call decides the outcome.
    """
    try:
        introspect(obj)
    except IntrospectionError as ex:
        logging.debug("%s, trying direct property access", ex)
    return get_all_properties(obj, interface_name)


class NetworkManager:
    def __init__(self, session: BusSession, service_name: str = NM_SERVICE_NAME):
        self.session = session
        self.service = session.resolve_service(service_name)
        self.root = session.resolve_object(self.service, NM_PATH)

    def get_devices(self) -> List[ObjectHandle]:
        try:
            introspect(self.root)
        except IntrospectionError as ex:
            logging.debug("%s, calling GetDevices anyway", ex)
        return list_devices(self.root)

    def read_device(self, device: ObjectHandle) -> DeviceRecord:
        return read_device(device)
