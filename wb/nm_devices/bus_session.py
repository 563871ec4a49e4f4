from __future__ import annotations

import datetime
import logging
from typing import Optional

import dbus

from .exceptions import (
    BusConnectionError,
    IntrospectionError,
    RemoteCallError,
    ServiceNotFoundError,
)

NM_SERVICE_NAME = "org.freedesktop.NetworkManager"
DBUS_PROPERTIES_IFACE = "org.freedesktop.DBus.Properties"
DBUS_INTROSPECTABLE_IFACE = "org.freedesktop.DBus.Introspectable"

DEFAULT_CALL_TIMEOUT = datetime.timedelta(seconds=25)


class BusSession:
    """Owns one private connection to the system bus.

    Use it as a context manager so the connection is closed on every exit path::

        with BusSession() as session:
            service = session.resolve_service(NM_SERVICE_NAME)
            root = session.resolve_object(service, "/org/freedesktop/NetworkManager")
    """

    def __init__(self, call_timeout: datetime.timedelta = DEFAULT_CALL_TIMEOUT):
        self.call_timeout = call_timeout
        self.bus: Optional[dbus.bus.BusConnection] = None

    def __enter__(self) -> BusSession:
        return self.connect()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def connect(self) -> BusSession:
        if self.bus is None:
            try:
                self.bus = dbus.SystemBus(private=True)
            except dbus.exceptions.DBusException as ex:
                raise BusConnectionError(f"Unable to connect to the system bus: {ex}") from ex
            logging.debug("Connected to the system bus as %s", self.bus.get_unique_name())
        return self

    def close(self) -> None:
        if self.bus is not None:
            bus, self.bus = self.bus, None
            bus.close()
            logging.debug("System bus connection closed")

    def get_bus(self) -> dbus.bus.BusConnection:
        if self.bus is None:
            raise BusConnectionError("Bus session is not connected")
        return self.bus

    def resolve_service(self, name: str) -> ServiceHandle:
        try:
            owner = self.get_bus().activate_name_owner(name)
        except dbus.exceptions.DBusException as ex:
            raise ServiceNotFoundError(name, ex.get_dbus_message() or str(ex)) from ex
        logging.debug("Service %s is owned by %s", name, owner)
        return ServiceHandle(self, name)

    def resolve_object(self, service: ServiceHandle, path: str) -> ObjectHandle:
        if service.session is not self:
            raise ValueError(f"Service {service.name} belongs to another bus session")
        return ObjectHandle(service, path)


class ServiceHandle:
    # pylint: disable=too-few-public-methods

    def __init__(self, session: BusSession, name: str):
        self.session = session
        self.name = name

    def __repr__(self) -> str:
        return f"ServiceHandle({self.name!r})"


class ObjectHandle:
    def __init__(self, service: ServiceHandle, path: str):
        self.service = service
        self.path = str(path)
        self.obj = None

    def __repr__(self) -> str:
        return f"ObjectHandle({self.service.name!r}, {self.path!r})"

    def get_path(self) -> str:
        return self.path

    def get_object(self):
        if self.obj is None:
            # introspection is an explicit step, see introspect()
            self.obj = self.service.session.get_bus().get_object(
                self.service.name, self.path, introspect=False
            )
        return self.obj

    def call(self, interface_name: str, method_name: str, *args):
        timeout = self.service.session.call_timeout.total_seconds()
        logging.debug("Calling %s.%s on %s", interface_name, method_name, self.path)
        try:
            method = self.get_object().get_dbus_method(method_name, interface_name)
            return method(*args, timeout=timeout)
        except dbus.exceptions.DBusException as ex:
            raise RemoteCallError.from_dbus_exception(ex) from ex

    def introspect(self) -> str:
        try:
            return str(self.call(DBUS_INTROSPECTABLE_IFACE, "Introspect"))
        except RemoteCallError as ex:
            raise IntrospectionError(self.path, str(ex)) from ex

    def get_all_properties(self, interface_name: str):
        return self.call(DBUS_PROPERTIES_IFACE, "GetAll", interface_name)
