from typing import Optional

import dbus

DBUS_ERROR_NO_REPLY = "org.freedesktop.DBus.Error.NoReply"
DBUS_ERROR_TIMEOUT = "org.freedesktop.DBus.Error.Timeout"
DBUS_ERROR_TIMED_OUT = "org.freedesktop.DBus.Error.TimedOut"

ERROR_MALFORMED_REPLY = "wb.nm_devices.Error.MalformedReply"


class NMClientError(Exception):
    pass


class BusConnectionError(NMClientError):
    pass


class ServiceNotFoundError(NMClientError):
    def __init__(self, service_name: str, message: str = ""):
        NMClientError.__init__(self, f"Service {service_name} is not available on the bus: {message}")
        self.service_name = service_name


class IntrospectionError(NMClientError):
    def __init__(self, path: str, message: str = ""):
        NMClientError.__init__(self, f"Introspection of {path} failed: {message}")
        self.path = path


class RemoteCallError(NMClientError):
    """A remote method call failed, timed out or returned something unusable.

    ``name`` is the D-Bus error name (e.g. ``org.freedesktop.DBus.Error.AccessDenied``)
    when the bus reported one.
    """

    def __init__(self, name: Optional[str], message: str):
        NMClientError.__init__(self, f"{name}: {message}" if name else message)
        self.name = name
        self.message = message

    @property
    def is_timeout(self) -> bool:
        return self.name in (DBUS_ERROR_NO_REPLY, DBUS_ERROR_TIMEOUT, DBUS_ERROR_TIMED_OUT)

    @staticmethod
    def from_dbus_exception(ex: dbus.exceptions.DBusException) -> "RemoteCallError":
        return RemoteCallError(ex.get_dbus_name(), ex.get_dbus_message() or str(ex))
