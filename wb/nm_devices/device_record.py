from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

import dbus


def from_dbus(value):
    """Converts a value returned by dbus-python into plain Python types.

    Containers are converted recursively, byte arrays are decoded as UTF-8,
    structs become lists.
    """
    if isinstance(value, dbus.Boolean):
        return bool(value)
    if isinstance(value, (dbus.ByteArray, bytes)):
        return bytes(value).decode("utf8", errors="ignore")
    if isinstance(value, (dbus.ObjectPath, dbus.Signature, str)):
        return str(value)
    if isinstance(value, dbus.Double):
        return float(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, dict):
        return {from_dbus(k): from_dbus(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [from_dbus(v) for v in value]
    return value


def freeze(value):
    if isinstance(value, dict):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(freeze(v) for v in value)
    return value


class DeviceRecord(Mapping):
    """Snapshot of one device's properties, read once and never modified"""

    def __init__(self, path: str, properties):
        self._path = str(path)
        self._properties = freeze({str(k): from_dbus(v) for k, v in properties.items()})

    @property
    def path(self) -> str:
        return self._path

    def __getitem__(self, key):
        return self._properties[key]

    def __iter__(self):
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"DeviceRecord({self._path!r}, {dict(self._properties)!r})"
