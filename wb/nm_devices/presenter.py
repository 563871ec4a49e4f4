from collections.abc import Mapping
from typing import Dict, List

from .enums import device_state_label, device_type_label

SEPARATOR = "============================"


def text_field(record: Mapping, name: str) -> str:
    value = record.get(name)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def to_summary(record: Mapping) -> Dict:
    return {
        "path": getattr(record, "path", ""),
        "interface": text_field(record, "Interface"),
        "type": device_type_label(record.get("DeviceType")),
        "driver": text_field(record, "Driver"),
        "state": device_state_label(record.get("State")),
    }


def render(record: Mapping) -> List[str]:
    summary = to_summary(record)
    return [
        SEPARATOR,
        f"Interface: {summary['interface']}",
        f"Type: {summary['type']}",
        f"Driver: {summary['driver']}",
        f"State: {summary['state']}",
    ]


def render_failure(path: str, error: Exception) -> str:
    return f"Device {path}: failed to read properties ({error})"
