from types import MappingProxyType

UNKNOWN_LABEL = "Unknown"

# from enum NMDeviceType
NM_DEVICE_TYPE_ETHERNET = 1
NM_DEVICE_TYPE_WIFI = 2
NM_DEVICE_TYPE_BT = 5
NM_DEVICE_TYPE_OLPC_MESH = 6
NM_DEVICE_TYPE_WIMAX = 7
NM_DEVICE_TYPE_MODEM = 8

# from enum NMDeviceState
NM_DEVICE_STATE_UNKNOWN = 0
NM_DEVICE_STATE_UNMANAGED = 10
NM_DEVICE_STATE_UNAVAILABLE = 20
NM_DEVICE_STATE_DISCONNECTED = 30
NM_DEVICE_STATE_PREPARE = 40
NM_DEVICE_STATE_CONFIG = 50
NM_DEVICE_STATE_NEED_AUTH = 60
NM_DEVICE_STATE_IP_CONFIG = 70
NM_DEVICE_STATE_IP_CHECK = 80
NM_DEVICE_STATE_SECONDARIES = 90
NM_DEVICE_STATE_ACTIVATED = 100
NM_DEVICE_STATE_DEACTIVATING = 110
NM_DEVICE_STATE_FAILED = 120

DEVICE_TYPES = MappingProxyType(
    {
        NM_DEVICE_TYPE_ETHERNET: "Ethernet",
        NM_DEVICE_TYPE_WIFI: "WiFi",
        NM_DEVICE_TYPE_BT: "Bluetooth",
        NM_DEVICE_TYPE_OLPC_MESH: "OLPC",
        NM_DEVICE_TYPE_WIMAX: "WiMAX",
        NM_DEVICE_TYPE_MODEM: "Modem",
    }
)

DEVICE_STATES = MappingProxyType(
    {
        NM_DEVICE_STATE_UNKNOWN: "Unknown",
        NM_DEVICE_STATE_UNMANAGED: "Unmanaged",
        NM_DEVICE_STATE_UNAVAILABLE: "Unavailable",
        NM_DEVICE_STATE_DISCONNECTED: "Disconnected",
        NM_DEVICE_STATE_PREPARE: "Prepare",
        NM_DEVICE_STATE_CONFIG: "Config",
        NM_DEVICE_STATE_NEED_AUTH: "Need Auth",
        NM_DEVICE_STATE_IP_CONFIG: "IP Config",
        NM_DEVICE_STATE_IP_CHECK: "IP Check",
        NM_DEVICE_STATE_SECONDARIES: "Secondaries",
        NM_DEVICE_STATE_ACTIVATED: "Activated",
        NM_DEVICE_STATE_DEACTIVATING: "Deactivating",
        NM_DEVICE_STATE_FAILED: "Failed",
    }
)


def label_for(table, code) -> str:
    # bool is an int subclass, but True is not a device type
    if isinstance(code, bool) or not isinstance(code, int):
        return UNKNOWN_LABEL
    return table.get(code, UNKNOWN_LABEL)


def device_type_label(code) -> str:
    return label_for(DEVICE_TYPES, code)


def device_state_label(code) -> str:
    return label_for(DEVICE_STATES, code)
