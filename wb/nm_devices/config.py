import datetime
import json
from typing import Dict

from .bus_session import DEFAULT_CALL_TIMEOUT, NM_SERVICE_NAME

CONFIG_FILE = "/etc/wb-nm-devices.conf"


class ImproperlyConfigured(ValueError):
    pass


def read_config_json(file_name: str = CONFIG_FILE) -> Dict:
    """Returns an empty config if the file does not exist; other read errors are propagated"""
    try:
        with open(file_name, encoding="utf-8") as file:
            cfg = json.load(file)
    except FileNotFoundError:
        return {}
    if not isinstance(cfg, dict):
        raise ImproperlyConfigured(f"{file_name} must contain a JSON object")
    return cfg


class ConfigFile:
    def __init__(self) -> None:
        self.debug = False
        self.call_timeout = DEFAULT_CALL_TIMEOUT
        self.service_name = NM_SERVICE_NAME

    def load_config(self, cfg: Dict):
        self.debug = bool(cfg.get("debug", False))
        self.call_timeout = self.get_call_timeout(cfg)
        self.service_name = self.get_service_name(cfg)

    @staticmethod
    def get_call_timeout(cfg: Dict) -> datetime.timedelta:
        if "call_timeout_s" not in cfg:
            return DEFAULT_CALL_TIMEOUT
        return parse_timeout(cfg["call_timeout_s"], "call_timeout_s")

    @staticmethod
    def get_service_name(cfg: Dict) -> str:
        value = cfg.get("service_name", NM_SERVICE_NAME)
        if not isinstance(value, str) or not value:
            raise ImproperlyConfigured(f"Bad service_name {value!r}")
        return value


def parse_timeout(seconds, name: str = "timeout") -> datetime.timedelta:
    try:
        if isinstance(seconds, bool):
            raise TypeError("boolean is not a number")
        value = datetime.timedelta(seconds=float(seconds))
    except Exception as e:
        raise ImproperlyConfigured(f"Incorrect {name} ({seconds}): {e}") from e
    if value <= datetime.timedelta(0):
        raise ImproperlyConfigured(f"Incorrect {name} ({seconds}): must be positive")
    return value
