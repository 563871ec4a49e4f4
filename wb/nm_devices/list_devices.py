import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from .bus_session import BusSession
from .config import (
    CONFIG_FILE,
    ConfigFile,
    ImproperlyConfigured,
    parse_timeout,
    read_config_json,
)
from .exceptions import BusConnectionError, RemoteCallError, ServiceNotFoundError
from .network_manager import NetworkManager
from .presenter import render, render_failure, to_summary

EXIT_OK = 0
EXIT_BUS_CONNECTION_FAILED = 1
EXIT_SERVICE_NOT_FOUND = 2
EXIT_GET_DEVICES_FAILED = 3
EXIT_DEVICE_READ_FAILED = 4
EXIT_NOT_CONFIGURED = 6

LOGGING_FORMAT = "%(message)s"


def init_logging(debug: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOGGING_FORMAT)


def print_devices(network_manager: NetworkManager, output: TextIO, as_json: bool, indent: int) -> int:
    devices = []
    errors = []
    for device in network_manager.get_devices():
        try:
            record = network_manager.read_device(device)
        except RemoteCallError as ex:
            logging.warning("Reading properties of %s failed: %s", device.get_path(), ex)
            errors.append({"path": device.get_path(), "error": str(ex)})
            if not as_json:
                print(render_failure(device.get_path(), ex), file=output)
            continue
        if as_json:
            devices.append(to_summary(record))
        else:
            for line in render(record):
                print(line, file=output)

    if as_json:
        json.dump({"devices": devices, "errors": errors}, output, sort_keys=True, indent=indent)
        output.write("\n")
    return EXIT_DEVICE_READ_FAILED if errors else EXIT_OK


def run(config: ConfigFile, output: TextIO = sys.stdout, as_json: bool = False, indent: int = 2) -> int:
    try:
        with BusSession(config.call_timeout) as session:
            network_manager = NetworkManager(session, config.service_name)
            return print_devices(network_manager, output, as_json, indent)
    except BusConnectionError as ex:
        logging.error("%s", ex)
        return EXIT_BUS_CONNECTION_FAILED
    except ServiceNotFoundError as ex:
        logging.error("%s. Is NetworkManager running?", ex)
        return EXIT_SERVICE_NOT_FOUND
    except RemoteCallError as ex:
        if ex.is_timeout:
            logging.error("Timed out waiting for the device list: %s", ex)
        else:
            logging.error("Unable to get the device list: %s", ex)
        return EXIT_GET_DEVICES_FAILED


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="List network devices known to NetworkManager",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("-c", "--config", type=str, default=CONFIG_FILE, help="Config file")
    parser.add_argument("--timeout", type=float, default=None, help="D-Bus call timeout in seconds")
    parser.add_argument("--json", action="store_true", help="Print devices as JSON")
    parser.add_argument("--indent", type=int, default=2, help="Indentation level for JSON output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = ConfigFile()
    try:
        config.load_config(read_config_json(args.config))
        if args.timeout is not None:
            config.call_timeout = parse_timeout(args.timeout, "--timeout")
    except (
        PermissionError,
        OSError,
        UnicodeDecodeError,
        json.decoder.JSONDecodeError,
        ImproperlyConfigured,
    ) as ex:
        init_logging(args.debug)
        logging.error("Loading %s failed: %s", args.config, ex)
        return EXIT_NOT_CONFIGURED

    init_logging(config.debug or args.debug)
    return run(config, sys.stdout, args.json, args.indent)


if __name__ == "__main__":
    sys.exit(main())  # pragma: no cover
