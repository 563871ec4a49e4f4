#!/usr/bin/env python3

import setuptools


def get_version():
    with open("debian/changelog", "r", encoding="utf-8") as f:
        return f.readline().split()[1][1:-1]


setuptools.setup(
    name="wb-nm-devices",
    version=get_version(),
    description="Lists network devices known to NetworkManager over D-Bus",
    license="MIT",
    maintainer="Wiren Board Team",
    maintainer_email="info@wirenboard.com",
    url="https://github.com/wirenboard/wb-nm-devices",
    packages=["wb.nm_devices"],
    python_requires=">=3.7",
    install_requires=["dbus-python"],
    extras_require={"test": ["pytest", "python-dbusmock"]},
    entry_points={"console_scripts": ["wb-nm-devices = wb.nm_devices.list_devices:main"]},
)
