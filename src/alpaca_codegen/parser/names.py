"""Canonical method names from the ASCOM Alpaca simulators XML docs.

The Alpaca API paths are all lower case (``/camera/{device_number}/bayeroffsetx``)
while the existing drivers use the C# method names (``BayerOffsetX``). The
simulators' generated documentation lists every controller method, so it is
scanned for member ids and used as the authoritative casing.
"""

import re
from pathlib import Path

from alpaca_codegen.errors import InvariantError

DEVICE_METHOD = re.compile(r"M:ASCOM\.Alpaca\.Simulators\.(\w+?)(?:Controller)?\.(\w+)\(")
GENERIC_METHOD = re.compile(r"M:Alpaca\.AlpacaController\.(\w+)\(")

# Group of the /{device_type}/{device_number}/... paths shared by all devices.
GENERIC_GROUP = "{device_type}"


class CanonicalDevice:
    """Canonical method names of one device type."""

    def __init__(self, name: str):
        self.name = name
        self._methods: dict[str, str] = {}

    def register_method(self, method: str) -> None:
        self._methods[method.lower()] = method

    def get_method(self, sub_path: str) -> str | None:
        return self._methods.get(sub_path.lower())

    def __len__(self) -> int:
        return len(self._methods)


class CanonicalNames:
    """Case-insensitive lookup: device group -> sub-path -> method name."""

    def __init__(self):
        self._devices: dict[str, CanonicalDevice] = {}

    def register_device(self, name: str) -> CanonicalDevice:
        return self._devices.setdefault(name.lower(), CanonicalDevice(name))

    def get_device(self, group: str) -> CanonicalDevice | None:
        return self._devices.get(group.lower())

    def resolve(self, group: str, sub_path: str) -> str:
        device = self.get_device(group)
        if device is None:
            raise InvariantError(f"Couldn't find canonical device {group!r} (for sub-path {sub_path!r})")
        method = device.get_method(sub_path)
        if method is None:
            raise InvariantError(f"Couldn't find canonical name for {group}::{sub_path}")
        return method

    def resolve_path(self, path: str) -> str:
        return self.resolve(*operation_group(path))

    def devices(self) -> list[str]:
        return sorted(device.name for device in self._devices.values())


def operation_group(path: str) -> tuple[str, str]:
    """/camera/{device_number}/bayeroffsetx -> ("camera", "bayeroffsetx")"""
    segments = [s for s in path.split("/")[1:] if s]
    if len(segments) < 2:
        raise InvariantError(f"Path {path!r} has no device group and sub-path")
    return segments[0], segments[-1]


def parse_canonical_names(text: str) -> CanonicalNames:
    """Scan simulator XML docs for device-scoped and generic controller methods."""
    canonical = CanonicalNames()

    for device, method in DEVICE_METHOD.findall(text):
        canonical.register_device(device).register_method(method)

    generic = canonical.register_device(GENERIC_GROUP)
    for method in GENERIC_METHOD.findall(text):
        generic.register_method(method)

    return canonical


def load_canonical_names(file_path: Path) -> CanonicalNames:
    return parse_canonical_names(file_path.read_text(encoding="utf-8"))
