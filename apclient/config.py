"""Session and device configuration."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field

_VERSION = "0.1.0"


def version_string() -> str:
    """The client version announced to the server."""
    return f"apclient-{_VERSION}"


@dataclass
class SessionConfig:
    user_agent: str = field(default_factory=version_string)
    device_id: str = field(default_factory=lambda: str(uuid.uuid4()))


class DeviceType(enum.IntEnum):
    UNKNOWN = 0
    COMPUTER = 1
    TABLET = 2
    SMARTPHONE = 3
    SPEAKER = 4
    TV = 5
    AVR = 6
    STB = 7
    AUDIO_DONGLE = 8

    @classmethod
    def from_str(cls, value: str) -> DeviceType:
        """Parse a device type name case-insensitively; ``Unknown`` is not accepted."""
        try:
            return _PARSEABLE[value.lower()]
        except KeyError:
            raise ValueError(f"unknown device type: {value!r}") from None

    @classmethod
    def default(cls) -> DeviceType:
        return cls.SPEAKER

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    DeviceType.UNKNOWN: "Unknown",
    DeviceType.COMPUTER: "Computer",
    DeviceType.TABLET: "Tablet",
    DeviceType.SMARTPHONE: "Smartphone",
    DeviceType.SPEAKER: "Speaker",
    DeviceType.TV: "TV",
    DeviceType.AVR: "AVR",
    DeviceType.STB: "STB",
    DeviceType.AUDIO_DONGLE: "AudioDongle",
}

_PARSEABLE = {
    name.lower(): member
    for member, name in _DISPLAY_NAMES.items()
    if member is not DeviceType.UNKNOWN
}


@dataclass
class ConnectConfig:
    name: str
    device_type: DeviceType = DeviceType.SPEAKER