"""Track and file identifiers with their textual and raw encodings."""

from __future__ import annotations

from dataclasses import dataclass

BASE62_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE16_DIGITS = "0123456789abcdef"

_MAX_ID = (1 << 128) - 1
_FILE_ID_SIZE = 20


def _parse(value: str, digits: str) -> int:
    if not value.isascii():
        raise ValueError(f"identifier is not ASCII: {value!r}")
    base = len(digits)
    number = 0
    for char in value:
        digit = digits.find(char)
        if digit < 0:
            raise ValueError(f"invalid digit {char!r} in {value!r}")
        number = number * base + digit
        if number > _MAX_ID:
            raise ValueError(f"identifier {value!r} does not fit in 128 bits")
    return number


@dataclass(frozen=True)
class SpotifyId:
    """A 128-bit identifier."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _MAX_ID:
            raise ValueError("identifier must fit in 128 unsigned bits")

    @classmethod
    def from_base16(cls, value: str) -> SpotifyId:
        return cls(_parse(value, BASE16_DIGITS))

    @classmethod
    def from_base62(cls, value: str) -> SpotifyId:
        return cls(_parse(value, BASE62_DIGITS))

    @classmethod
    def from_raw(cls, data: bytes) -> SpotifyId:
        if len(data) != 16:
            raise ValueError(f"raw identifier must be 16 bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    def to_base16(self) -> str:
        return f"{self.value:032x}"

    def to_raw(self) -> bytes:
        return self.value.to_bytes(16, "big")


@dataclass(frozen=True, order=True)
class FileId:
    """A 20-byte file identifier."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != _FILE_ID_SIZE:
            raise ValueError(
                f"file id must be {_FILE_ID_SIZE} bytes, got {len(self.data)}"
            )
        object.__setattr__(self, "data", bytes(self.data))

    def to_base16(self) -> str:
        return self.data.hex()

    def __str__(self) -> str:
        return self.to_base16()

    def __repr__(self) -> str:
        return f"FileId({self.to_base16()!r})"