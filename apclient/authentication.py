"""Login credentials: construction, stored-blob decoding and JSON persistence."""

from __future__ import annotations

import base64
import binascii
import getpass
import hashlib
import io
import json
import os
import struct
import sys
from dataclasses import dataclass
from typing import IO

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

AUTHENTICATION_USER_PASS = 0

_BLOCK_SIZE = 16
_PBKDF2_ITERATIONS = 0x100
_TEXT_ENCODING = "utf-8"


@dataclass
class Credentials:
    """A username with an authentication type and its opaque data."""

    username: str
    auth_type: int
    auth_data: bytes

    def __post_init__(self) -> None:
        self.auth_data = bytes(self.auth_data)

    @classmethod
    def with_password(cls, username: str, password: str) -> Credentials:
        return cls(username, AUTHENTICATION_USER_PASS, password.encode(_TEXT_ENCODING))

    @classmethod
    def with_blob(cls, username: str, encrypted_blob: str, device_id: str) -> Credentials:
        """Decode a base64 blob that was encrypted for this username and device."""
        try:
            encrypted = base64.b64decode(encrypted_blob, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"invalid base64 blob: {exc}") from exc
        if not encrypted or len(encrypted) % _BLOCK_SIZE:
            raise ValueError("encrypted blob length must be a positive multiple of 16")

        device_digest = hashlib.sha1(device_id.encode(_TEXT_ENCODING)).digest()
        derived = hashlib.pbkdf2_hmac(
            "sha1", device_digest, username.encode(_TEXT_ENCODING), _PBKDF2_ITERATIONS, 20
        )
        cipher_material = hashlib.sha1(derived).digest() + struct.pack(">I", 20)

        decryptor = Cipher(algorithms.AES(cipher_material), modes.ECB()).decryptor()
        blob = bytearray(decryptor.update(encrypted) + decryptor.finalize())
        length = len(blob)
        for index in range(length - 1, _BLOCK_SIZE - 1, -1):
            blob[index] ^= blob[index - _BLOCK_SIZE]

        reader = _BlobReader(bytes(blob))
        reader.read_u8()
        reader.read_bytes()
        reader.read_u8()
        auth_type = reader.read_int()
        reader.read_u8()
        auth_data = reader.read_bytes()
        return cls(username, auth_type, auth_data)

    @classmethod
    def from_reader(cls, reader: IO) -> Credentials:
        """Load credentials from a stream holding their JSON form."""
        contents = reader.read()
        if isinstance(contents, bytes):
            contents = contents.decode(_TEXT_ENCODING)
        try:
            document = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid credentials JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise ValueError("credentials JSON must be an object")
        try:
            username = document["username"]
            auth_type = document["auth_type"]
            auth_data = document["auth_data"]
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from exc
        if not isinstance(username, str):
            raise ValueError("username must be a string")
        if not isinstance(auth_type, int) or isinstance(auth_type, bool):
            raise ValueError("Invalid enum value")
        if not isinstance(auth_data, str):
            raise ValueError("auth_data must be a base64 string")
        try:
            data = base64.b64decode(auth_data, validate=True)
        except binascii.Error as exc:
            raise ValueError(str(exc)) from exc
        return cls(username, auth_type, data)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Credentials | None:
        """Load credentials from a file, or return None if it cannot be opened."""
        try:
            handle = open(path, "r", encoding=_TEXT_ENCODING)
        except OSError:
            return None
        with handle:
            return cls.from_reader(handle)

    def _to_json(self) -> str:
        document = {
            "username": self.username,
            "auth_type": self.auth_type,
            "auth_data": base64.b64encode(self.auth_data).decode("ascii"),
        }
        return json.dumps(document, separators=(",", ":"))

    def save_to_writer(self, writer: IO) -> None:
        contents = self._to_json()
        if isinstance(writer, io.TextIOBase):
            writer.write(contents)
        else:
            writer.write(contents.encode(_TEXT_ENCODING))

    def save_to_file(self, path: str | os.PathLike[str]) -> None:
        with open(path, "w", encoding=_TEXT_ENCODING) as handle:
            self.save_to_writer(handle)


class _BlobReader:
    def __init__(self, data: bytes) -> None:
        self._stream = io.BytesIO(data)

    def _read_exact(self, size: int) -> bytes:
        chunk = self._stream.read(size)
        if len(chunk) != size:
            raise ValueError("truncated credentials blob")
        return chunk

    def read_u8(self) -> int:
        return self._read_exact(1)[0]

    def read_int(self) -> int:
        low = self.read_u8()
        if low & 0x80 == 0:
            return low
        high = self.read_u8()
        return (low & 0x7F) | (high << 7)

    def read_bytes(self) -> bytes:
        return self._read_exact(self.read_int())


def get_credentials(
    username: str | None,
    password: str | None,
    cached_credentials: Credentials | None,
) -> Credentials | None:
    """Pick credentials from arguments or cache, prompting for a missing password."""
    if username is not None and password is not None:
        return Credentials.with_password(username, password)
    if (
        username is not None
        and cached_credentials is not None
        and username == cached_credentials.username
    ):
        return cached_credentials
    if username is not None:
        entered = getpass.getpass(f"Password for {username}: ", stream=sys.stderr)
        return Credentials.with_password(username, entered)
    return cached_credentials