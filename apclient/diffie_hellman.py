"""Diffie-Hellman key agreement over the 768-bit MODP group."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .util import powm, rand_vec

_BIG = "big"

DH_GENERATOR = 2
DH_PRIME = int.from_bytes(
    bytes.fromhex(
        "ffffffffffffffffc9"
        "0fdaa22168c234c4c6"
        "628b80dc1cd129024e"
        "088a67cc74020bbea6"
        "3b139b22514a08798e"
        "3404ddef9519b3cd3a"
        "431b302b0a6df25f14"
        "374fe1356d6d51c245"
        "e485b576625e7ec6f4"
        "4c42e9a63a3620ffff"
        "ffffffffffff"
    ),
    _BIG,
)

_PRIVATE_KEY_SIZE = 95


def _to_bytes_be(number: int) -> bytes:
    return number.to_bytes(max(1, (number.bit_length() + 7) // 8), _BIG)


@dataclass(frozen=True)
class DHLocalKeys:
    """A local private key with its matching public key."""

    private_key: int = field(repr=False)
    public_key_value: int

    @classmethod
    def random(cls, rng: random.Random | None = None) -> DHLocalKeys:
        exponent = int.from_bytes(rand_vec(_PRIVATE_KEY_SIZE, rng), _BIG)
        public_value = powm(DH_GENERATOR, exponent, DH_PRIME)
        return cls(exponent, public_value)

    def public_key(self) -> bytes:
        """The public key as minimal big-endian bytes."""
        return _to_bytes_be(self.public_key_value)

    def shared_secret(self, remote_key: bytes) -> bytes:
        """The shared secret for the remote party's public key."""
        remote = int.from_bytes(remote_key, _BIG)
        return _to_bytes_be(powm(remote, self.private_key, DH_PRIME))