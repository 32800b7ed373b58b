"""Hierarchical secp256k1 secret key derivation from a seed phrase."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass, field

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

HARDENED_OFFSET = 0x80000000
PBKDF2_ITERATIONS = 2000
SALT = b"crypto_wallet_salt"
SECRET_KEY_SIZE = 32
CHAIN_CODE_SIZE = 32

_MASTER_HMAC_KEY = b"Crypto seed"
_CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_U32_MAX = 0xFFFFFFFF


class KeyDerivationError(Exception):
    """Raised when a key cannot be derived."""


@dataclass(frozen=True)
class ExtendedSecretKey:
    """A secp256k1 secret key paired with its chain code."""

    secret_key: bytes = field(repr=False)
    chain_code: bytes = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "secret_key", bytes(self.secret_key))
        object.__setattr__(self, "chain_code", bytes(self.chain_code))
        if len(self.secret_key) != SECRET_KEY_SIZE:
            raise ValueError(f"secret key must be {SECRET_KEY_SIZE} bytes")
        if len(self.chain_code) != CHAIN_CODE_SIZE:
            raise ValueError(f"chain code must be {CHAIN_CODE_SIZE} bytes")


def _secret_scalar(raw: bytes) -> int:
    value = int.from_bytes(raw, "big")
    if not 0 < value < _CURVE_ORDER:
        raise KeyDerivationError("Invalid secret key derived")
    return value


def _compressed_public_key(secret: int) -> bytes:
    private_key = ec.derive_private_key(secret, ec.SECP256K1())
    return private_key.public_key().public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
    )


def derive_master_extended_secret_key(seed: str) -> ExtendedSecretKey:
    """Derive the master key from a seed phrase via PBKDF2 and HMAC-SHA512."""
    master_seed = hashlib.pbkdf2_hmac(
        "sha512", seed.encode("utf-8"), SALT, PBKDF2_ITERATIONS, dklen=64
    )
    digest = hmac.new(_MASTER_HMAC_KEY, master_seed, hashlib.sha512).digest()
    secret_key, chain_code = digest[:SECRET_KEY_SIZE], digest[SECRET_KEY_SIZE:]
    _secret_scalar(secret_key)
    return ExtendedSecretKey(secret_key, chain_code)


def derive_child_extended_secret_key(
    parent: ExtendedSecretKey, index: int, hardened: bool
) -> ExtendedSecretKey:
    """Derive the child key at ``index``.

    Hardened derivation mixes in the parent secret key and requires an index
    of at least ``HARDENED_OFFSET``; normal derivation uses the parent's
    compressed public key.
    """
    if not 0 <= index <= _U32_MAX:
        raise ValueError(f"index {index} does not fit in 32 unsigned bits")
    if hardened and index < HARDENED_OFFSET:
        raise KeyDerivationError("Hardened derivation requires index >= 0x80000000")

    mac = hmac.new(parent.chain_code, digestmod=hashlib.sha512)
    if hardened:
        mac.update(b"\x00" + parent.secret_key)
    else:
        mac.update(_compressed_public_key(_secret_scalar(parent.secret_key)))
    mac.update(index.to_bytes(4, "big"))
    digest = mac.digest()

    tweak = int.from_bytes(digest[:SECRET_KEY_SIZE], "big")
    if tweak >= _CURVE_ORDER:
        raise KeyDerivationError("Invalid tweak value")
    child = (_secret_scalar(parent.secret_key) + tweak) % _CURVE_ORDER
    if child == 0:
        raise KeyDerivationError("Invalid resulting secret key")
    return ExtendedSecretKey(
        child.to_bytes(SECRET_KEY_SIZE, "big"), digest[SECRET_KEY_SIZE:]
    )