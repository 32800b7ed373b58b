"""Block headers, their encoding and proof-of-work mining."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .bigint import bigint_from_compact, bigint_from_hash
from .buffer import BufferReader, BufferReaderError, BufferWriter
from .hashing import Hash

logger = logging.getLogger(__name__)

MAX_MINING_ITERATIONS = 42_949_000
_U64_MASK = (1 << 64) - 1
_I64_SIGN = 1 << 63


class MainheaderError(Exception):
    """Raised when a header cannot be decoded or produced."""


class MiningUnsuccessfulError(MainheaderError):
    """Raised when no nonce meeting the target was found."""

    def __init__(self) -> None:
        super().__init__("Mining unsuccessful")


def _timestamp_to_u64(timestamp: int) -> int:
    return timestamp & _U64_MASK


def _timestamp_from_u64(raw: int) -> int:
    return raw - (1 << 64) if raw & _I64_SIGN else raw


def _write_fields(
    writer: BufferWriter,
    version: int,
    prev_hash: Hash,
    root_hash: Hash,
    timestamp: int,
    bits: int,
) -> None:
    writer.put_var_u32(version)
    writer.put_hash(prev_hash)
    writer.put_hash(root_hash)
    writer.put_u64(_timestamp_to_u64(timestamp))
    writer.put_u32(bits)


@dataclass(frozen=True)
class Mainheader:
    """A block header together with its claimed hash."""

    version: int
    prev_hash: Hash
    root_hash: Hash
    timestamp: int
    bits: int
    nonce: int
    hash: Hash

    def check_hash(self) -> bool:
        """Tell whether the stored hash matches the header content."""
        computed = self.compute_hash()
        logger.debug("check_hash stored=%s computed=%s", self.hash, computed)
        return self.hash == computed

    def check_target(self) -> bool:
        """Tell whether the stored hash is strictly below the target in ``bits``."""
        target = bigint_from_compact(self.bits)
        value = bigint_from_hash(self.hash)
        logger.debug("check_target target=%d hash=%d", target, value)
        return value < target

    def compute_hash(self) -> Hash:
        """Return the hash of every field except the stored hash."""
        writer = BufferWriter()
        _write_fields(
            writer, self.version, self.prev_hash, self.root_hash, self.timestamp, self.bits
        )
        writer.put_u32(self.nonce)
        return Hash.compute(writer.getvalue())

    def serialize(self) -> bytes:
        """Return the full encoding, stored hash included."""
        writer = BufferWriter()
        _write_fields(
            writer, self.version, self.prev_hash, self.root_hash, self.timestamp, self.bits
        )
        writer.put_u32(self.nonce)
        writer.put_hash(self.hash)
        return writer.getvalue()


def unserialize_mainheader(raw: bytes) -> Mainheader:
    """Decode a header produced by :meth:`Mainheader.serialize`."""
    reader = BufferReader(raw)
    try:
        version = reader.get_var_u32()
        prev_hash = reader.get_hash()
        root_hash = reader.get_hash()
        timestamp = _timestamp_from_u64(reader.get_u64())
        bits = reader.get_u32()
        nonce = reader.get_u32()
        hash_value = reader.get_hash()
    except BufferReaderError as exc:
        raise MainheaderError(f"Buffer reader error: {exc}") from exc
    return Mainheader(version, prev_hash, root_hash, timestamp, bits, nonce, hash_value)


def mine_mainheader_with_cpu(
    version: int, prev_hash: Hash, root_hash: Hash, timestamp: int, bits: int
) -> Mainheader:
    """Search nonces from 2 upwards for a hash below the target in ``bits``."""
    writer = BufferWriter()
    _write_fields(writer, version, prev_hash, root_hash, timestamp, bits)
    prefix = writer.getvalue()
    target = bigint_from_compact(bits)

    for nonce in range(2, MAX_MINING_ITERATIONS + 2):
        candidate = Hash.compute(prefix + nonce.to_bytes(4, "little"))
        if bigint_from_hash(candidate) < target:
            return Mainheader(
                version, prev_hash, root_hash, timestamp, bits, nonce, candidate
            )
    raise MiningUnsuccessfulError()