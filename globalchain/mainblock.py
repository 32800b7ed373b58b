"""Blocks: a header followed by its transactions."""

from __future__ import annotations

from dataclasses import dataclass, field

from .buffer import BufferReader, BufferReaderError, BufferWriter
from .hashing import Hash
from .maintx import Maintx, MaintxError, unserialize_maintx
from .mainheader import Mainheader, MainheaderError, unserialize_mainheader


class MainblockError(Exception):
    """Raised when a block cannot be decoded."""


@dataclass
class Mainblock:
    """A block header and the transactions it confirms."""

    header: Mainheader
    transactions: list[Maintx] = field(default_factory=list)

    def check_hash(self) -> bool:
        """Tell whether the header's stored hash matches its content."""
        return self.header.check_hash()

    def check_target(self) -> bool:
        """Tell whether the header's hash meets its target."""
        return self.header.check_target()

    @property
    def hash(self) -> Hash:
        """The hash stored in the header."""
        return self.header.hash

    def serialize(self) -> bytes:
        """Return the sized header followed by the counted, sized transactions."""
        writer = BufferWriter()
        writer.put_var_bytes(self.header.serialize())
        writer.put_var_u64(len(self.transactions))
        for tx in self.transactions:
            writer.put_var_bytes(tx.serialize())
        return writer.getvalue()


def unserialize_mainblock(raw: bytes) -> Mainblock:
    """Decode a block produced by :meth:`Mainblock.serialize`."""
    reader = BufferReader(raw)
    try:
        header = unserialize_mainheader(reader.get_var_bytes())
        count = reader.get_var_u64()
        transactions = [
            unserialize_maintx(reader.get_bytes(reader.get_var_u64()))
            for _ in range(count)
        ]
    except BufferReaderError as exc:
        raise MainblockError(f"Buffer reader error: {exc}") from exc
    except MainheaderError as exc:
        raise MainblockError(f"Mainheader error: {exc}") from exc
    except MaintxError as exc:
        raise MainblockError(f"Maintx error: {exc}") from exc
    return Mainblock(header, transactions)


def compute_hash_mainblock_info(
    version: int,
    prev_hash: Hash,
    root_hash: Hash,
    timestamp: int,
    bits: int,
    nonce: int,
) -> Hash:
    """Hash block header fields with the version as a fixed 32-bit value."""
    writer = BufferWriter()
    writer.put_u32(version)
    writer.put_hash(prev_hash)
    writer.put_hash(root_hash)
    writer.put_u64(timestamp & ((1 << 64) - 1))
    writer.put_u32(bits)
    writer.put_u32(nonce)
    return Hash.compute(writer.getvalue())