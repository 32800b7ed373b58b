"""Transaction outputs and their binary encoding."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import BufferReader, BufferReaderError, BufferWriter
from .hashing import Hash

MAINTX_OUT_IDENTIFIER_ECDSA = 1


class MaintxOutError(Exception):
    """Raised when a transaction output cannot be decoded."""


@dataclass(frozen=True)
class MaintxOut:
    """An output paying ``value`` to the ECDSA address ``address``."""

    value: int
    address: Hash

    def serialize(self, writer: BufferWriter) -> None:
        """Append the encoded output to ``writer``."""
        writer.put_u64(self.value)
        writer.put_var_u32(MAINTX_OUT_IDENTIFIER_ECDSA)
        writer.put_hash(self.address)
        writer.put_var_u64(0)  # no extra data

    def matches_address(self, address: Hash) -> bool:
        """Tell whether this output pays to ``address``."""
        return self.address == address


def unserialize_maintx_out(reader: BufferReader) -> MaintxOut:
    """Read one output from ``reader``."""
    try:
        value = reader.get_u64()
        identifier = reader.get_var_u32()
        if identifier != MAINTX_OUT_IDENTIFIER_ECDSA:
            raise MaintxOutError("Invalid MaintxOut variant")
        address = reader.get_hash()
        reader.get_var_u64()  # extra data length, unused
    except BufferReaderError as exc:
        raise MaintxOutError(f"Buffer reader error: {exc}") from exc
    return MaintxOut(value, address)