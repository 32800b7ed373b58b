"""Transactions made of inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from .buffer import BufferReader, BufferReaderError, BufferWriter
from .hashing import Hash
from .maintx_in import (
    MaintxIn,
    MaintxInEcdsa,
    MaintxInError,
    new_mainblock_reward_txin,
    unserialize_maintx_in,
)
from .maintx_out import MaintxOut, MaintxOutError, unserialize_maintx_out


class MaintxError(Exception):
    """Raised when a transaction cannot be decoded."""


@dataclass
class Maintx:
    """A transaction: a version, its inputs and its outputs."""

    version: int
    vin: list[MaintxIn] = field(default_factory=list)
    vout: list[MaintxOut] = field(default_factory=list)

    def verify_signatures(self) -> bool:
        """Tell whether every ECDSA input carries an accepted signature."""
        digest = self.compute_hash()
        return all(
            txin.check_signature(digest)
            for txin in self.vin
            if isinstance(txin, MaintxInEcdsa)
        )

    def compute_hash(self) -> Hash:
        """Return the signing hash, which leaves out the signatures."""
        writer = BufferWriter()
        self.write_to(writer, False)
        return Hash.compute(writer.getvalue())

    def write_to(self, writer: BufferWriter, signing: bool) -> None:
        """Append the encoded transaction to ``writer``."""
        writer.put_var_u32(self.version)
        writer.put_var_u64(len(self.vin))
        for txin in self.vin:
            txin.serialize(writer, signing)
        writer.put_var_u64(len(self.vout))
        for txout in self.vout:
            txout.serialize(writer)

    def serialize(self) -> bytes:
        """Return the full encoding, signatures included."""
        writer = BufferWriter()
        self.write_to(writer, True)
        return writer.getvalue()

    @property
    def serialization_size(self) -> int:
        """The length of the full encoding in bytes."""
        return len(self.serialize())


def unserialize_maintx(raw: bytes) -> Maintx:
    """Decode a transaction produced by :meth:`Maintx.serialize`."""
    reader = BufferReader(raw)
    try:
        version = reader.get_var_u32()
        vin = [unserialize_maintx_in(reader) for _ in range(reader.get_var_u64())]
        vout = [unserialize_maintx_out(reader) for _ in range(reader.get_var_u64())]
    except BufferReaderError as exc:
        raise MaintxError(f"Buffer reader error: {exc}") from exc
    except MaintxInError as exc:
        raise MaintxError(f"MaintxIn error: {exc}") from exc
    except MaintxOutError as exc:
        raise MaintxError(f"MaintxOut error: {exc}") from exc
    return Maintx(version, vin, vout)


def new_reward_transaction(
    mainblock_height: int, value: int, fee: int, pubkey_hash: Hash
) -> Maintx:
    """Create the reward transaction paying ``value + fee`` to ``pubkey_hash``."""
    return Maintx(
        version=1,
        vin=[new_mainblock_reward_txin(mainblock_height)],
        vout=[MaintxOut(value + fee, pubkey_hash)],
    )