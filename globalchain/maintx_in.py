"""Transaction inputs and their binary encoding."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .buffer import BufferReader, BufferReaderError, BufferWriter
from .hashing import Hash

logger = logging.getLogger(__name__)

MAINTX_IN_IDENTIFIER_MAINBLOCK_REWARD = 0
MAINTX_IN_IDENTIFIER_ECDSA = 1


class MaintxInError(Exception):
    """Raised when a transaction input cannot be used or decoded."""


class NotEcdsaVariantError(MaintxInError):
    """Raised when an ECDSA input was required but a reward input was given."""

    def __init__(self) -> None:
        super().__init__("Expected MaintxInEcdsa, but got MaintxInMainBlockReward")


class UnknownIdentifierError(MaintxInError):
    """Raised when an encoded input carries an unknown type identifier."""

    def __init__(self, identifier: int) -> None:
        super().__init__(f"Unknown MAINTXIN Identifier: {identifier}")
        self.identifier = identifier


@dataclass(frozen=True)
class MaintxInMainblockReward:
    """The input of a block reward transaction."""

    mainblock_height: int

    def serialize(self, writer: BufferWriter, signing: bool) -> None:
        """Append the encoded input to ``writer``; ``signing`` has no effect."""
        writer.put_var_u32(MAINTX_IN_IDENTIFIER_MAINBLOCK_REWARD)
        writer.put_u32(self.mainblock_height)


@dataclass
class MaintxInEcdsa:
    """An input spending output ``index`` of transaction ``hash``."""

    hash: Hash
    index: int
    publickey: bytes
    signature: bytes = field(default=b"")

    def serialize(self, writer: BufferWriter, signing: bool) -> None:
        """Append the encoded input; the signature is included only when ``signing``."""
        writer.put_var_u32(MAINTX_IN_IDENTIFIER_ECDSA)
        writer.put_hash(self.hash)
        writer.put_var_u32(self.index)
        writer.put_var_bytes(self.publickey)
        if signing:
            writer.put_var_bytes(self.signature)
        writer.put_var_u64(0)  # no extra data

    def check_signature(self, hash_value: Hash) -> bool:
        """Tell whether the signature is accepted for ``hash_value``.

        ECDSA inputs are never accepted as validly signed under the current rules.
        """
        return False


MaintxIn = MaintxInMainblockReward | MaintxInEcdsa


def as_ecdsa(txin: MaintxIn) -> MaintxInEcdsa:
    """Return ``txin`` if it is an ECDSA input, else raise NotEcdsaVariantError."""
    if isinstance(txin, MaintxInEcdsa):
        return txin
    raise NotEcdsaVariantError()


def new_mainblock_reward_txin(height: int) -> MaintxInMainblockReward:
    """Create the reward input for the block at ``height``."""
    return MaintxInMainblockReward(height)


def new_maintx_in_ecdsa(hash_value: Hash, index: int, publickey: bytes) -> MaintxInEcdsa:
    """Create an unsigned ECDSA input."""
    return MaintxInEcdsa(hash_value, index, bytes(publickey))


def unserialize_maintx_in(reader: BufferReader) -> MaintxIn:
    """Read one input from ``reader``; the signature is always expected."""
    try:
        identifier = reader.get_var_u32()
        if identifier == MAINTX_IN_IDENTIFIER_ECDSA:
            hash_value = reader.get_hash()
            index = reader.get_var_u32()
            publickey = reader.get_var_bytes()
            signature = reader.get_var_bytes()
            reader.get_var_u64()  # extra data length, unused
            logger.debug("ecdsa input hash=%s index=%d", hash_value.to_hex(), index)
            return MaintxInEcdsa(hash_value, index, publickey, signature)
        if identifier == MAINTX_IN_IDENTIFIER_MAINBLOCK_REWARD:
            return MaintxInMainblockReward(reader.get_u32())
    except BufferReaderError as exc:
        raise MaintxInError(f"Buffer reader error: {exc}") from exc
    raise UnknownIdentifierError(identifier)