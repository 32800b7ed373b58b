import pytest

from globalchain.buffer import BufferWriter
from globalchain.hashing import Hash
from globalchain.maintx import Maintx, MaintxError, new_reward_transaction, unserialize_maintx
from globalchain.maintx_in import (
    MaintxInMainblockReward,
    UnknownIdentifierError,
    new_maintx_in_ecdsa,
)
from globalchain.maintx_out import MaintxOut


def _spending_tx(signature: bytes) -> Maintx:
    txin = new_maintx_in_ecdsa(Hash.compute(b"prev"), 0, b"\x03" + bytes(32))
    txin.signature = signature
    return Maintx(1, [txin], [MaintxOut(50, Hash.compute(b"dest"))])


def test_reward_transaction_contents():
    address = Hash.compute(b"miner")
    tx = new_reward_transaction(12, 100, 5, address)
    assert tx.version == 1
    assert tx.vin == [MaintxInMainblockReward(12)]
    assert tx.vout == [MaintxOut(105, address)]


def test_reward_wire_prefix():
    raw = new_reward_transaction(3, 10, 2, Hash.empty()).serialize()
    assert raw[:3] == b"\x01\x01\x00"


def test_reward_round_trip():
    tx = new_reward_transaction(42, 1000, 1, Hash.compute(b"miner"))
    assert unserialize_maintx(tx.serialize()) == tx


def test_spending_round_trip():
    tx = _spending_tx(b"\x30\x44\x01")
    decoded = unserialize_maintx(tx.serialize())
    assert decoded == tx
    assert decoded.vin[0].signature == b"\x30\x44\x01"


def test_hash_ignores_signature():
    first = _spending_tx(b"\x01")
    second = _spending_tx(b"\x02\x03")
    assert first.compute_hash() == second.compute_hash()
    assert first.serialize() != second.serialize()


def test_reward_hash_matches_full_encoding():
    tx = new_reward_transaction(1, 2, 3, Hash.compute(b"a"))
    assert tx.compute_hash() == Hash.compute(tx.serialize())
    assert tx.serialization_size == len(tx.serialize())


def test_verify_signatures():
    assert new_reward_transaction(1, 1, 0, Hash.empty()).verify_signatures() is True
    assert _spending_tx(b"\x01").verify_signatures() is False


def test_write_to_unsigned_is_shorter():
    tx = _spending_tx(b"\x01\x02")
    writer = BufferWriter()
    tx.write_to(writer, False)
    assert len(writer.getvalue()) == tx.serialization_size - 3


def test_truncated_raw_rejected():
    raw = new_reward_transaction(1, 1, 1, Hash.empty()).serialize()
    with pytest.raises(MaintxError):
        unserialize_maintx(raw[:-5])


def test_unknown_input_identifier_rejected():
    writer = BufferWriter()
    writer.put_var_u32(1)
    writer.put_var_u64(1)
    writer.put_var_u32(9)
    with pytest.raises(MaintxError) as info:
        unserialize_maintx(writer.getvalue())
    assert isinstance(info.value.__cause__, UnknownIdentifierError)