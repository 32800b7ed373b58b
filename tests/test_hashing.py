import pytest

from globalchain.hashing import HASH_SIZE, Hash, HashError


def test_compute_empty_input_matches_sha3_256():
    expected = "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"
    assert Hash.compute(b"").to_hex() == expected


def test_compute_abc_matches_sha3_256():
    expected = "3a985da74fe225b2045c172d6bd390bd855f086e3e9d525b46bfe24511431532"
    assert Hash.compute(b"abc").to_hex() == expected


def test_empty_hash_is_all_zero():
    assert bytes(Hash.empty()) == bytes(HASH_SIZE)


def test_from_bytes_round_trip():
    raw = bytes(range(32))
    h = Hash.from_bytes(raw)
    assert bytes(h) == raw
    assert bytes.fromhex(h.to_hex()) == raw


@pytest.mark.parametrize("length", [0, 31, 33, 64])
def test_from_bytes_rejects_wrong_length(length):
    with pytest.raises(HashError) as info:
        Hash.from_bytes(bytes(length))
    assert info.value.expected == HASH_SIZE
    assert info.value.actual == length


def test_constructor_validates_length():
    with pytest.raises(HashError):
        Hash(b"short")


def test_equality_and_hashability():
    a = Hash.compute(b"block")
    b = Hash.compute(b"block")
    assert a == b
    assert len({a, b}) == 1


def test_different_inputs_give_different_hashes():
    a = Hash.compute(b"a")
    b = Hash.compute(b"b")
    assert (a == b) is False
    assert len(a.to_hex()) == 2 * HASH_SIZE