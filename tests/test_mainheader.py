import pytest

from globalchain import mainheader as mainheader_module
from globalchain.hashing import Hash
from globalchain.mainheader import (
    Mainheader,
    MainheaderError,
    MiningUnsuccessfulError,
    mine_mainheader_with_cpu,
    unserialize_mainheader,
)

EASY_BITS = 0x227FFFFF  # target far above any 256-bit hash


def _header(**overrides):
    fields = dict(
        version=1,
        prev_hash=Hash.compute(b"prev"),
        root_hash=Hash.compute(b"root"),
        timestamp=1_700_000_000,
        bits=0x1D00FFFF,
        nonce=7,
        hash=Hash.compute(b"claimed"),
    )
    fields.update(overrides)
    return Mainheader(**fields)


def test_serialize_round_trip():
    header = _header()
    assert unserialize_mainheader(header.serialize()) == header


def test_negative_timestamp_round_trip():
    header = _header(timestamp=-12345)
    assert unserialize_mainheader(header.serialize()).timestamp == -12345


def test_serialized_length_and_layout():
    header = _header()
    raw = header.serialize()
    assert len(raw) == 113
    assert raw[0] == 1
    assert raw[1:33] == bytes(header.prev_hash)
    assert raw[-32:] == bytes(header.hash)


def test_large_version_uses_var_encoding():
    header = _header(version=300)
    raw = header.serialize()
    assert raw[0] == 253
    assert unserialize_mainheader(raw).version == 300


def test_check_hash_true_for_computed_hash():
    header = _header()
    sealed = _header(hash=header.compute_hash())
    assert sealed.check_hash() is True
    assert header.check_hash() is False


def test_compute_hash_ignores_stored_hash_but_depends_on_nonce():
    a = _header(hash=Hash.compute(b"x"))
    b = _header(hash=Hash.compute(b"y"))
    assert a.compute_hash() == b.compute_hash()
    assert _header(nonce=8).compute_hash() != a.compute_hash()


def test_check_target():
    assert _header(hash=Hash.empty(), bits=EASY_BITS).check_target() is True
    assert _header(hash=Hash.empty(), bits=0).check_target() is False


def test_truncated_input_raises():
    raw = _header().serialize()
    with pytest.raises(MainheaderError):
        unserialize_mainheader(raw[:-1])


def test_mine_easy_target_uses_first_nonce():
    mined = mine_mainheader_with_cpu(
        1, Hash.empty(), Hash.compute(b"root"), 1_700_000_000, EASY_BITS
    )
    assert mined.nonce == 2
    assert mined.check_hash()
    assert mined.check_target()


def test_mine_moderate_target_produces_valid_header():
    bits = 0x207FFFFF
    mined = mine_mainheader_with_cpu(2, Hash.empty(), Hash.empty(), 42, bits)
    assert mined.bits == bits
    assert mined.check_hash()
    assert mined.check_target()
    assert unserialize_mainheader(mined.serialize()) == mined


def test_mining_unsuccessful(monkeypatch):
    monkeypatch.setattr(mainheader_module, "MAX_MINING_ITERATIONS", 20)
    with pytest.raises(MiningUnsuccessfulError):
        mine_mainheader_with_cpu(1, Hash.empty(), Hash.empty(), 0, 0)