# globalchain

Building blocks for a small proof-of-work ledger, usable as a library.

## Modules

- `globalchain.hashing` – `Hash`, an immutable 32-byte SHA3-256 digest
  (`Hash.compute`, `Hash.from_bytes`, `Hash.empty`, `to_hex`, `bytes(h)`).
  Bytes of the wrong length raise `HashError`.
- `globalchain.bigint` – `bigint_from_hash` (little-endian integer of a hash),
  `compact_from_bigint` and `bigint_from_compact` for the compact 32-bit target format.
- `globalchain.merkle` – `compute_root` for a list of hashes; an odd node is paired with
  itself, and an empty list gives the all-zero hash.
- `globalchain.buffer` – `BufferWriter` and `BufferReader` for the little-endian wire format
  with variable-length integers (`put_var_u64`/`get_var_u64`, `put_var_u32`/`get_var_u32`,
  fixed-width `u8`–`u64`, sized byte strings and hashes). A read past the end raises
  `EndOfBufferError`; a u64 marker where a u32 is expected raises `ValueExceedsU32Error`.
- `globalchain.maintx_in`, `globalchain.maintx_out`, `globalchain.maintx` – transaction
  inputs (`MaintxInMainblockReward`, `MaintxInEcdsa`), outputs (`MaintxOut`) and
  transactions (`Maintx`), with `serialize` and the `unserialize_*` functions.
  `Maintx.compute_hash` is the signing hash, which leaves out signatures;
  `new_reward_transaction` builds a block reward transaction.
- `globalchain.mainheader`, `globalchain.mainblock` – `Mainheader` and `Mainblock`, their
  encodings, `check_hash`, `check_target`, and CPU mining with `mine_mainheader_with_cpu`
  (raises `MiningUnsuccessfulError` when no nonce meets the target).
- `globalchain.async_file` – asynchronous file helpers: save, load, read a byte range,
  append (optionally prefixed with a u32 length), existence and size.
- `globalchain.storage_directory` – `StorageDirectory`, asynchronous storage of chunks as
  files named `<category><index>` in one directory.
- `globalchain.maincore` – `MaincoreInner`, which stores confirmed blocks under a
  `Mainblocks` directory, reloads their headers into memory and works out the next target
  bits with `get_newbits` (retargeting every 4032 headers against 300 seconds per block).
- `globalchain.keyderivation` – hierarchical secp256k1 secret-key derivation from a seed
  phrase (`derive_master_extended_secret_key`, `derive_child_extended_secret_key`).
- `globalchain.seed` – seed phrases of 24 random words plus a checksum word
  (`generate_seed`, `check_seed`), drawn from `globalchain.wordlist.WORDLIST`.
- `globalchain.resource` – `Resource`, a wallet record of an owned output, and whether it
  is spent (`ResourceInfo`, `mark_spent`, `is_unspent`).
- `globalchain.randomness` – secure random integers in an inclusive range.
- `globalchain.timeutil` – `timestamp_now` and RFC 2822 formatting of Unix timestamps in UTC.
- `globalchain.app_paths` – `get_app_data_dir` and `get_app_cache_dir`, created on demand.

## Installing

```
pip install .
```

## Examples

Transactions:

```python
from globalchain.hashing import Hash
from globalchain.maintx import new_reward_transaction, unserialize_maintx

address = Hash.compute(b"example public key")
tx = new_reward_transaction(1, 50, 0, address)
raw = tx.serialize()
assert unserialize_maintx(raw).compute_hash() == tx.compute_hash()
```

Storing blocks:

```python
import asyncio
from globalchain.maincore import MaincoreInner

async def run():
    core = await MaincoreInner.create("chain-data")
    await core.init()
    await core.load_mainheaders()
    print(core.mainblocks_count)

asyncio.run(run())
```

Seed phrases and keys:

```python
from globalchain.seed import generate_seed, check_seed
from globalchain.keyderivation import (
    HARDENED_OFFSET,
    derive_child_extended_secret_key,
    derive_master_extended_secret_key,
)

phrase = generate_seed()
assert check_seed(phrase)
master = derive_master_extended_secret_key(phrase)
child = derive_child_extended_secret_key(master, HARDENED_OFFSET, True)
```

## What it does not do

- There is no node, networking or peer synchronisation, and no pool of pending transactions.
- There is no command-line program or user interface; everything is used as a library.
- Signatures are not created, and `MaintxInEcdsa.check_signature` accepts none, so
  `Maintx.verify_signatures` is false for any transaction with an ECDSA input.
- No genesis block is created when the block storage is empty.

## Tests

```
pip install .[test]
pytest
```