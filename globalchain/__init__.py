"""Hashing, binary encoding, transactions, blocks, block storage, key derivation and wallet seeds for a proof-of-work ledger."""

__version__ = "0.1.0"