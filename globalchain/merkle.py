"""Merkle root computation over a list of hashes."""

from __future__ import annotations

from collections.abc import Sequence

from .hashing import Hash


def _branch(left: Hash, right: Hash) -> Hash:
    return Hash.compute(bytes(left) + bytes(right))


def compute_root(hashes: Sequence[Hash]) -> Hash:
    """Return the Merkle root; an odd node at a level is paired with itself."""
    level = list(hashes)
    if not level:
        return Hash.empty()
    while len(level) > 1:
        if len(level) % 2:
            level.append(level[-1])
        level = [_branch(left, right) for left, right in zip(level[::2], level[1::2])]
    return level[0]