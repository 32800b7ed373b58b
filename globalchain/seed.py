"""Seed phrase generation and checksum validation."""

from __future__ import annotations

from .hashing import Hash
from .randomness import RandomNumberError, generate_random_number
from .wordlist import WORDLIST

SEED_ENTROPY_WORDS = 24

_WORD_INDEX: dict[str, int] = {}
for _position, _word in enumerate(WORDLIST):
    _WORD_INDEX.setdefault(_word, _position)


class GenerateRandomNumbersError(Exception):
    """Raised when the random numbers for a seed cannot be produced."""


def generate_random_numbers(count: int, min_value: int, max_value: int) -> list[int]:
    """Return ``count`` secure random integers in ``[min_value, max_value]``."""
    try:
        return [generate_random_number(min_value, max_value) for _ in range(count)]
    except RandomNumberError as exc:
        raise GenerateRandomNumbersError(f"RandomNumberError error: {exc}") from exc


def _seed_checksum(words: str) -> int:
    """Return the last byte of the SHA3-256 hash of the trimmed phrase."""
    return bytes(Hash.compute(words.strip().encode("utf-8")))[-1]


def generate_seed() -> str:
    """Return a phrase of random words followed by a checksum word."""
    indices = generate_random_numbers(SEED_ENTROPY_WORDS, 0, len(WORDLIST) - 1)
    phrase = " ".join(WORDLIST[i] for i in indices)
    return f"{phrase} {WORDLIST[_seed_checksum(phrase)]}"


def check_seed(seed: str) -> bool:
    """Tell whether the last word of ``seed`` is the checksum of the words before it."""
    words = seed.split()
    if not words:
        return False
    checksum = _WORD_INDEX.get(words[-1])
    if checksum is None:
        return False
    return _seed_checksum(" ".join(words[:-1])) == checksum