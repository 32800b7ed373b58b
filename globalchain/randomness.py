"""Cryptographically secure random integers in an inclusive range."""

from __future__ import annotations

import secrets
import time

MAX_RETRIES = 1000
USIZE_MAX = (1 << 64) - 1
_RETRY_DELAY_SECONDS = 0.001


class RandomNumberError(Exception):
    """Raised when a random number cannot be produced."""


def _range_size(min_value: int, max_value: int) -> int:
    if min_value > max_value:
        raise RandomNumberError(
            f"The minimum value {min_value} is greater than the maximum value {max_value}"
        )
    if min_value < 0 or max_value > USIZE_MAX:
        raise RandomNumberError(f"Values must lie within 0..{USIZE_MAX}")
    size = max_value - min_value + 1
    if size > USIZE_MAX:
        raise RandomNumberError("Range too large: would cause overflow or inefficiency")
    return size


def generate_secure_random_number(min_value: int, max_value: int) -> int:
    """Return a uniformly chosen integer in ``[min_value, max_value]``."""
    size = _range_size(min_value, max_value)
    try:
        return secrets.randbelow(size) + min_value
    except OSError as exc:
        raise RandomNumberError(f"Failed to initialize RNG: {exc}") from exc


def generate_random_number(min_value: int, max_value: int) -> int:
    """Like :func:`generate_secure_random_number`, retrying entropy failures."""
    _range_size(min_value, max_value)
    attempt = 0
    while True:
        try:
            return generate_secure_random_number(min_value, max_value)
        except RandomNumberError:
            attempt += 1
            if attempt >= MAX_RETRIES:
                raise
            time.sleep(_RETRY_DELAY_SECONDS)