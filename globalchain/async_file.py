"""Asynchronous helpers for reading, writing and appending files."""

from __future__ import annotations

import asyncio
import os
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

_U32_MASK = 0xFFFFFFFF


class AsyncFileError(Exception):
    """Raised when a file operation fails."""


def _save(data: bytes, path: PathLike) -> None:
    try:
        handle = open(path, "wb")
    except OSError as exc:
        raise AsyncFileError(f"File creation failed: {exc}") from exc
    with handle:
        try:
            handle.write(data)
        except OSError as exc:
            raise AsyncFileError(f"I/O error: {exc}") from exc


def _load(path: PathLike) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise AsyncFileError(f"File not found: {os.fspath(path)}") from exc
    except OSError as exc:
        raise AsyncFileError(f"I/O error: {exc}") from exc


def _read_portion(path: PathLike, start: int, end: int) -> bytes:
    length = end - start
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise AsyncFileError(f"I/O error: {exc}") from exc
    with handle:
        try:
            handle.seek(start)
            data = handle.read(length)
        except OSError as exc:
            raise AsyncFileError(f"Failed to read a portion of the file: {exc}") from exc
    if len(data) < length:
        raise AsyncFileError("Failed to read a portion of the file: early end of file")
    return data


def _size(path: PathLike) -> int:
    try:
        return os.stat(path).st_size
    except OSError:
        return 0


def _append(path: PathLike, data: bytes, create_file: bool, add_bytes_size: bool) -> None:
    flags = os.O_WRONLY | os.O_APPEND | getattr(os, "O_BINARY", 0)
    if create_file:
        flags |= os.O_CREAT
    try:
        descriptor = os.open(path, flags, 0o666)
    except OSError as exc:
        raise AsyncFileError(f"I/O error: {exc}") from exc
    with os.fdopen(descriptor, "ab") as handle:
        try:
            if add_bytes_size:
                handle.write((len(data) & _U32_MASK).to_bytes(4, "little"))
            handle.write(data)
        except OSError as exc:
            raise AsyncFileError(f"I/O error: {exc}") from exc


async def save_bytes_to_file(data: bytes, path: PathLike) -> None:
    """Write ``data`` to ``path``, replacing any previous content."""
    await asyncio.to_thread(_save, bytes(data), path)


async def load_bytes_from_file(path: PathLike) -> bytes:
    """Return the whole content of ``path``."""
    return await asyncio.to_thread(_load, path)


async def read_portion_of_file(path: PathLike, start: int, end: int) -> bytes:
    """Return exactly the bytes in ``[start, end)`` of ``path``."""
    if start < 0 or end < start:
        raise ValueError(f"invalid byte range {start}..{end}")
    return await asyncio.to_thread(_read_portion, path, start, end)


async def file_exists(path: PathLike) -> bool:
    """Tell whether ``path`` exists."""
    return await asyncio.to_thread(os.path.exists, path)


async def get_file_size(path: PathLike) -> int:
    """Return the size of ``path`` in bytes, or 0 if it cannot be read."""
    return await asyncio.to_thread(_size, path)


async def append_to_file(
    path: PathLike,
    data: bytes,
    create_file: bool,
    add_bytes_size: bool,
) -> None:
    """Append ``data`` to ``path``.

    With ``create_file`` a missing file is created; with ``add_bytes_size``
    the data is preceded by its length as a little-endian u32.
    """
    await asyncio.to_thread(_append, path, bytes(data), create_file, add_bytes_size)