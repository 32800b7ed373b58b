"""Little-endian binary writer and reader with variable-length integers."""

from __future__ import annotations

from .hashing import HASH_SIZE, Hash

_VAR_U16_MARKER = 253
_VAR_U32_MARKER = 254
_VAR_U64_MARKER = 255
_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF


class BufferReaderError(Exception):
    """Base class for errors while reading a buffer."""


class EndOfBufferError(BufferReaderError):
    """Raised when a read goes past the end of the buffer."""

    def __init__(self) -> None:
        super().__init__("End of buffer reached")


class ValueExceedsU32Error(BufferReaderError):
    """Raised when a variable-length u32 is encoded with the u64 marker."""

    def __init__(self) -> None:
        super().__init__("Value found exceeds u32")


def _check_range(value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"value {value} is outside the range 0..{maximum}")


class BufferWriter:
    """Accumulates encoded values into a byte string."""

    __slots__ = ("_content",)

    def __init__(self, content: bytes = b"") -> None:
        self._content = bytearray(content)

    def __len__(self) -> int:
        return len(self._content)

    def _put_uint(self, value: int, size: int) -> None:
        _check_range(value, (1 << (8 * size)) - 1)
        self._content += value.to_bytes(size, "little")

    def put_var_u64(self, value: int) -> None:
        _check_range(value, _U64_MAX)
        if value < _VAR_U16_MARKER:
            self.put_u8(value)
        elif value <= _U16_MAX:
            self.put_u8(_VAR_U16_MARKER)
            self.put_u16(value)
        elif value <= _U32_MAX:
            self.put_u8(_VAR_U32_MARKER)
            self.put_u32(value)
        else:
            self.put_u8(_VAR_U64_MARKER)
            self.put_u64(value)

    def put_var_u32(self, value: int) -> None:
        _check_range(value, _U32_MAX)
        if value < _VAR_U16_MARKER:
            self.put_u8(value)
        elif value <= _U16_MAX:
            self.put_u8(_VAR_U16_MARKER)
            self.put_u16(value)
        else:
            self.put_u8(_VAR_U32_MARKER)
            self.put_u32(value)

    def put_u8(self, value: int) -> None:
        self._put_uint(value, 1)

    def put_u16(self, value: int) -> None:
        self._put_uint(value, 2)

    def put_u32(self, value: int) -> None:
        self._put_uint(value, 4)

    def put_u64(self, value: int) -> None:
        self._put_uint(value, 8)

    def put_var_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Write a variable-length size followed by the bytes."""
        self.put_var_u64(len(data))
        self._content += data

    def put_bytes(self, data: bytes | bytearray | memoryview) -> None:
        self._content += data

    def put_hash(self, h: Hash) -> None:
        self._content += bytes(h)

    def copy(self) -> BufferWriter:
        """Return an independent writer holding the same content."""
        return BufferWriter(self._content)

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._content)


class BufferReader:
    """Reads encoded values sequentially from a byte string."""

    __slots__ = ("_content", "_position")

    def __init__(self, content: bytes | bytearray | memoryview) -> None:
        self._content = bytes(content)
        self._position = 0

    @property
    def position(self) -> int:
        """The number of bytes consumed so far."""
        return self._position

    def _read(self, length: int) -> bytes:
        if self._position + length > len(self._content):
            raise EndOfBufferError()
        start = self._position
        self._position += length
        return self._content[start:self._position]

    def _get_uint(self, size: int) -> int:
        return int.from_bytes(self._read(size), "little")

    def get_var_u64(self) -> int:
        marker = self.get_u8()
        if marker < _VAR_U16_MARKER:
            return marker
        if marker == _VAR_U16_MARKER:
            return self.get_u16()
        if marker == _VAR_U32_MARKER:
            return self.get_u32()
        return self.get_u64()

    def get_var_u32(self) -> int:
        marker = self.get_u8()
        if marker < _VAR_U16_MARKER:
            return marker
        if marker == _VAR_U16_MARKER:
            return self.get_u16()
        if marker == _VAR_U32_MARKER:
            return self.get_u32()
        raise ValueExceedsU32Error()

    def get_u8(self) -> int:
        return self._get_uint(1)

    def get_u16(self) -> int:
        return self._get_uint(2)

    def get_u32(self) -> int:
        return self._get_uint(4)

    def get_u64(self) -> int:
        return self._get_uint(8)

    def get_var_bytes(self) -> bytes:
        """Read bytes preceded by a variable-length u32 size."""
        return self.get_bytes(self.get_var_u32())

    def get_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError("length must be non-negative")
        return self._read(length)

    def get_hash(self) -> Hash:
        return Hash(self._read(HASH_SIZE))

    def __repr__(self) -> str:
        return (
            f"BufferReader(counter={self._position}, "
            f"content_length={len(self._content)})"
        )