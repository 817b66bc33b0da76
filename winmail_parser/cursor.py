# ============================================================================
# winmail_parser/cursor.py - Bounds-checked little-endian reader
# ============================================================================

from __future__ import annotations

import struct

from .exceptions import UnexpectedEndError

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


def pad4(n: int) -> int:
    """Round ``n`` up to the next multiple of 4."""
    return (n + 3) & ~3


class ByteCursor:
    """Sequential reader over an in-memory buffer.

    Every read either succeeds completely or raises ``UnexpectedEndError``
    without moving the offset. ``skip`` never fails; it stops at the end.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _require(self, n: int) -> None:
        if n < 0 or self._pos + n > len(self._data):
            raise UnexpectedEndError(self._pos, n, self.remaining)

    def read_u8(self) -> int:
        self._require(1)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_u16(self) -> int:
        self._require(2)
        (value,) = _U16.unpack_from(self._data, self._pos)
        self._pos += 2
        return value

    def read_u32(self) -> int:
        self._require(4)
        (value,) = _U32.unpack_from(self._data, self._pos)
        self._pos += 4
        return value

    def read_bytes(self, n: int) -> bytes:
        self._require(n)
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def skip(self, n: int) -> int:
        """Advance up to ``n`` bytes and return how many were actually skipped."""
        step = max(0, min(n, self.remaining))
        self._pos += step
        return step


def decode_ansi(data: bytes, encoding: str) -> str:
    """Decode a NUL-terminated legacy string with the active codepage."""
    end = data.find(b"\x00")
    if end != -1:
        data = data[:end]
    return data.decode(encoding, errors="replace")


def decode_utf16le(data: bytes) -> str:
    """Decode UTF-16LE text, dropping one trailing NUL terminator if present."""
    if len(data) >= 2 and data[-2:] == b"\x00\x00":
        data = data[:-2]
    return data.decode("utf-16-le", errors="replace")
