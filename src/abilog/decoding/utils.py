"""Decoding utilities: bounds-checked ABI word access."""

from __future__ import annotations

from abilog.core.errors import DataTooShortError
from abilog.decoding.types import WORD


def word_at(data: bytes, offset: int, *, param: str | None = None) -> bytes:
    """Return the 32-byte word starting at byte `offset`, or raise if truncated."""
    end = offset + WORD
    if end > len(data):
        raise DataTooShortError(
            f"Need {WORD} bytes at offset {offset}, data is {len(data)} bytes",
            param=param,
            offset=offset,
        )
    return data[offset:end]


def uint_at(data: bytes, offset: int, *, param: str | None = None) -> int:
    return int.from_bytes(word_at(data, offset, param=param), "big")
