"""Hex parsing helpers for log records."""

from __future__ import annotations

import re

from eth_utils import remove_0x_prefix

from abilog.core.errors import InputFormatError

WORD = 32

_HEX_BYTES = re.compile(r"(?:[0-9a-fA-F]{2})*")


def hex_to_bytes(value: str) -> bytes:
    """Parse an optionally 0x-prefixed hex string (surrounding whitespace allowed, none inside)."""
    if not isinstance(value, str):
        raise InputFormatError(f"Expected hex string, got {type(value).__name__}")
    digits = remove_0x_prefix(value.strip())
    if not _HEX_BYTES.fullmatch(digits):
        raise InputFormatError(f"Invalid hex bytes: {value!r}")
    return bytes.fromhex(digits)


def hex_to_word(value: str) -> bytes:
    """Parse a 32-byte topic word."""
    b = hex_to_bytes(value)
    if len(b) != WORD:
        raise InputFormatError(f"Invalid topic {value!r}: expected 32 bytes, got {len(b)}")
    return b
