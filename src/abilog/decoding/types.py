"""ABI type descriptors: parsing, canonical rendering and layout helpers.

A type descriptor is one of the frozen dataclasses grouped under `Types`:

- elementary: `Address`, `Bool`, `String`, `Bytes`, `FixedBytes`, `Uint`, `Int`
- composite: `Array` (unbounded), `FixedArray`, `Tuple`

`parse_type("(uint8,bool)[3]")` builds a descriptor, `render()` spells it back
canonically, so `parse_type(render(t)) == t` holds for every descriptor.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from abilog.core.errors import UnknownTypeError

WORD = 32


class Types:
    @dataclass(frozen=True, slots=True)
    class Address:
        pass

    @dataclass(frozen=True, slots=True)
    class Bool:
        pass

    @dataclass(frozen=True, slots=True)
    class String:
        pass

    @dataclass(frozen=True, slots=True)
    class Bytes:
        pass

    @dataclass(frozen=True, slots=True)
    class FixedBytes:
        size: int

    @dataclass(frozen=True, slots=True)
    class Uint:
        bits: int = 256

    @dataclass(frozen=True, slots=True)
    class Int:
        bits: int = 256

    @dataclass(frozen=True, slots=True)
    class Array:
        element: TypeDescriptor

    @dataclass(frozen=True, slots=True)
    class FixedArray:
        element: TypeDescriptor
        length: int

    @dataclass(frozen=True, slots=True)
    class Tuple:
        components: tuple[TypeDescriptor, ...] = ()


TypeDescriptor = (
    Types.Address
    | Types.Bool
    | Types.String
    | Types.Bytes
    | Types.FixedBytes
    | Types.Uint
    | Types.Int
    | Types.Array
    | Types.FixedArray
    | Types.Tuple
)


# ---------- classification ----------


def is_dynamic(t: TypeDescriptor) -> bool:
    """True when the encoded size of `t` is not known from the type alone."""
    match t:
        case Types.String() | Types.Bytes() | Types.Array():
            return True
        case Types.FixedArray(element=element):
            return is_dynamic(element)
        case Types.Tuple(components=components):
            return any(is_dynamic(c) for c in components)
    return False


def is_elementary(t: TypeDescriptor) -> bool:
    """True for single-word value types (no arrays, tuples, strings or bytes)."""
    return isinstance(t, (Types.Address, Types.Bool, Types.FixedBytes, Types.Uint, Types.Int))


def head_size(t: TypeDescriptor) -> int:
    """Bytes occupied by `t` in the head region of its enclosing tuple."""
    if is_dynamic(t):
        return WORD
    match t:
        case Types.FixedArray(element=element, length=length):
            return length * head_size(element)
        case Types.Tuple(components=components):
            return sum(head_size(c) for c in components)
    return WORD


# ---------- rendering ----------


def render(t: TypeDescriptor) -> str:
    """Canonical ABI spelling used in event signatures."""
    match t:
        case Types.Address():
            return "address"
        case Types.Bool():
            return "bool"
        case Types.String():
            return "string"
        case Types.Bytes():
            return "bytes"
        case Types.FixedBytes(size=size):
            return f"bytes{size}"
        case Types.Uint(bits=bits):
            return f"uint{bits}"
        case Types.Int(bits=bits):
            return f"int{bits}"
        case Types.Array(element=element):
            return f"{render(element)}[]"
        case Types.FixedArray(element=element, length=length):
            return f"{render(element)}[{length}]"
        case Types.Tuple(components=components):
            return "(" + ",".join(render(c) for c in components) + ")"
    raise TypeError(f"Not a type descriptor: {t!r}")


# ---------- parsing ----------


def split_top_level(s: str) -> list[str]:
    """Split by commas while respecting nested parentheses."""
    items: list[str] = []
    depth = 0
    buf: list[str] = []
    for ch in s:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            items.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    tail = "".join(buf).strip()
    if tail or items:
        items.append(tail)
    return items


# arrays and explicit tuples nest at most this deep
MAX_NESTING = 32

_DIGITS = re.compile(r"[0-9]+")


def _parse_int(type_string: str, digits: str) -> int:
    if not _DIGITS.fullmatch(digits):
        raise UnknownTypeError(type_string)
    return int(digits)


def _parse_bits(type_string: str, digits: str) -> int:
    if not digits:
        return 256
    bits = _parse_int(type_string, digits)
    if bits <= 0 or bits > 256 or bits % 8:
        raise UnknownTypeError(type_string, "bit width must be a multiple of 8 in 8..256")
    return bits


def _parse_base(
    type_string: str,
    base: str,
    components: Sequence[TypeDescriptor] | None,
    depth: int,
) -> TypeDescriptor:
    match base:
        case "address":
            return Types.Address()
        case "bool":
            return Types.Bool()
        case "string":
            return Types.String()
        case "bytes":
            return Types.Bytes()
        case "tuple":
            if components is None:
                raise UnknownTypeError(type_string, "tuple without components")
            return Types.Tuple(tuple(components))

    if base.startswith("(") and base.endswith(")"):
        parts = split_top_level(base[1:-1])
        if any(not p for p in parts):
            raise UnknownTypeError(type_string, "empty tuple component")
        return Types.Tuple(tuple(_parse(p, None, depth + 1) for p in parts))

    if base.startswith("bytes"):
        size = _parse_int(type_string, base[5:])
        if not 1 <= size <= 32:
            raise UnknownTypeError(type_string, "bytesN size must be in 1..32")
        return Types.FixedBytes(size)
    if base.startswith("uint"):
        return Types.Uint(_parse_bits(type_string, base[4:]))
    if base.startswith("int"):
        return Types.Int(_parse_bits(type_string, base[3:]))

    raise UnknownTypeError(type_string)


def _parse(
    type_string: str,
    components: Sequence[TypeDescriptor] | None,
    depth: int,
) -> TypeDescriptor:
    s = type_string.strip()
    # peel array suffixes right to left, then wrap innermost first
    suffixes: list[str] = []
    while s.endswith("]"):
        open_idx = s.rfind("[")
        if open_idx <= 0:
            raise UnknownTypeError(type_string)
        suffixes.append(s[open_idx + 1 : -1])
        s = s[:open_idx]

    depth += len(suffixes)
    if depth > MAX_NESTING:
        raise UnknownTypeError(type_string, f"nested deeper than {MAX_NESTING} levels")
    t = _parse_base(type_string, s, components, depth)
    for size in reversed(suffixes):
        if size == "":
            t = Types.Array(t)
            continue
        length = int(size) if _DIGITS.fullmatch(size) else 0
        if length == 0:
            raise UnknownTypeError(type_string, "fixed array length must be a positive integer")
        t = Types.FixedArray(t, length)
    return t


def parse_type(
    type_string: str,
    components: Sequence[TypeDescriptor] | None = None,
) -> TypeDescriptor:
    """Parse an ABI type string into a `TypeDescriptor`.

    Array suffixes are peeled right to left, so `uint256[][3]` is a fixed array
    of three unbounded `uint256` arrays. `components` supplies the member types
    when the base type is the ABI JSON spelling `tuple`.
    """
    return _parse(type_string, components, 0)
