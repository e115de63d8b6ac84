"""Decoded values, mirroring the shape of `Types` descriptors.

Fixed arrays and unbounded arrays both decode to `Values.List`; integers are
plain Python ints so uint256/int256 keep full precision.
"""

from __future__ import annotations

from dataclasses import dataclass


class Values:
    @dataclass(frozen=True, slots=True)
    class Address:
        value: bytes  # 20 bytes

    @dataclass(frozen=True, slots=True)
    class Bool:
        value: bool

    @dataclass(frozen=True, slots=True)
    class String:
        value: str

    @dataclass(frozen=True, slots=True)
    class Bytes:
        value: bytes

    @dataclass(frozen=True, slots=True)
    class FixedBytes:
        value: bytes

    @dataclass(frozen=True, slots=True)
    class Uint:
        value: int

    @dataclass(frozen=True, slots=True)
    class Int:
        value: int

    @dataclass(frozen=True, slots=True)
    class List:
        items: tuple[Value, ...]

    @dataclass(frozen=True, slots=True)
    class Tuple:
        items: tuple[Value, ...]


Value = (
    Values.Address
    | Values.Bool
    | Values.String
    | Values.Bytes
    | Values.FixedBytes
    | Values.Uint
    | Values.Int
    | Values.List
    | Values.Tuple
)
