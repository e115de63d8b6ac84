"""Canonical JSON projection of decoded values.

- address → lowercase 0x + 40 hex (EIP-55 checksum on request)
- bool → JSON bool
- uint/int → decimal string (no precision loss past 53 bits)
- bytes/bytesN → lowercase 0x hex
- string → verbatim
- arrays/tuples → JSON arrays (tuple component names are not kept)
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from eth_utils import to_checksum_address

from abilog.core.models import DecodedParam
from abilog.decoding.values import Value, Values


def value_to_json(value: Value, *, checksum_addresses: bool = False) -> Any:
    match value:
        case Values.Address(value=raw):
            addr = "0x" + raw.hex()
            return to_checksum_address(addr) if checksum_addresses else addr
        case Values.Bool(value=b):
            return b
        case Values.Uint(value=n) | Values.Int(value=n):
            return str(n)
        case Values.Bytes(value=raw) | Values.FixedBytes(value=raw):
            return "0x" + raw.hex()
        case Values.String(value=s):
            return s
        case Values.List(items=items) | Values.Tuple(items=items):
            return [value_to_json(v, checksum_addresses=checksum_addresses) for v in items]
    raise TypeError(f"Not a decoded value: {value!r}")


def param_key(name: str, position: int) -> str:
    """Output key for a parameter; unnamed parameters become `argN`."""
    return name if name else f"arg{position}"


def project(params: Sequence[DecodedParam], *, checksum_addresses: bool = False) -> dict[str, Any]:
    """Project decoded parameters into a JSON-ready object, in declaration order."""
    return {
        param_key(p.name, i): value_to_json(p.value, checksum_addresses=checksum_addresses)
        for i, p in enumerate(params)
    }


def to_json_line(obj: dict[str, Any]) -> str:
    """Serialize as a compact JSON line."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False) + "\n"
