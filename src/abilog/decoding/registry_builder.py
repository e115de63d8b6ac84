"""Registry builder utilities for creating event registries from signatures.

This module provides the tools for building schemas without an ABI file:
- `schema_from_signature()` parses a Solidity-style event declaration
- `make_registry()` builds a dispatch registry from one or many declarations
"""

from __future__ import annotations

from abilog.core.errors import UnknownTypeError
from abilog.decoding.registry import EventRegistry
from abilog.decoding.specs import EventParameter, EventSchema
from abilog.decoding.types import parse_type, split_top_level


# ---- Helpers: build schemas from event signature ----
def _parse_param(p: str) -> tuple[str, str, bool]:
    """Parse one parameter fragment into (name, abi_type, indexed)."""
    s = " ".join(p.strip().split())  # normalize spaces
    indexed = False
    if " indexed " in f" {s} ":
        indexed = True
        s = f" {s} ".replace(" indexed ", " ").strip()
    # tuple types may contain spaces between components; the name follows ')' or ']'
    close = max(s.rfind(")"), s.rfind("]"))
    head, tail = (s[: close + 1], s[close + 1 :]) if close != -1 else ("", s)
    tokens = tail.split()
    if not head:
        if not tokens:
            raise UnknownTypeError(p)
        head, tokens = tokens[0], tokens[1:]
    if len(tokens) > 1:
        raise UnknownTypeError(p, "unexpected tokens in parameter")
    return (tokens[0] if tokens else "", head.replace(" ", ""), indexed)


def schema_from_signature(signature: str, *, anonymous: bool = False) -> EventSchema:
    """Build an EventSchema from a Solidity event signature string.

    Example input:
      "Transfer(address indexed from, address indexed to, uint256 value)"

    Nested tuples are spelled inline, e.g. "Swap((address,uint256) leg)".
    Parameter names are optional.
    """
    sig = signature.strip()
    if sig.startswith("event "):
        sig = sig[len("event ") :].strip()
    open_paren = sig.find("(")
    close_paren = sig.rfind(")")
    if open_paren <= 0 or close_paren < open_paren:
        raise ValueError(f"Invalid event signature: {signature}")
    name = sig[:open_paren].strip()
    params_str = sig[open_paren + 1 : close_paren]
    if sig[close_paren + 1 :].strip() == "anonymous":
        anonymous = True

    inputs = []
    for part in split_top_level(params_str):
        if not part:
            raise ValueError(f"Invalid event signature: {signature}")
        param_name, abi_type, indexed = _parse_param(part)
        inputs.append(EventParameter(param_name, parse_type(abi_type), indexed))
    return EventSchema(name=name, inputs=tuple(inputs), anonymous=anonymous)


def make_registry(signatures: str | list[str]) -> EventRegistry:
    """Create a dispatch registry from one or multiple event signatures.

    Args:
        signatures: Single signature string or list of signature strings

    Returns:
        EventRegistry routing by topic0 to each declared event
    """
    # Normalize to list
    sig_list = [signatures] if isinstance(signatures, str) else signatures
    return EventRegistry.dispatch(schema_from_signature(s) for s in sig_list)
