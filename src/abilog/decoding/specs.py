"""Event schema primitives.

Defines immutable dataclasses describing how an event is laid out in a log:
- `EventParameter`: one declared input (name, type descriptor, indexed flag)
- `EventSchema`: one event (name, ordered inputs, anonymous flag) with its
  canonical signature and topic0 hash
"""

from __future__ import annotations

from dataclasses import dataclass, field

from eth_utils import keccak

from abilog.decoding.types import TypeDescriptor, render


@dataclass(frozen=True, slots=True)
class EventParameter:
    """One event input. `name` may be empty when the ABI omits it."""

    name: str
    type: TypeDescriptor
    indexed: bool = False


@dataclass(frozen=True)
class EventSchema:
    """One event definition, hashed once at construction."""

    name: str
    inputs: tuple[EventParameter, ...]
    anonymous: bool = False
    signature: str = field(init=False, repr=False, compare=False)
    topic0: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))
        signature = f"{self.name}({','.join(render(p.type) for p in self.inputs)})"
        object.__setattr__(self, "signature", signature)
        object.__setattr__(self, "topic0", keccak(text=signature))

    @property
    def topic0_hex(self) -> str:
        return "0x" + self.topic0.hex()

    @property
    def indexed_inputs(self) -> tuple[EventParameter, ...]:
        return tuple(p for p in self.inputs if p.indexed)

    @property
    def data_inputs(self) -> tuple[EventParameter, ...]:
        return tuple(p for p in self.inputs if not p.indexed)

    @property
    def expected_topic_count(self) -> int:
        """Number of topics a log of this event carries (topic0 included)."""
        n = len(self.indexed_inputs)
        return n if self.anonymous else n + 1
