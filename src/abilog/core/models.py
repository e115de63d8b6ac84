"""Core data models.

- `RawLog`: topics + data of one EVM log, already in bytes.
- `LogRecord`: a `RawLog` plus its position in the input stream.
- `DecodedParam` / `DecodedEvent`: decoder output.
- `DecodeStats`: counters reported out-of-band by the stream use case.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

from abilog.core.utils import hex_to_bytes, hex_to_word

if TYPE_CHECKING:
    from abilog.decoding.values import Value


@dataclass(slots=True, frozen=True)
class RawLog:
    """Raw log as read from the host, topics are 32-byte words."""

    topics: tuple[bytes, ...]
    data: bytes = b""

    @classmethod
    def from_hex(cls, topics: Sequence[str], data: str = "0x") -> RawLog:
        return cls(tuple(hex_to_word(t) for t in topics), hex_to_bytes(data))


@dataclass(slots=True, frozen=True)
class LogRecord:
    """One input record; `line` is 1-based when read from a line stream."""

    log: RawLog
    line: int | None = None


class DecodedParam(NamedTuple):
    name: str
    value: Value
    indexed: bool = False


@dataclass(slots=True)
class DecodedEvent:
    """Decoded log: event name, signature and ordered parameters."""

    name: str
    signature: str
    params: list[DecodedParam]

    def to_json(self, *, checksum_addresses: bool = False) -> dict[str, Any]:
        from abilog.decoding.projection import project

        return project(self.params, checksum_addresses=checksum_addresses)


@dataclass(kw_only=True)
class DecodeStats:
    """Aggregated counters for one stream decode run."""

    decoded: int = 0
    failed: int = 0
    elapsed_s: float = 0.0
    errors: list[str] = field(default_factory=list)

    @property
    def throughput_lps(self) -> float:
        if self.elapsed_s <= 0:
            return 0.0
        return round(self.decoded / self.elapsed_s)

    def summary(self) -> str:
        return (
            f"decoded={self.decoded} failed={self.failed} "
            f"elapsed_ms={self.elapsed_s * 1000:.3f} throughput_lps={self.throughput_lps:.0f}"
        )
