from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from abilog.core.models import DecodedEvent, LogRecord

if TYPE_CHECKING:
    from abilog.decoding.registry import EventRegistry


# ---------------------------------------------------------------------------
# IRawLogSource
# ---------------------------------------------------------------------------

@runtime_checkable
class IRawLogSource(Protocol):
    """
    Abstract source of raw log records.

    Domain expectations:
    - It yields LogRecord objects one at a time, already parsed into bytes.
    - Malformed records raise InputFormatError when they are reached, so the
      use case can decide whether to skip them.
    - An iterator holding a resource (an open file) exposes `close()`; the
      use case calls it when it stops early.
    """

    def __iter__(self) -> Iterator[LogRecord]:
        """
        Iterate over records in input order.

        Implementations:
        - JSONL file / stdin reader
        - In-memory list for testing
        """
        ...


# ---------------------------------------------------------------------------
# IDecodedSink
# ---------------------------------------------------------------------------

@runtime_checkable
class IDecodedSink(Protocol):
    """
    Abstract sink for decoded events.

    Domain expectations:
    - It accepts one DecodedEvent at a time.
    - Buffering and flushing are implementation concerns; `close` flushes.
    """

    def add(self, event: DecodedEvent) -> None:
        """
        Accept one decoded event.

        Implementations:
        - JsonlSink (one JSON object per line)
        - ParquetShardSink (columnar shards)
        - NullSink (throughput runs)
        """
        ...

    def close(self) -> None:
        """Flush and finalize any buffered output."""
        ...


# ---------------------------------------------------------------------------
# IEventRegistryProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventRegistryProvider(Protocol):
    """
    Abstract provider of the EventRegistry used for decoding.

    Domain expectations:
    - It provides a fully initialized, read-only EventRegistry.
    - How the registry is built (ABI file, signature strings) is an
      infrastructure concern.
    """

    def get_registry(self) -> EventRegistry:
        """Return a fully configured EventRegistry instance."""
        ...
