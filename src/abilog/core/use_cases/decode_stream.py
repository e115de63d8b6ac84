from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from abilog.core.errors import DecodeError, InputFormatError, SchemaError
from abilog.core.interfaces import IDecodedSink, IEventRegistryProvider, IRawLogSource
from abilog.core.models import DecodeStats
from abilog.decoding.decoder import decode_event

logger = logging.getLogger(__name__)

# Per-record failures; anything else (I/O errors, bugs) always propagates.
RECORD_ERRORS = (DecodeError, SchemaError, InputFormatError)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class DecodeStreamOutput:
    stats: DecodeStats


# ---------------------------------------------------------------------------
# Use case
# ---------------------------------------------------------------------------


def decode_stream(
    *,
    source: IRawLogSource,
    registry_provider: IEventRegistryProvider,
    sink: IDecodedSink,
    skip_errors: bool = False,
    max_recorded_errors: int = 100,
) -> DecodeStreamOutput:
    """
    Decode every record of `source` into `sink`, one record at a time.

    Steps:
    1. Resolve the event schema from the registry (named or topic0 dispatch).
    2. Decode topics + data into typed values.
    3. Hand the decoded event to the sink.

    A per-record failure aborts the stream (the error propagates) unless
    `skip_errors` is set, in which case it is logged, counted and the next
    record is processed. The sink and the record iterator (when it has a
    `close` method) are always closed.
    """
    registry = registry_provider.get_registry()
    stats = DecodeStats()
    t0 = time.perf_counter()

    records = iter(source)
    try:
        while True:
            try:
                record = next(records)
                event = decode_event(registry, record.log)
            except StopIteration:
                break
            except RECORD_ERRORS as e:
                if not skip_errors:
                    raise
                stats.failed += 1
                if len(stats.errors) < max_recorded_errors:
                    stats.errors.append(str(e))
                logger.warning("skipping record: %s", e)
                continue
            sink.add(event)
            stats.decoded += 1
    finally:
        close_records = getattr(records, "close", None)
        if close_records is not None:
            close_records()
        sink.close()
        stats.elapsed_s = time.perf_counter() - t0

    return DecodeStreamOutput(stats=stats)
