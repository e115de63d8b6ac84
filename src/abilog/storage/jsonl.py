from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any, TextIO

from abilog.core.errors import InputFormatError
from abilog.core.interfaces import IDecodedSink, IRawLogSource
from abilog.core.models import DecodedEvent, LogRecord, RawLog
from abilog.decoding.projection import to_json_line


def parse_log_record(obj: Any, *, line: int | None = None) -> LogRecord:
    """Validate one `{"topics": [...], "data": "0x..."}` object."""
    if not isinstance(obj, dict):
        raise InputFormatError("record is not a JSON object", line=line)
    topics = obj.get("topics")
    data = obj.get("data")
    if not isinstance(topics, list) or not all(isinstance(t, str) for t in topics):
        raise InputFormatError("'topics' must be a list of hex strings", line=line)
    if not isinstance(data, str):
        raise InputFormatError("'data' must be a hex string", line=line)
    try:
        return LogRecord(RawLog.from_hex(topics, data), line)
    except InputFormatError as e:
        raise InputFormatError(str(e), line=line) from e


def parse_log_line(line: str, *, lineno: int | None = None) -> LogRecord:
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as e:
        raise InputFormatError(f"Invalid JSON line: {e}", line=lineno) from e
    return parse_log_record(obj, line=lineno)


class _RecordIterator:
    """Parses lines lazily; a malformed line raises without ending iteration.

    `on_close` runs once, when the lines are exhausted or `close()` is called.
    """

    def __init__(self, lines: Iterator[str], on_close: Callable[[], None] | None = None) -> None:
        self._lines = lines
        self._lineno = 0
        self._on_close = on_close

    def __iter__(self) -> Iterator[LogRecord]:
        return self

    def __next__(self) -> LogRecord:
        for line in self._lines:
            self._lineno += 1
            line = line.strip()
            if line:
                return parse_log_line(line, lineno=self._lineno)
        self.close()
        raise StopIteration

    def close(self) -> None:
        if self._on_close is not None:
            self._on_close()
            self._on_close = None


class JsonlLogSource(IRawLogSource):
    """Reads one log record per line from a file path or an open text stream.

    Blank lines are skipped. A malformed line raises `InputFormatError` (with
    its 1-based line number) when reached; iteration can resume afterwards.
    A file opened from a path is closed when the records run out or when the
    iterator's `close()` is called.
    """

    def __init__(self, source: Path | TextIO | Iterable[str]) -> None:
        self.source = source

    def __iter__(self) -> Iterator[LogRecord]:
        if isinstance(self.source, Path):
            f = open(self.source, encoding="utf-8")
            return _RecordIterator(f, f.close)
        return _RecordIterator(iter(self.source))


class JsonlSink(IDecodedSink):
    """Writes each decoded event as one compact JSON object per line."""

    def __init__(self, stream: TextIO, *, checksum_addresses: bool = False) -> None:
        self.stream = stream
        self.checksum_addresses = checksum_addresses
        self.written = 0

    def add(self, event: DecodedEvent) -> None:
        self.stream.write(to_json_line(event.to_json(checksum_addresses=self.checksum_addresses)))
        self.written += 1

    def close(self) -> None:
        self.stream.flush()


class NullSink(IDecodedSink):
    """Discards decoded events (decode-only throughput runs)."""

    def add(self, event: DecodedEvent) -> None:
        pass

    def close(self) -> None:
        pass


class FanoutSink(IDecodedSink):
    """Forwards every event to several sinks."""

    def __init__(self, *sinks: IDecodedSink) -> None:
        self.sinks = sinks

    def add(self, event: DecodedEvent) -> None:
        for sink in self.sinks:
            sink.add(event)

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()
