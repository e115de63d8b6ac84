"""Parquet shard sink with dynamic columns.

Every projected parameter key becomes its own string column the first time it
appears; rows of events that lack the key hold null. Values are stored as
strings (nested arrays as compact JSON) so uint256 values stay exact.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from abilog.core.config import ShardConfig
from abilog.core.interfaces import IDecodedSink
from abilog.core.models import DecodedEvent

logger = logging.getLogger(__name__)


def _cell(v: Any) -> str | None:
    if v is None or isinstance(v, str):
        return v
    return json.dumps(v, separators=(",", ":"), ensure_ascii=False)


def column_name(key: str) -> str:
    """Parquet column for a projected key; `event` and `param_*` keys get a `param_` prefix.

    The mapping is injective, so no two keys of one event share a column.
    """
    if key == "event" or key.startswith("param_"):
        return "param_" + key
    return key


@dataclass(slots=True)
class EventRowBuffer:
    """Rows of projected events: an `event` name per row plus sparse parameter columns."""

    names: list[str] = field(default_factory=list)
    params: dict[str, list[str | None]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.names)

    def append(self, name: str, row: dict[str, Any]) -> None:
        n = len(self.names)
        self.names.append(name)
        for key, value in row.items():
            column = self.params.setdefault(column_name(key), [None] * n)
            column.append(_cell(value))
        for column in self.params.values():
            if len(column) == n:
                column.append(None)

    def pop_front(self, n: int) -> EventRowBuffer:
        """Detach the first `n` rows into a new buffer."""
        head = EventRowBuffer(self.names[:n], {k: c[:n] for k, c in self.params.items()})
        del self.names[:n]
        for column in self.params.values():
            del column[:n]
        return head

    def to_table(self) -> pa.Table:
        """Arrow table with `event` first and parameter columns sorted by key."""
        keys = ["event", *sorted(self.params)]
        columns = [self.names, *(self.params[k] for k in sorted(self.params))]
        schema = pa.schema([pa.field(k, pa.string()) for k in keys])
        return pa.Table.from_arrays([pa.array(c, type=pa.string()) for c in columns], schema=schema)


class ParquetShardSink(IDecodedSink):
    """Buffers decoded events and writes `shard_NNNNN.parquet` files.

    A shard is written every `rows_per_shard` rows; `close` writes the final
    partial shard. Numbering continues after shards already in `out_dir`.
    """

    def __init__(self, config: ShardConfig, *, checksum_addresses: bool = False) -> None:
        self.config = config
        self.checksum_addresses = checksum_addresses
        self.out_dir = Path(config.out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self.buf = EventRowBuffer()
        self.written: list[Path] = []
        self.shard_idx = self._next_index()

    def existing_shards(self) -> list[Path]:
        return sorted(self.out_dir.glob("shard_*.parquet"))

    def shard_path(self, idx: int) -> Path:
        return self.out_dir / f"shard_{idx:05d}.parquet"

    def _next_index(self) -> int:
        indices = [int(p.stem.removeprefix("shard_")) for p in self.existing_shards() if p.stem[6:].isdigit()]
        return max(indices, default=-1) + 1

    def _flush(self, n: int) -> Path:
        """Write the first `n` buffered rows as the next shard (tmp file, then rename)."""
        table = self.buf.pop_front(n).to_table()
        path = self.shard_path(self.shard_idx)
        tmp = path.with_name(path.name + ".tmp")
        pq.write_table(table, tmp, compression=self.config.codec)
        os.replace(tmp, path)
        logger.info("wrote %s (rows=%d, cols=%d)", path, table.num_rows, table.num_columns)
        self.shard_idx += 1
        self.written.append(path)
        return path

    def add(self, event: DecodedEvent) -> None:
        self.buf.append(event.name, event.to_json(checksum_addresses=self.checksum_addresses))
        if len(self.buf) >= self.config.rows_per_shard:
            self._flush(self.config.rows_per_shard)

    def close(self) -> None:
        if len(self.buf):
            self._flush(len(self.buf))
