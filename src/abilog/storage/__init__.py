"""Storage adapters for log input and decoded output.

This package provides:
- JsonlLogSource: reads `{"topics": [...], "data": "0x..."}` records line by line
- JsonlSink / NullSink / FanoutSink: decoded output sinks
- ParquetShardSink: Parquet shard writer with dynamic columns
"""

from abilog.storage.jsonl import FanoutSink, JsonlLogSource, JsonlSink, NullSink, parse_log_line, parse_log_record
from abilog.storage.shards import ParquetShardSink

__all__ = [
    "FanoutSink",
    "JsonlLogSource",
    "JsonlSink",
    "NullSink",
    "ParquetShardSink",
    "parse_log_line",
    "parse_log_record",
]
