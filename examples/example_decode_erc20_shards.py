from pathlib import Path

import pyarrow.parquet as pq

from abilog.abi_events import make_event_registry_from_abi
from abilog.core.config import GenerateConfig, ShardConfig
from abilog.core.use_cases import decode_stream
from abilog.decoding.registry import EventRegistryProvider
from abilog.storage import JsonlLogSource, ParquetShardSink
from abilog.synthetic import write_logs

EXAMPLES_ROOT = Path(__file__).parent
assert EXAMPLES_ROOT.name == "examples"
REPO_ROOT = EXAMPLES_ROOT.parent
OUT_ROOT = REPO_ROOT / "data_examples"

ABI = REPO_ROOT / "tests" / "abi" / "mixed.json"
assert ABI.is_file()

LOGS = OUT_ROOT / "logs.jsonl"


def main():
    n = write_logs(LOGS, GenerateConfig(count=100_000, mixed=True, seed=42))
    print(f"generated {n} logs")

    registry = make_event_registry_from_abi(ABI)
    print(registry, registry.topic0s())

    sink = ParquetShardSink(ShardConfig(out_dir=OUT_ROOT / "shards", rows_per_shard=25_000))
    output = decode_stream(
        source=JsonlLogSource(LOGS),
        registry_provider=EventRegistryProvider(registry),
        sink=sink,
    )
    print(output.stats.summary())

    # Load first shard and print number of rows, columns and second record
    table = pq.read_table(sink.written[0])
    print(table.num_rows)
    print(table.column_names)
    print(table.slice(1, 1).to_pylist()[0])

    # Count rows per event across every shard
    counts: dict[str, int] = {}
    for path in sink.written:
        for name in pq.read_table(path, columns=["event"]).column("event").to_pylist():
            counts[name] = counts.get(name, 0) + 1
    print(counts)


if __name__ == "__main__":
    main()
