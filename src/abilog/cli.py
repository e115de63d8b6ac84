import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from abilog.abi_events import registry_from_config
from abilog.core.config import DecodeConfig, GenerateConfig, ShardConfig
from abilog.core.errors import AbiLogError
from abilog.core.interfaces import IDecodedSink
from abilog.core.use_cases.decode_stream import decode_stream
from abilog.decoding.registry import EventRegistryProvider
from abilog.storage.jsonl import FanoutSink, JsonlLogSource, JsonlSink, NullSink
from abilog.storage.shards import ParquetShardSink
from abilog.synthetic import write_logs

console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.group()
def cli() -> None:
    """abilog: ABI-driven EVM event log decoder."""


@cli.command("decode")
@click.option(
    "--abi",
    "abi_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="ABI JSON file (array, or object with an 'abi'/'events' array)",
)
@click.option("--event", "event_name", type=str, default=None, help="Decode every log as this event; default routes by topic0")
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help='JSONL input with {"topics":[...],"data":"0x..."} per line; default stdin',
)
@click.option("--print/--no-print", "print_", default=False, show_default=True, help="Print decoded JSON per line to stdout")
@click.option(
    "--parquet-out",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Also write decoded rows as Parquet shards into this directory",
)
@click.option("--rows-per-shard", type=int, default=250_000, show_default=True)
@click.option("--skip-errors/--no-skip-errors", default=False, show_default=True, help="Skip records that fail to decode")
@click.option("--strict-abi/--no-strict-abi", default=False, show_default=True, help="Fail on malformed ABI events instead of dropping them")
@click.option("--checksum/--no-checksum", default=False, show_default=True, help="EIP-55 checksum addresses in output")
@click.option("-v", "--verbose", is_flag=True, default=False)
def decode_cmd(
    abi_path: Path,
    event_name: str | None,
    input_path: Path | None,
    print_: bool,
    parquet_out: Path | None,
    rows_per_shard: int,
    skip_errors: bool,
    strict_abi: bool,
    checksum: bool,
    verbose: bool,
) -> None:
    """Decode raw logs against an ABI and report throughput."""
    _setup_logging(verbose)

    config = DecodeConfig(
        abi_source=abi_path.read_bytes(),
        event_name=event_name,
        strict_abi=strict_abi,
        skip_errors=skip_errors,
        checksum_addresses=checksum,
    )

    try:
        registry = registry_from_config(config)
    except AbiLogError as e:
        raise click.ClickException(f"Failed to load event(s) from {abi_path}: {e}") from e

    sinks: list[IDecodedSink] = []
    if print_:
        sinks.append(JsonlSink(click.get_text_stream("stdout"), checksum_addresses=config.checksum_addresses))
    if parquet_out is not None:
        shard_config = ShardConfig(out_dir=parquet_out, rows_per_shard=rows_per_shard)
        sinks.append(ParquetShardSink(shard_config, checksum_addresses=config.checksum_addresses))
    sink: IDecodedSink = FanoutSink(*sinks) if sinks else NullSink()

    source = JsonlLogSource(input_path if input_path is not None else sys.stdin)

    try:
        output = decode_stream(
            source=source,
            registry_provider=EventRegistryProvider(registry),
            sink=sink,
            skip_errors=config.skip_errors,
        )
    except AbiLogError as e:
        raise click.ClickException(str(e)) from e

    console.print(output.stats.summary(), highlight=False)


@cli.command("generate")
@click.option("--count", type=int, default=200_000, show_default=True, help="Number of logs to generate")
@click.option("--mixed/--no-mixed", default=False, show_default=True, help="Mix ERC20 Transfer/Approval and ERC1155 TransferSingle")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible output")
@click.option("--out", "out_path", type=click.Path(dir_okay=False, path_type=Path), default=Path("data/logs.jsonl"), show_default=True)
def generate_cmd(count: int, mixed: bool, seed: int | None, out_path: Path) -> None:
    """Generate synthetic logs as JSONL."""
    config = GenerateConfig(count=count, mixed=mixed, seed=seed)
    kind = "MIXED (ERC20/Approval/ERC1155.Single)" if mixed else "ERC20 Transfer"
    console.print(f"Generating {count} {kind} logs to {out_path}...", highlight=False)
    n = write_logs(out_path, config)
    console.print(f"[bold]done[/]: {n} logs")


if __name__ == "__main__":
    cli()
