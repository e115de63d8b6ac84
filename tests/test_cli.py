import json
from pathlib import Path

import pyarrow.parquet as pq
from click.testing import CliRunner

from abilog.cli import cli

from helpers import ALICE, BOB, transfer_line


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_decode_prints_jsonl(erc20_abi_path: Path, tmp_path: Path):
    logs = tmp_path / "logs.jsonl"
    logs.write_text(transfer_line(ALICE, BOB, 10) + "\n" + transfer_line(BOB, ALICE, 20) + "\n")
    result = CliRunner().invoke(cli, ["decode", "--abi", str(erc20_abi_path), "--input", str(logs), "--print"])
    assert result.exit_code == 0, result.output
    assert _json_lines(result.output) == [
        {"from": ALICE, "to": BOB, "value": "10"},
        {"from": BOB, "to": ALICE, "value": "20"},
    ]


def test_decode_reads_stdin_named_event(erc20_abi_path: Path):
    result = CliRunner().invoke(
        cli,
        ["decode", "--abi", str(erc20_abi_path), "--event", "Transfer", "--print", "--checksum"],
        input=transfer_line(ALICE, BOB, 1) + "\n",
    )
    assert result.exit_code == 0, result.output
    (row,) = _json_lines(result.output)
    assert row["to"] == "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def test_decode_unknown_event_fails(erc20_abi_path: Path):
    result = CliRunner().invoke(cli, ["decode", "--abi", str(erc20_abi_path), "--event", "Swap"], input="")
    assert result.exit_code == 1
    assert "Failed to load event(s)" in result.output


def test_decode_error_exit_code(erc20_abi_path: Path):
    result = CliRunner().invoke(cli, ["decode", "--abi", str(erc20_abi_path)], input="not json\n")
    assert result.exit_code == 1
    assert "line 1" in result.output


def test_decode_skip_errors(erc20_abi_path: Path):
    stdin = "not json\n" + transfer_line(ALICE, BOB, 1) + "\n"
    result = CliRunner().invoke(cli, ["decode", "--abi", str(erc20_abi_path), "--skip-errors", "--print"], input=stdin)
    assert result.exit_code == 0, result.output
    assert len(_json_lines(result.output)) == 1


def test_generate_then_decode_to_parquet(mixed_abi_path: Path, tmp_path: Path):
    logs = tmp_path / "logs.jsonl"
    runner = CliRunner()
    result = runner.invoke(cli, ["generate", "--count", "50", "--mixed", "--seed", "7", "--out", str(logs)])
    assert result.exit_code == 0, result.output
    assert len(logs.read_text().splitlines()) == 50

    shards = tmp_path / "shards"
    result = runner.invoke(
        cli,
        ["decode", "--abi", str(mixed_abi_path), "--input", str(logs), "--parquet-out", str(shards), "--rows-per-shard", "20"],
    )
    assert result.exit_code == 0, result.output
    files = sorted(shards.glob("shard_*.parquet"))
    assert len(files) == 3
    assert sum(pq.read_metadata(f).num_rows for f in files) == 50


def test_generate_is_reproducible(tmp_path: Path):
    runner = CliRunner()
    a, b = tmp_path / "a.jsonl", tmp_path / "b.jsonl"
    runner.invoke(cli, ["generate", "--count", "10", "--seed", "1", "--out", str(a)])
    runner.invoke(cli, ["generate", "--count", "10", "--seed", "1", "--out", str(b)])
    assert a.read_text() == b.read_text()
