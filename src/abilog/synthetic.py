"""Synthetic log generator for benchmarks and smoke tests.

Produces JSONL records shaped like `{"topics": [...], "data": "0x..."}`:
ERC-20 `Transfer` only, or with `mixed` a 50/30/20 split of ERC-20
`Transfer`, ERC-20 `Approval` and ERC-1155 `TransferSingle`.
"""

from __future__ import annotations

import json
import random
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from abilog.core.config import GenerateConfig
from abilog.decoding.registries import erc20_schemas, erc1155_schemas

_TRANSFER, _APPROVAL = erc20_schemas()
_TRANSFER_SINGLE = erc1155_schemas()[0]


def _word(value: int) -> str:
    return value.to_bytes(32, "big").hex()


def _address_topic(rng: random.Random) -> str:
    return "0x" + _word(rng.getrandbits(160))


def _record(topic0: str, indexed: int, data_words: list[int], rng: random.Random) -> dict[str, Any]:
    topics = [topic0] + [_address_topic(rng) for _ in range(indexed)]
    return {"topics": topics, "data": "0x" + "".join(_word(w) for w in data_words)}


def erc20_transfer(rng: random.Random) -> dict[str, Any]:
    return _record(_TRANSFER.topic0_hex, 2, [rng.randrange(10**9)], rng)


def erc20_approval(rng: random.Random) -> dict[str, Any]:
    return _record(_APPROVAL.topic0_hex, 2, [rng.randrange(10**9)], rng)


def erc1155_transfer_single(rng: random.Random) -> dict[str, Any]:
    return _record(_TRANSFER_SINGLE.topic0_hex, 3, [rng.randrange(10**6), rng.randrange(10**6)], rng)


def generate_logs(config: GenerateConfig) -> Iterator[dict[str, Any]]:
    rng = random.Random(config.seed)
    for _ in range(config.count):
        if not config.mixed:
            yield erc20_transfer(rng)
            continue
        r = rng.random()
        if r < 0.5:
            yield erc20_transfer(rng)
        elif r < 0.8:
            yield erc20_approval(rng)
        else:
            yield erc1155_transfer_single(rng)


def write_logs(path: Path, config: GenerateConfig) -> int:
    """Write generated records as JSONL; returns the number of lines."""
    path.parent.mkdir(parents=True, exist_ok=True)
    n = 0
    with open(path, "w", encoding="utf-8") as f:
        for rec in generate_logs(config):
            f.write(json.dumps(rec, separators=(",", ":")) + "\n")
            n += 1
    return n
