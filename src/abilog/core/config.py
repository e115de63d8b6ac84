from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DecodeConfig:
    """Configuration the decoding core needs from its host."""

    abi_source: bytes
    event_name: str | None = None
    strict_abi: bool = False  # raise on malformed ABI entries instead of dropping them
    skip_errors: bool = False  # skip records that fail to decode instead of aborting
    checksum_addresses: bool = False

    @property
    def dispatch(self) -> bool:
        """True when logs are routed by topic0 (no event name given)."""
        return not self.event_name


@dataclass(frozen=True)
class GenerateConfig:
    """Configuration for the synthetic log generator."""

    count: int = 200_000
    mixed: bool = False  # ERC20 Transfer/Approval + ERC1155 TransferSingle
    seed: int | None = None


@dataclass(frozen=True)
class ShardConfig:
    """Configuration for the Parquet shard sink."""

    out_dir: Path
    rows_per_shard: int = 250_000
    codec: str = "zstd"
