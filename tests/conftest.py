from pathlib import Path

import pytest

from abilog.abi_events import build_event_schemas, load_abi
from abilog.decoding.registry_builder import schema_from_signature
from abilog.decoding.specs import EventSchema

ABI_DIR = Path(__file__).parent / "abi"


@pytest.fixture
def erc20_abi_path() -> Path:
    return ABI_DIR / "erc20.json"


@pytest.fixture
def mixed_abi_path() -> Path:
    return ABI_DIR / "mixed.json"


@pytest.fixture
def mixed_schemas(mixed_abi_path: Path) -> list[EventSchema]:
    schemas, _ = build_event_schemas(load_abi(mixed_abi_path))
    return schemas


@pytest.fixture
def transfer_schema() -> EventSchema:
    return schema_from_signature("Transfer(address indexed from, address indexed to, uint256 value)")
