import json
import logging
from pathlib import Path

import pytest

from abilog.abi_events import (
    build_event_schemas,
    get_events_from_abi,
    load_abi,
    make_event_registry_from_abi,
    registry_from_config,
)
from abilog.core.config import DecodeConfig
from abilog.core.errors import EventNotFoundError, UnknownTypeError, UnsupportedStructureError
from abilog.decoding.types import Types

from helpers import APPROVAL_TOPIC0, TRANSFER_SINGLE_TOPIC0, TRANSFER_TOPIC0

TRANSFER_ENTRY = {
    "type": "event",
    "name": "Transfer",
    "inputs": [
        {"name": "from", "type": "address", "indexed": True},
        {"name": "to", "type": "address", "indexed": True},
        {"name": "value", "type": "uint256", "indexed": False},
    ],
}


def test_build_from_top_level_array(erc20_abi_path: Path):
    schemas, warnings = build_event_schemas(load_abi(erc20_abi_path))
    assert [s.name for s in schemas] == ["Transfer", "Approval"]
    assert warnings == []
    assert schemas[0].topic0 == TRANSFER_TOPIC0
    assert schemas[1].topic0 == APPROVAL_TOPIC0


@pytest.mark.parametrize("key", ["abi", "events"])
def test_build_from_wrapped_object(key: str):
    schemas, _ = build_event_schemas({key: [TRANSFER_ENTRY]})
    assert len(schemas) == 1
    assert schemas[0].signature == "Transfer(address,address,uint256)"


@pytest.mark.parametrize("abi_json", [{"contractName": "X"}, {"abi": "nope"}, "events", 42, None])
def test_unsupported_structure(abi_json):
    with pytest.raises(UnsupportedStructureError):
        build_event_schemas(abi_json)


def test_invalid_json_source():
    with pytest.raises(UnsupportedStructureError):
        load_abi(b"{not json")


def test_non_event_entries_ignored(mixed_schemas):
    names = [s.name for s in mixed_schemas]
    assert "Unauthorized" not in names
    assert names == ["Transfer", "Approval", "TransferSingle", "OrderFilled"]
    assert mixed_schemas[2].topic0 == TRANSFER_SINGLE_TOPIC0


def test_malformed_entry_dropped_with_warning(mixed_abi_path: Path, caplog):
    with caplog.at_level(logging.WARNING, logger="abilog.abi_events"):
        schemas, warnings = build_event_schemas(load_abi(mixed_abi_path))
    assert len(schemas) == 4
    assert len(warnings) == 1
    assert warnings[0].name == "Priced"
    assert warnings[0].index == 4
    assert "fixed128x18" in warnings[0].reason
    assert "dropping ABI entry" in caplog.text


def test_strict_mode_raises(mixed_abi_path: Path):
    with pytest.raises(UnknownTypeError):
        build_event_schemas(load_abi(mixed_abi_path), strict=True)


def test_missing_required_fields():
    entries = [
        {"type": "event", "inputs": []},  # no name
        {"type": "event", "name": "NoInputs"},  # no inputs
        {"type": "event", "name": "NoType", "inputs": [{"name": "x"}]},
        {"type": "event", "name": "Empty", "inputs": []},
    ]
    schemas, warnings = build_event_schemas(entries)
    assert [s.name for s in schemas] == ["Empty"]
    assert [w.index for w in warnings] == [0, 1, 2]
    with pytest.raises(UnsupportedStructureError):
        build_event_schemas(entries, strict=True)


def test_input_defaults():
    schemas, _ = build_event_schemas([{"type": "event", "name": "Ping", "inputs": [{"type": "uint8"}]}])
    (param,) = schemas[0].inputs
    assert param.name == ""
    assert param.indexed is False
    assert schemas[0].anonymous is False


def test_tuple_components_resolved(mixed_schemas):
    order_filled = mixed_schemas[3]
    order, fills = order_filled.data_inputs
    assert order.type == Types.Tuple((Types.Address(), Types.Array(Types.Uint(256)), Types.String()))
    assert fills.type == Types.Array(Types.Tuple((Types.Int(128), Types.Bool())))
    assert order_filled.signature == "OrderFilled(bytes32,(address,uint256[],string),(int128,bool)[])"


def test_anonymous_flag():
    entry = dict(TRANSFER_ENTRY, anonymous=True)
    schemas, _ = build_event_schemas([entry])
    assert schemas[0].anonymous is True
    assert schemas[0].expected_topic_count == 2


def test_signature_hash_stable_across_loads(mixed_abi_path: Path):
    first, _ = build_event_schemas(load_abi(mixed_abi_path))
    second, _ = build_event_schemas(json.loads(mixed_abi_path.read_text()))
    assert [s.topic0 for s in first] == [s.topic0 for s in second]
    assert first == second


def test_get_events_from_abi_keeps_first(erc20_abi_path: Path):
    events = get_events_from_abi(erc20_abi_path)
    assert set(events) == {"Transfer", "Approval"}


def test_make_event_registry_from_abi(mixed_abi_path: Path):
    registry = make_event_registry_from_abi(mixed_abi_path)
    assert registry.is_dispatch
    assert len(registry) == 4
    named = make_event_registry_from_abi(mixed_abi_path.read_bytes(), "Approval")
    assert named.selected is not None
    assert named.selected.topic0 == APPROVAL_TOPIC0


def test_registry_from_config(erc20_abi_path: Path):
    dispatch_config = DecodeConfig(abi_source=erc20_abi_path.read_bytes())
    assert dispatch_config.dispatch
    assert registry_from_config(dispatch_config).is_dispatch

    named_config = DecodeConfig(abi_source=erc20_abi_path.read_bytes(), event_name="Transfer")
    assert not named_config.dispatch
    assert registry_from_config(named_config).selected.topic0 == TRANSFER_TOPIC0


def test_registry_from_config_unknown_event(erc20_abi_path: Path):
    with pytest.raises(EventNotFoundError):
        registry_from_config(DecodeConfig(abi_source=erc20_abi_path.read_bytes(), event_name="Swap"))


@pytest.mark.parametrize("bad_type", ["uint²", "bytes³", "uint8[²]", "uint8" + "[]" * 5000, "(" * 5000 + "uint8" + ")" * 5000])
def test_exotic_type_strings_do_not_sink_the_load(bad_type: str):
    entries = [
        {"type": "event", "name": "Bad", "inputs": [{"name": "x", "type": bad_type}]},
        {"type": "event", "name": "Ok", "inputs": [{"name": "x", "type": "uint8"}]},
    ]
    schemas, warnings = build_event_schemas(entries)
    assert [s.name for s in schemas] == ["Ok"]
    assert [w.name for w in warnings] == ["Bad"]
    with pytest.raises(UnknownTypeError):
        build_event_schemas(entries, strict=True)


def test_deeply_nested_components_dropped():
    abi_input: dict = {"name": "x", "type": "uint8"}
    for _ in range(100):
        abi_input = {"name": "x", "type": "tuple", "components": [abi_input]}
    entries = [{"type": "event", "name": "Deep", "inputs": [abi_input]}]
    schemas, warnings = build_event_schemas(entries)
    assert schemas == []
    assert warnings[0].name == "Deep"
