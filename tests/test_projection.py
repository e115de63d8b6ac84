import json

import pytest

from abilog.core.models import DecodedParam
from abilog.decoding.projection import param_key, project, to_json_line, value_to_json
from abilog.decoding.values import Values

from helpers import BOB

BOB_RAW = bytes.fromhex(BOB[2:])


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Values.Address(BOB_RAW), BOB),
        (Values.Bool(True), True),
        (Values.Uint(2**256 - 1), str(2**256 - 1)),
        (Values.Int(-(2**255)), str(-(2**255))),
        (Values.Bytes(b""), "0x"),
        (Values.Bytes(b"\xab\xcd"), "0xabcd"),
        (Values.FixedBytes(b"\x00\x01"), "0x0001"),
        (Values.String("héllo"), "héllo"),
        (Values.List(()), []),
        (
            Values.Tuple((Values.Uint(1), Values.List((Values.Bool(False),)))),
            ["1", [False]],
        ),
    ],
)
def test_value_to_json(value, expected):
    assert value_to_json(value) == expected


def test_checksum_addresses():
    assert value_to_json(Values.Address(BOB_RAW), checksum_addresses=True) == "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
    nested = Values.List((Values.Address(BOB_RAW),))
    assert value_to_json(nested, checksum_addresses=True) == ["0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"]


def test_value_to_json_rejects_foreign_objects():
    with pytest.raises(TypeError):
        value_to_json(42)


def test_param_key():
    assert param_key("amount", 0) == "amount"
    assert param_key("", 3) == "arg3"


def test_project_keeps_declaration_order():
    params = [
        DecodedParam("to", Values.Address(BOB_RAW), True),
        DecodedParam("", Values.Uint(5)),
        DecodedParam("memo", Values.String("x")),
    ]
    obj = project(params)
    assert list(obj) == ["to", "arg1", "memo"]
    assert obj["arg1"] == "5"


def test_to_json_line_is_compact():
    line = to_json_line({"a": "1", "b": [True, "ü"]})
    assert line == '{"a":"1","b":[true,"ü"]}\n'
    assert json.loads(line) == {"a": "1", "b": [True, "ü"]}
