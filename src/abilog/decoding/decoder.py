"""ABI log decoder.

Translates a `RawLog` into an ordered list of `DecodedParam` according to an
`EventSchema`:

- indexed parameters come from topics (topic0 is the event hash unless the
  event is anonymous); elementary types decode from the 32-byte word, while
  strings, bytes, arrays and tuples only expose the keccak hash stored there:
  indexed dynamic values are irreversible, only their hash is available.
- non-indexed parameters are decoded together as one ABI tuple from `data`
  using the standard head/tail layout.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import repeat

from abilog.core.errors import (
    DataTooShortError,
    MalformedDataError,
    SignatureMismatchError,
    TopicCountMismatchError,
)
from abilog.core.models import DecodedEvent, DecodedParam, RawLog
from abilog.decoding.registry import EventRegistry
from abilog.decoding.specs import EventSchema
from abilog.decoding.types import WORD, Types, TypeDescriptor, head_size, is_dynamic, is_elementary
from abilog.decoding.utils import uint_at, word_at
from abilog.decoding.values import Value, Values

# ---------- elementary words ----------


def decode_word(t: TypeDescriptor, word: bytes, *, param: str | None = None, offset: int | None = None) -> Value:
    """Decode one 32-byte word holding an elementary value."""
    match t:
        case Types.Address():
            return Values.Address(word[-20:])
        case Types.Bool():
            v = int.from_bytes(word, "big")
            if v > 1:
                raise MalformedDataError(f"Invalid bool word 0x{word.hex()}", param=param, offset=offset)
            return Values.Bool(v == 1)
        case Types.Uint():
            return Values.Uint(int.from_bytes(word, "big", signed=False))
        case Types.Int():
            return Values.Int(int.from_bytes(word, "big", signed=True))
        case Types.FixedBytes(size=size):
            return Values.FixedBytes(word[:size])
    raise TypeError(f"Not an elementary type: {t!r}")


# ---------- head/tail decoding ----------


def _decode_at(t: TypeDescriptor, data: bytes, pos: int, param: str | None) -> Value:
    """Decode `t` whose encoding starts at byte `pos` of `data`."""
    match t:
        case Types.String():
            raw = _read_bytes(data, pos, param)
            return Values.String(raw.decode("utf-8", errors="replace"))
        case Types.Bytes():
            return Values.Bytes(_read_bytes(data, pos, param))
        case Types.Array(element=element):
            count = uint_at(data, pos, param=param)
            return Values.List(tuple(_decode_repeated(element, count, data, pos + WORD, param)))
        case Types.FixedArray(element=element, length=length):
            return Values.List(tuple(_decode_repeated(element, length, data, pos, param)))
        case Types.Tuple(components=components):
            return Values.Tuple(tuple(_decode_sequence(components, data, pos, param)))
    return decode_word(t, word_at(data, pos, param=param), param=param, offset=pos)


def _read_bytes(data: bytes, pos: int, param: str | None) -> bytes:
    length = uint_at(data, pos, param=param)
    start = pos + WORD
    if start + length > len(data):
        raise DataTooShortError(
            f"Length {length} at offset {pos} exceeds data size {len(data)}",
            param=param,
            offset=pos,
        )
    return data[start : start + length]


def _decode_repeated(
    element: TypeDescriptor,
    count: int,
    data: bytes,
    start: int,
    param: str | None,
) -> list[Value]:
    """Decode `count` elements of one type (array body) starting at `start`."""
    head_end = count * head_size(element)
    if start + head_end > len(data):
        raise DataTooShortError(
            f"{count} elements of {head_size(element)} head bytes at offset {start} exceed data size {len(data)}",
            param=param,
            offset=start,
        )
    return _decode_members(repeat(element, count), repeat(param), head_end, data, start)


def _decode_sequence(
    types: Sequence[TypeDescriptor],
    data: bytes,
    start: int,
    param: str | None,
    params: Sequence[str | None] | None = None,
) -> list[Value]:
    """Decode an ABI tuple whose head region begins at byte `start`.

    `params` optionally names each member for error context.
    """
    names = params if params is not None else [param] * len(types)
    cursor = start
    for t, name in zip(types, names):
        if cursor + head_size(t) > len(data):
            raise DataTooShortError(
                f"Head of {head_size(t)} bytes at offset {cursor} exceeds data size {len(data)}",
                param=name,
                offset=cursor,
            )
        cursor += head_size(t)
    return _decode_members(types, names, cursor - start, data, start)


def _decode_members(
    types: Iterable[TypeDescriptor],
    names: Iterable[str | None],
    head_end: int,
    data: bytes,
    start: int,
) -> list[Value]:
    """Walk a head region already known to fit in `data`.

    Offsets of dynamic members are relative to `start`. They must point past
    the head region and never backward relative to the previous offset.
    """
    values: list[Value] = []
    cursor = start
    last_offset = head_end
    for t, name in zip(types, names):
        if is_dynamic(t):
            offset = uint_at(data, cursor, param=name)
            if offset < head_end:
                raise MalformedDataError(
                    f"Offset {offset} points into the head region (size {head_end})",
                    param=name,
                    offset=cursor,
                )
            if offset < last_offset:
                raise MalformedDataError(
                    f"Offset {offset} points backward (previous {last_offset})",
                    param=name,
                    offset=cursor,
                )
            if start + offset > len(data):
                raise DataTooShortError(
                    f"Offset {offset} exceeds data size {len(data)}",
                    param=name,
                    offset=cursor,
                )
            last_offset = offset
            values.append(_decode_at(t, data, start + offset, name))
        else:
            values.append(_decode_at(t, data, cursor, name))
        cursor += head_size(t)
    return values


# ---------- topics ----------


def _hashed_in_topic(t: TypeDescriptor) -> bool:
    """Indexed non-elementary values are stored as their keccak hash."""
    return is_dynamic(t) or not is_elementary(t)


def decode_topic(t: TypeDescriptor, topic: bytes, *, param: str | None = None) -> Value:
    if _hashed_in_topic(t):
        return Values.FixedBytes(topic)
    return decode_word(t, topic, param=param)


# ---------- main entry points ----------


def decode_log(schema: EventSchema, raw_log: RawLog) -> list[DecodedParam]:
    """Decode every declared parameter of `schema`, in declaration order."""
    topics = raw_log.topics
    expected = schema.expected_topic_count
    if len(topics) != expected:
        raise TopicCountMismatchError(expected, len(topics))

    if schema.anonymous:
        indexed_topics = list(topics)
    else:
        if topics[0] != schema.topic0:
            raise SignatureMismatchError(schema.topic0, topics[0])
        indexed_topics = list(topics[1:])

    data_inputs = schema.data_inputs
    data_values = iter(
        _decode_sequence(
            [p.type for p in data_inputs],
            raw_log.data,
            0,
            None,
            params=[p.name for p in data_inputs],
        )
    )

    topic_iter = iter(indexed_topics)
    out: list[DecodedParam] = []
    for p in schema.inputs:
        if p.indexed:
            value = decode_topic(p.type, next(topic_iter), param=p.name)
        else:
            value = next(data_values)
        out.append(DecodedParam(p.name, value, p.indexed))
    return out


def decode_event(registry: EventRegistry, raw_log: RawLog) -> DecodedEvent:
    """Resolve the schema for `raw_log` and decode it."""
    schema = registry.resolve(raw_log.topics)
    return DecodedEvent(
        name=schema.name,
        signature=schema.signature,
        params=decode_log(schema, raw_log),
    )
