"""ABI JSON loading: structural validation and EventSchema construction.

The ABI document is either a list of entries or an object holding such a list
under `abi` or `events`. Only entries with `"type": "event"` are considered;
an event whose shape or type strings are malformed is dropped with a warning
(or raised, with `strict=True`), so one exotic entry does not sink the load.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from abilog.core.config import DecodeConfig
from abilog.core.errors import TypeParseError, UnknownTypeError, UnsupportedStructureError
from abilog.decoding.registry import EventRegistry
from abilog.decoding.specs import EventParameter, EventSchema
from abilog.decoding.types import MAX_NESTING, TypeDescriptor, parse_type

logger = logging.getLogger(__name__)


class AbiInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    name: str | None = None
    indexed: bool | None = None
    internalType: str | None = None
    components: list[AbiInput] | None = None


AbiInput.model_rebuild()


class AbiEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Literal["event"]
    name: str
    inputs: Sequence[AbiInput]
    anonymous: bool | None = None


@dataclass(frozen=True)
class SchemaWarning:
    """One ABI entry dropped during schema building."""

    index: int
    name: str | None
    reason: str


AbiSource = bytes | str | Path


def load_abi(source: AbiSource) -> Any:
    """Parse ABI JSON from a path, raw bytes or JSON text."""
    if isinstance(source, Path):
        source = source.read_bytes()
    try:
        return json.loads(source)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise UnsupportedStructureError(f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise UnsupportedStructureError("JSON nested too deeply") from e


def get_abi_entries(abi_json: Any) -> list[Any]:
    """Return the list of ABI entries, accepting the wrapped object forms."""
    if isinstance(abi_json, list):
        return abi_json
    if isinstance(abi_json, dict):
        for key in ("abi", "events"):
            entries = abi_json.get(key)
            if isinstance(entries, list):
                return entries
    raise UnsupportedStructureError()


def resolve_input_type(abi_input: AbiInput, depth: int = 0) -> TypeDescriptor:
    """Parse an input's type, resolving `tuple` types from `components`."""
    if depth > MAX_NESTING:
        raise UnknownTypeError(abi_input.type, f"components nested deeper than {MAX_NESTING} levels")
    components = None
    if abi_input.type.startswith("tuple") and abi_input.components is not None:
        components = [resolve_input_type(c, depth + 1) for c in abi_input.components]
    return parse_type(abi_input.type, components)


def get_event_schema(event: AbiEvent) -> EventSchema:
    return EventSchema(
        name=event.name,
        inputs=tuple(
            EventParameter(
                name=abi_input.name or "",
                type=resolve_input_type(abi_input),
                indexed=bool(abi_input.indexed),
            )
            for abi_input in event.inputs
        ),
        anonymous=bool(event.anonymous),
    )


def _is_event_entry(entry: Any) -> bool:
    return isinstance(entry, dict) and entry.get("type") == "event"


def build_event_schemas(
    abi_json: Any,
    *,
    strict: bool = False,
) -> tuple[list[EventSchema], list[SchemaWarning]]:
    """Build EventSchemas for every event entry, in load order.

    Returns the schemas and one `SchemaWarning` per dropped entry.
    """
    schemas: list[EventSchema] = []
    warnings: list[SchemaWarning] = []
    for idx, entry in enumerate(get_abi_entries(abi_json)):
        if not _is_event_entry(entry):
            continue
        try:
            schemas.append(get_event_schema(AbiEvent.model_validate(entry)))
        except (ValidationError, TypeParseError) as e:
            if strict and isinstance(e, ValidationError):
                raise UnsupportedStructureError(f"event entry #{idx}: {e}") from e
            if strict:
                raise
            name = entry.get("name") if isinstance(entry.get("name"), str) else None
            logger.warning("dropping ABI entry #%d (%s): %s", idx, name or "<unnamed>", e)
            warnings.append(SchemaWarning(idx, name, str(e)))
    return schemas, warnings


def get_events_from_abi(source: AbiSource, *, strict: bool = False) -> dict[str, EventSchema]:
    """Map event name → first schema with that name."""
    schemas, _ = build_event_schemas(load_abi(source), strict=strict)
    events: dict[str, EventSchema] = {}
    for schema in schemas:
        events.setdefault(schema.name, schema)
    return events


def make_event_registry_from_schemas(
    schemas: Sequence[EventSchema],
    event_name: str | None = None,
) -> EventRegistry:
    """Named mode when `event_name` is given, topic0 dispatch otherwise."""
    if event_name:
        return EventRegistry.named(schemas, event_name)
    return EventRegistry.dispatch(schemas)


def make_event_registry_from_abi(
    source: AbiSource,
    event_name: str | None = None,
    *,
    strict: bool = False,
) -> EventRegistry:
    schemas, _ = build_event_schemas(load_abi(source), strict=strict)
    return make_event_registry_from_schemas(schemas, event_name)


def registry_from_config(config: DecodeConfig) -> EventRegistry:
    return make_event_registry_from_abi(config.abi_source, config.event_name, strict=config.strict_abi)
