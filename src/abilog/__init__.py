from __future__ import annotations

from .abi_events import build_event_schemas, load_abi, make_event_registry_from_abi, registry_from_config
from .core.config import DecodeConfig
from .core.errors import AbiLogError, DecodeError, InputFormatError, SchemaError, TypeParseError
from .core.models import DecodedEvent, DecodedParam, RawLog
from .decoding.decoder import decode_event, decode_log
from .decoding.projection import project
from .decoding.registry import EventRegistry
from .decoding.registry_builder import make_registry, schema_from_signature
from .decoding.specs import EventParameter, EventSchema
from .decoding.types import Types, parse_type, render
from .decoding.values import Values

__all__ = [
    "build_event_schemas",
    "load_abi",
    "make_event_registry_from_abi",
    "registry_from_config",
    "DecodeConfig",
    "AbiLogError",
    "DecodeError",
    "InputFormatError",
    "SchemaError",
    "TypeParseError",
    "DecodedEvent",
    "DecodedParam",
    "RawLog",
    "decode_event",
    "decode_log",
    "project",
    "EventRegistry",
    "make_registry",
    "schema_from_signature",
    "EventParameter",
    "EventSchema",
    "Types",
    "parse_type",
    "render",
    "Values",
]
