"""ABI-driven event log decoding.

This package provides:
- Type descriptors (Types) parsed from ABI type strings
- Event schemas (EventParameter, EventSchema) with topic0 hashes
- Registry with named or topic0-dispatch modes
- Head/tail ABI decoder producing Values
- Canonical JSON projection of decoded values
"""

from abilog.decoding.decoder import decode_event, decode_log
from abilog.decoding.projection import project, to_json_line, value_to_json
from abilog.decoding.registry import EventRegistry, EventRegistryProvider
from abilog.decoding.registry_builder import make_registry, schema_from_signature
from abilog.decoding.specs import EventParameter, EventSchema
from abilog.decoding.types import TypeDescriptor, Types, is_dynamic, parse_type, render
from abilog.decoding.values import Value, Values

__all__ = [
    "decode_event",
    "decode_log",
    "project",
    "to_json_line",
    "value_to_json",
    "EventRegistry",
    "EventRegistryProvider",
    "make_registry",
    "schema_from_signature",
    "EventParameter",
    "EventSchema",
    "TypeDescriptor",
    "Types",
    "is_dynamic",
    "parse_type",
    "render",
    "Value",
    "Values",
]
