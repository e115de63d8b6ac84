"""Core data models, configurations, interfaces and errors.

This package provides:
- Data models (RawLog, LogRecord, DecodedParam, DecodedEvent, DecodeStats)
- Configuration classes (DecodeConfig, GenerateConfig, ShardConfig)
- Error hierarchy (AbiLogError and friends)
"""

from abilog.core.config import DecodeConfig, GenerateConfig, ShardConfig
from abilog.core.errors import (
    AbiLogError,
    DataTooShortError,
    DecodeError,
    EmptyAbiError,
    EventNotFoundError,
    InputFormatError,
    MalformedDataError,
    SchemaError,
    SignatureMismatchError,
    TopicCountMismatchError,
    TypeParseError,
    UnknownTopic0Error,
    UnknownTypeError,
    UnsupportedStructureError,
)
from abilog.core.models import DecodedEvent, DecodedParam, DecodeStats, LogRecord, RawLog

__all__ = [
    "DecodeConfig",
    "GenerateConfig",
    "ShardConfig",
    "AbiLogError",
    "DataTooShortError",
    "DecodeError",
    "EmptyAbiError",
    "EventNotFoundError",
    "InputFormatError",
    "MalformedDataError",
    "SchemaError",
    "SignatureMismatchError",
    "TopicCountMismatchError",
    "TypeParseError",
    "UnknownTopic0Error",
    "UnknownTypeError",
    "UnsupportedStructureError",
    "DecodedEvent",
    "DecodedParam",
    "DecodeStats",
    "LogRecord",
    "RawLog",
]
