"""Error hierarchy for ABI loading and log decoding.

- `TypeParseError`: an ABI type string cannot be parsed.
- `SchemaError`: the ABI document or the registry lookup is unusable.
- `DecodeError`: one log record cannot be decoded against its schema.
- `InputFormatError`: a log record is not valid JSON / hex (host framing).

Schema errors are fatal at startup. Decode and input errors are fatal to one
record only; the host decides whether to skip or abort.
"""

from __future__ import annotations


class AbiLogError(Exception):
    """Base class for every error raised by abilog."""


# ---------- type strings ----------


class TypeParseError(AbiLogError, ValueError):
    """Malformed ABI type string."""


class UnknownTypeError(TypeParseError):
    def __init__(self, type_string: str, reason: str | None = None) -> None:
        self.type_string = type_string
        self.reason = reason
        msg = f"Unknown ABI type: {type_string!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


# ---------- schema / registry ----------


class SchemaError(AbiLogError):
    """ABI document or registry lookup failure."""


class UnsupportedStructureError(SchemaError):
    def __init__(self, detail: str = "expected a list or an object with an 'abi' or 'events' list") -> None:
        self.detail = detail
        super().__init__(f"Unsupported ABI JSON structure: {detail}")


class EventNotFoundError(SchemaError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Event {name!r} not found in ABI")


class EmptyAbiError(SchemaError):
    def __init__(self) -> None:
        super().__init__("No events found in ABI")


class UnknownTopic0Error(SchemaError):
    def __init__(self, topic0: bytes) -> None:
        self.topic0 = topic0
        super().__init__(f"Unknown topic0 for provided ABI: 0x{topic0.hex()}")


# ---------- decoding ----------


class DecodeError(AbiLogError):
    """Decoding failure for a single log.

    `param` names the top-level event parameter being decoded (when known) and
    `offset` the byte offset into `data` where decoding went wrong.
    """

    def __init__(self, message: str, *, param: str | None = None, offset: int | None = None) -> None:
        self.param = param
        self.offset = offset
        context = []
        if param is not None:
            context.append(f"param={param!r}")
        if offset is not None:
            context.append(f"offset={offset}")
        if context:
            message = f"{message} [{', '.join(context)}]"
        super().__init__(message)


class TopicCountMismatchError(DecodeError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} topics, got {actual}")


class DataTooShortError(DecodeError):
    pass


class MalformedDataError(DecodeError):
    pass


class SignatureMismatchError(DecodeError):
    def __init__(self, expected: bytes, actual: bytes) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"topic0 0x{actual.hex()} does not match event signature 0x{expected.hex()}")


# ---------- host input framing ----------


class InputFormatError(AbiLogError, ValueError):
    """Malformed log record (bad JSON, bad hex, wrong topic width)."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
