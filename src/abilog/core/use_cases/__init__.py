"""Application use cases built on the core interfaces."""

from abilog.core.use_cases.decode_stream import DecodeStreamOutput, decode_stream

__all__ = ["DecodeStreamOutput", "decode_stream"]
