# libs/mongo_session/codec.py
from __future__ import annotations

from typing import Dict, Protocol

import orjson

from .errors import SessionCodecError
from .models import JSONValue


class Codec(Protocol):
    def encode(self, values: Dict[str, JSONValue]) -> str: ...

    def decode(self, blob: str) -> Dict[str, JSONValue]: ...


class OrjsonCodec:
    """
    Default session envelope: a JSON object of string keys to JSON values.
    """

    def encode(self, values: Dict[str, JSONValue]) -> str:
        try:
            return orjson.dumps(values).decode("utf-8")
        except orjson.JSONEncodeError as err:
            raise SessionCodecError(f"cannot encode session values: {err}") from err

    def decode(self, blob: str) -> Dict[str, JSONValue]:
        try:
            values = orjson.loads(blob)
        except orjson.JSONDecodeError as err:
            raise SessionCodecError(f"malformed session value: {err}") from err
        if not isinstance(values, dict):
            raise SessionCodecError(
                f"session value must be a JSON object, got {type(values).__name__}"
            )
        return values


default_codec = OrjsonCodec()

__all__ = ["Codec", "OrjsonCodec", "default_codec"]
