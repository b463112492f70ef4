from __future__ import annotations

import pytest

from mongo_session import OrjsonCodec, SessionCodecError, new_store_with_client

from .conftest import COL_NAME, DB_NAME


class RecordingCodec(OrjsonCodec):
    def __init__(self) -> None:
        self.encoded = 0
        self.decoded = 0

    def encode(self, values):
        self.encoded += 1
        return super().encode(values)

    def decode(self, blob):
        self.decoded += 1
        return super().decode(blob)


def test_orjson_codec():
    codec = OrjsonCodec()
    assert codec.decode(codec.encode({"a": [1, 2], "b": None})) == {"a": [1, 2], "b": None}
    with pytest.raises(SessionCodecError):
        codec.decode('"just a string"')


async def test_injected_codec_is_used(client):
    codec = RecordingCodec()
    m = await new_store_with_client(client, DB_NAME, COL_NAME, codec=codec)
    store = await m.create(None, "s1", 10)
    store.set("a", 1)
    await store.save()
    await m.update(None, "s1", 10)
    assert (codec.encoded, codec.decoded) == (1, 1)


