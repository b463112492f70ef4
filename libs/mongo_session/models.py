# libs/mongo_session/models.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Anything that survives a trip through the JSON envelope
JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def expires_in(ttl_seconds: int) -> datetime:
    return _now() + timedelta(seconds=ttl_seconds)


class SessionRecord(BaseModel):
    """
    Stored in MongoDB, one document per session id.

    value holds the JSON-encoded session values; "" means the session
    carries no data. expired_at is absolute and indexed with a TTL, so the
    server removes the document shortly after it passes.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    value: str = ""
    expired_at: datetime

    @field_validator("expired_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        # clients built without tz_aware=True hand back naive UTC datetimes
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def new(cls, sid: str, value: str, ttl_seconds: int) -> "SessionRecord":
        return cls(id=sid, value=value, expired_at=expires_in(ttl_seconds))

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expired_at < (now or _now())

    def to_doc(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
