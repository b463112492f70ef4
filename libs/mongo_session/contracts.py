# libs/mongo_session/contracts.py
"""
Session-store contract consumed by the HTTP session layer.

The session layer drives a ManagerStore through the session lifecycle and
works with the Store it hands back for the rest of the request.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from .models import JSONValue


class Store(ABC):
    @abstractmethod
    def context(self) -> Any: ...

    @abstractmethod
    def session_id(self) -> str: ...

    @abstractmethod
    def set(self, key: str, value: JSONValue) -> None: ...

    @abstractmethod
    def get(self, key: str) -> Tuple[Optional[JSONValue], bool]: ...

    @abstractmethod
    def delete(self, key: str) -> Optional[JSONValue]: ...

    @abstractmethod
    async def flush(self) -> None: ...

    @abstractmethod
    async def save(self) -> None: ...


class ManagerStore(ABC):
    @abstractmethod
    async def check(self, ctx: Any, sid: str) -> bool:
        """True when sid has a live, non-empty record."""

    @abstractmethod
    async def create(self, ctx: Any, sid: str, ttl: int) -> Store:
        """A new empty session. Nothing is written until Store.save()."""

    @abstractmethod
    async def update(self, ctx: Any, sid: str, ttl: int) -> Store:
        """Load sid and push its expiry out by ttl seconds."""

    @abstractmethod
    async def delete(self, ctx: Any, sid: str) -> None: ...

    @abstractmethod
    async def refresh(self, ctx: Any, old_sid: str, sid: str, ttl: int) -> Store:
        """Move old_sid's data to sid."""

    @abstractmethod
    async def close(self) -> None: ...
