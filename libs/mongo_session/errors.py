# libs/mongo_session/errors.py
from __future__ import annotations


class SessionStoreError(Exception):
    """Base class for errors raised by mongo_session itself.

    Driver errors (pymongo.errors.PyMongoError) are not wrapped and reach
    the caller as-is.
    """


class StoreConnectionError(SessionStoreError):
    """The MongoDB server could not be reached while building a manager."""


class SessionCodecError(SessionStoreError):
    """A session value could not be encoded to, or decoded from, its JSON blob."""
