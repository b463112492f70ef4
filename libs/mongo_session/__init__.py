from .codec import Codec, OrjsonCodec
from .contracts import ManagerStore, Store
from .errors import SessionCodecError, SessionStoreError, StoreConnectionError
from .logger import get_logger, setup_logging
from .manager import MongoManagerStore, new_store, new_store_from_settings, new_store_with_client
from .models import JSONValue, SessionRecord
from .store import MongoStore

__all__ = [
    "Codec",
    "OrjsonCodec",
    "ManagerStore",
    "Store",
    "SessionStoreError",
    "StoreConnectionError",
    "SessionCodecError",
    "MongoManagerStore",
    "MongoStore",
    "SessionRecord",
    "JSONValue",
    "new_store",
    "new_store_with_client",
    "new_store_from_settings",
    "setup_logging",
    "get_logger",
]
