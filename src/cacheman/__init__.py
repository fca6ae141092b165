"""cacheman — Redis cache-store adapter with namespacing, JSON values and TTLs."""

from cacheman.kernel.exceptions import (
    BackendException,
    CacheConnectionException,
    CachemanException,
    DecodeException,
    EncodeException,
)
from cacheman.store import (
    DEFAULT_PREFIX,
    DEFAULT_TTL,
    NO_EXPIRY,
    CacheStore,
    DeleteStrategy,
    RedisStore,
    ScanEntry,
    ScanResult,
    StoreOptions,
    create_store,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PREFIX",
    "DEFAULT_TTL",
    "NO_EXPIRY",
    "BackendException",
    "CacheConnectionException",
    "CacheStore",
    "CachemanException",
    "DecodeException",
    "DeleteStrategy",
    "EncodeException",
    "RedisStore",
    "ScanEntry",
    "ScanResult",
    "StoreOptions",
    "create_store",
]
