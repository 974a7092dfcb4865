"""
Storage Services Package

Provides the abstract persistence gateway and its implementations.
The JSON file backend is the default; the in-memory one backs tests.
"""

from lifehub.services.storage.interface import (
    StorageError,
    StorageWriteError,
    StoreGatewayInterface,
    snapshot_payload,
)
from lifehub.services.storage.json_file import JsonFileStoreGateway
from lifehub.services.storage.memory import InMemoryStoreGateway

__all__ = [
    # Interface
    "StoreGatewayInterface",
    "snapshot_payload",
    # Exceptions
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryStoreGateway",
    "JsonFileStoreGateway",
]
