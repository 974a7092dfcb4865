"""Services package."""

from lifehub.services.export import (
    CSV_HEADER,
    backup_filename,
    csv_filename,
    to_csv,
    to_json_backup,
)
from lifehub.services.storage import (
    InMemoryStoreGateway,
    JsonFileStoreGateway,
    StorageError,
    StorageWriteError,
    StoreGatewayInterface,
    snapshot_payload,
)

__all__ = [
    # Export
    "CSV_HEADER",
    "backup_filename",
    "csv_filename",
    "to_csv",
    "to_json_backup",
    # Storage
    "InMemoryStoreGateway",
    "JsonFileStoreGateway",
    "StorageError",
    "StorageWriteError",
    "StoreGatewayInterface",
    "snapshot_payload",
]
