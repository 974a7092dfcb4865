"""
Abstract Persistence Gateway

DESIGN DECISION: The core never touches storage directly. It talks to
this interface, which allows us to:
1. Keep the Mutator and Aggregator pure
2. Use in-memory storage for testing
3. Swap the JSON file for something else later

The contract is deliberately tiny: load one snapshot, save one snapshot.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from lifehub.errors import LifeHubError
from lifehub.models.store import Store


def snapshot_payload(store: Store) -> dict[str, Any]:
    """The JSON-ready document a Store is persisted as (camelCase keys)."""
    return store.model_dump(mode="json", by_alias=True)


class StoreGatewayInterface(ABC):
    """
    Abstract interface for loading and saving the Store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> Optional[dict[str, Any]]:
        """
        Load the persisted snapshot.

        Returns:
            The raw (possibly partial) snapshot, or None when nothing usable
            is stored. Corrupt data is reported as None, never raised.
        """
        pass

    @abstractmethod
    def save(self, store: Store) -> None:
        """
        Durably save a complete Store, replacing the previous snapshot.

        Raises:
            StorageWriteError: If the snapshot could not be written
        """
        pass


class StorageError(LifeHubError):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """The snapshot could not be written."""
    pass
