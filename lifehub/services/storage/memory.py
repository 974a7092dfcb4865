"""
In-Memory Storage Implementation

Keeps the last saved snapshot as a JSON-ready dict. Used by tests and by
sessions that should not touch the disk.
"""

import copy
from typing import Any, Optional

from lifehub.models.store import Store
from lifehub.services.storage.interface import StoreGatewayInterface, snapshot_payload


class InMemoryStoreGateway(StoreGatewayInterface):

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._payload = copy.deepcopy(initial)
        self.save_count = 0

    def load(self) -> Optional[dict[str, Any]]:
        return copy.deepcopy(self._payload)

    def save(self, store: Store) -> None:
        self._payload = snapshot_payload(store)
        self.save_count += 1
