"""
Session Orchestrator for LifeHub

This module ties the core together and defines the one flow every
change follows:

    intent -> Mutator -> new Store -> save -> becomes current

DESIGN DECISION: The session is the single writer.
- Intents are applied one at a time under a lock
- A rejected intent changes nothing and saves nothing
- A saved Store is always a complete snapshot
- Reads always see the Store produced by the last completed intent
"""

import threading
from typing import Any, Mapping, Optional

from lifehub.config import Settings, get_settings
from lifehub.errors import RecordNotFoundError, ValidationFailedError
from lifehub.log import configure_logging, get_logger
from lifehub.models.store import IdFactory, Store
from lifehub.mutations import Clock, Mutator
from lifehub.services.storage import (
    JsonFileStoreGateway,
    StorageWriteError,
    StoreGatewayInterface,
)


logger = get_logger(__name__)

# Mutator operations that take (store, ...) and return the next Store.
STORE_INTENTS = frozenset({
    "add_transaction",
    "remove_transaction",
    "adjust_emergency_fund_balance",
    "set_monthly_expense_baseline",
    "set_budget",
    "set_emergency_fund_target",
    "set_emergency_fund_name",
    "add_health_entry",
    "remove_health_entry",
    "add_meal",
    "remove_meal",
    "add_task",
    "toggle_task",
    "remove_task",
    "add_note",
    "toggle_note_pin",
    "remove_note",
    "add_reading_item",
    "set_reading_status",
    "remove_reading_item",
    "toggle_habit",
    "set_water",
    "start_new_week",
    "set_night_shift_mode",
})


class LifeHubSession:
    """
    Holds the current Store and applies intents to it.

    Flow:
    1. Load → gateway snapshot overlaid on defaults
    2. Apply → Mutator validates and builds the next Store
    3. Save → gateway writes the complete Store
    4. Publish → the new Store becomes current
    """

    def __init__(
        self,
        gateway: StoreGatewayInterface,
        mutator: Optional[Mutator] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self._gateway = gateway
        self._mutator = mutator or Mutator(clock=clock, id_factory=id_factory)
        self._lock = threading.Lock()
        self._store = Store.initial(
            gateway.load(),
            today=self._mutator.today(),
            id_factory=id_factory,
        )
        logger.info(
            "session_started",
            transactions=len(self._store.transactions),
            tasks=len(self._store.tasks),
        )

    @property
    def store(self) -> Store:
        """The most recent consistent snapshot."""
        return self._store

    @property
    def mutator(self) -> Mutator:
        return self._mutator

    def _commit(self, intent: str, updated: Store) -> Store:
        """Save and publish a new Store. Caller holds the lock."""
        if updated is self._store:
            logger.debug("mutation_skipped", intent=intent)
            return updated

        previous_count = len(self._store.transactions)
        # In-memory state is the source of truth even if the write fails.
        self._store = updated
        try:
            self._gateway.save(updated)
        except StorageWriteError as e:
            logger.error("store_save_failed", intent=intent, error=str(e))
            raise

        logger.info(
            "mutation_applied",
            intent=intent,
            transactions_delta=len(updated.transactions) - previous_count,
        )
        return updated

    def apply(self, intent: str, *args: Any, **kwargs: Any) -> Store:
        """
        Apply one intent and persist the result.

        Args:
            intent: Name of a Mutator operation (see STORE_INTENTS)
            *args, **kwargs: The operation's arguments, minus the Store

        Returns:
            The new current Store

        Raises:
            ValueError: Unknown intent name
            ValidationFailedError: The intent was rejected; nothing changed
            RecordNotFoundError: The intent named a record that does not exist
            StorageWriteError: The new Store is current but was not saved
        """
        if intent not in STORE_INTENTS:
            raise ValueError(f"Unknown intent: {intent}")
        operation = getattr(self._mutator, intent)

        with self._lock:
            try:
                updated = operation(self._store, *args, **kwargs)
            except ValidationFailedError as e:
                logger.warning(
                    "mutation_rejected",
                    intent=intent,
                    reason=str(e),
                    error_count=e.result.error_count,
                )
                raise
            except RecordNotFoundError as e:
                logger.warning(
                    "mutation_rejected",
                    intent=intent,
                    collection=e.collection,
                    record_id=e.record_id,
                )
                raise
            return self._commit(intent, updated)

    def quick_add_category_expense(
        self,
        category: str,
        amount: Any,
        staging: Optional[Mapping[str, float]] = None,
    ) -> dict[str, float]:
        """
        Quick-add an expense for a category.

        Returns:
            The staging amounts to show next (this category reset to 0
            when something was added, unchanged otherwise)
        """
        with self._lock:
            updated, staged = self._mutator.quick_add_category_expense(
                self._store, category, amount, staging
            )
            self._commit("quick_add_category_expense", updated)
            return staged


def create_session(
    settings: Optional[Settings] = None,
    gateway: Optional[StoreGatewayInterface] = None,
) -> LifeHubSession:
    """
    Create a session wired to the configured storage.

    Logging is configured here so every entry point gets it.
    """
    settings = settings or get_settings()
    configure_logging(settings.logging)
    gateway = gateway or JsonFileStoreGateway(settings.storage)
    return LifeHubSession(
        gateway=gateway,
        mutator=Mutator(settings=settings.tracker),
    )
