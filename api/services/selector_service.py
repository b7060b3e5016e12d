"""Unseen-item selection for single-item and batch tests."""
from __future__ import annotations

import logging
import random

from api.config import STORAGE_BASE_URL
from api.errors import AllItemsSeen, EmptyCatalog
from api.services.catalog_service import CatalogFetcher
from api.services.history_service import HistoryStore
from models import CatalogItem
from serialization import resolve_item_path

logger = logging.getLogger(__name__)


class ContentSelector:
    """
    Chooses what a user practises next.

    Selection never writes anything: items only count as seen once a
    completed session is recorded, so an abandoned test does not use up
    content.
    """

    def __init__(
        self,
        catalog: CatalogFetcher,
        history: HistoryStore,
        rng: random.Random | None = None,
        storage_base_url: str = STORAGE_BASE_URL,
    ) -> None:
        self.catalog = catalog
        self.history = history
        self.rng = rng or random.Random()
        self.storage_base_url = storage_base_url

    def _resolve(self, item: CatalogItem) -> CatalogItem:
        if not item.path:
            return item
        return item.with_path(resolve_item_path(item.path, self.storage_base_url))

    def pick_one(self, test_type: str, user_id: int | None = None) -> CatalogItem:
        """
        Pick one item the user has not seen yet, uniformly at random.

        Raises:
            EmptyCatalog: no content exists for the test type.
            AllItemsSeen: every item is already in the user's seen set.
        """
        catalog = self.catalog.fetch_catalog(test_type)
        if not catalog:
            raise EmptyCatalog(test_type)

        seen = self.history.get_seen_ids(user_id, test_type)
        available = [item for item in catalog if item.id not in seen]
        if not available:
            logger.info(f"User {user_id} has seen all {len(catalog)} {test_type} items")
            raise AllItemsSeen(test_type)

        return self._resolve(self.rng.choice(available))

    def pick_batch(
        self, test_type: str, count: int, user_id: int | None = None
    ) -> list[CatalogItem]:
        """
        Pick up to ``count`` items, unseen ones first.

        When the unseen pool runs short the batch is topped up with previously
        seen items in random order. Returns fewer than ``count`` items only
        when the whole catalog is smaller than ``count``.
        """
        if count <= 0:
            raise ValueError("count must be positive")

        catalog = self.catalog.fetch_catalog(test_type)
        if not catalog:
            return []

        seen_ids = self.history.get_seen_ids(user_id, test_type)
        unseen = [item for item in catalog if item.id not in seen_ids]
        seen = [item for item in catalog if item.id in seen_ids]

        self.rng.shuffle(unseen)
        batch = unseen[:count]

        if len(batch) < count:
            self.rng.shuffle(seen)
            batch.extend(seen[: count - len(batch)])
            logger.debug(
                f"{test_type} batch for user {user_id}: {len(unseen)} unseen, "
                f"filled to {len(batch)} of {count}"
            )

        return [self._resolve(item) for item in batch]
