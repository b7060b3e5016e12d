"""Per-user seen history for content rotation."""
from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from api.errors import HistoryUnavailable
from api.models.db.history import SeenItem
from api.services.store_client import StoreClient

logger = logging.getLogger(__name__)


def read_seen_ids(db: DBSession, user_id: int, test_type: str) -> set[str]:
    """Load the seen set for a (user, test type) pair."""
    try:
        rows = db.execute(
            select(SeenItem.item_id).where(
                SeenItem.user_id == user_id,
                SeenItem.test_type == test_type,
            )
        ).scalars().all()
    except SQLAlchemyError as e:
        raise HistoryUnavailable(test_type, f"history read failed: {e}") from e
    return set(rows)


def merge_seen_ids(
    db: DBSession, user_id: int, test_type: str, item_ids: set[str]
) -> int:
    """
    Union ``item_ids`` into the stored seen set.
    Returns the number of ids that were not already recorded.
    """
    try:
        return _insert_missing(db, user_id, test_type, item_ids)
    except IntegrityError:
        # Another writer recorded some of the same ids first
        db.rollback()
    except SQLAlchemyError as e:
        raise HistoryUnavailable(test_type, f"history write failed: {e}") from e

    try:
        return _insert_missing(db, user_id, test_type, item_ids)
    except SQLAlchemyError as e:
        raise HistoryUnavailable(test_type, f"history write failed: {e}") from e


def _insert_missing(
    db: DBSession, user_id: int, test_type: str, item_ids: set[str]
) -> int:
    existing = set(
        db.execute(
            select(SeenItem.item_id).where(
                SeenItem.user_id == user_id,
                SeenItem.test_type == test_type,
                SeenItem.item_id.in_(item_ids),
            )
        ).scalars().all()
    )
    missing = sorted(item_ids - existing)
    for item_id in missing:
        db.add(SeenItem(user_id=user_id, test_type=test_type, item_id=item_id))
    db.commit()
    return len(missing)


class HistoryStore:
    """
    Reads and merges seen sets through the store client.

    Anonymous users (``user_id is None``) have no history: reads return an
    empty set and writes do nothing. Store failures never propagate; reads
    degrade to "no history" and writes are skipped, both with a warning.
    """

    def __init__(self, store: StoreClient) -> None:
        self.store = store

    def get_seen_ids(self, user_id: int | None, test_type: str) -> set[str]:
        if user_id is None:
            return set()
        try:
            return self.store.call(
                lambda db: read_seen_ids(db, user_id, test_type),
                label=f"history read ({test_type})",
            )
        except Exception as e:
            logger.warning(
                f"Seen history unavailable for user {user_id}/{test_type}, "
                f"treating as empty: {e}"
            )
            return set()

    def submit_mark_seen(
        self, user_id: int | None, test_type: str, item_ids: Iterable[str]
    ) -> Future | None:
        """Start a union write without waiting. Returns None when there is nothing to write."""
        ids = {item_id for item_id in item_ids if item_id}
        if user_id is None or not ids:
            return None
        return self.store.submit(
            lambda db: merge_seen_ids(db, user_id, test_type, ids)
        )

    def finish_mark_seen(
        self, future: Future | None, user_id: int | None, test_type: str
    ) -> bool:
        """Wait for a write started by submit_mark_seen. Returns False if it failed."""
        if future is None:
            return True
        try:
            added = self.store.wait(future, label=f"history write ({test_type})")
        except Exception as e:
            logger.warning(
                f"Could not update seen history for user {user_id}/{test_type}: {e}"
            )
            return False
        logger.debug(f"Recorded {added} new seen {test_type} items for user {user_id}")
        return True

    def mark_seen(
        self, user_id: int | None, test_type: str, item_ids: Iterable[str]
    ) -> bool:
        """Union ``item_ids`` into the user's seen set. Never raises."""
        future = self.submit_mark_seen(user_id, test_type, item_ids)
        return self.finish_mark_seen(future, user_id, test_type)
