"""Explicit client for bounded calls against the backing store.

One ``StoreClient`` is constructed at process start and handed to every
adapter that needs the database. It owns the session factory, the tenant
(``app_id``), and a small worker pool so that each store call can be given a
hard timeout.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, TypeVar

from sqlalchemy.orm import Session as DbSession, sessionmaker

from api.config import APP_ID, STORE_MAX_WORKERS, STORE_TIMEOUT_SECONDS
from api.errors import StoreTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreClient:
    """Runs database work on a worker pool with a per-call timeout."""

    def __init__(
        self,
        session_factory: sessionmaker,
        app_id: str = APP_ID,
        timeout: float = STORE_TIMEOUT_SECONDS,
        max_workers: int = STORE_MAX_WORKERS,
    ) -> None:
        self.session_factory = session_factory
        self.app_id = app_id
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="store"
        )

    def _run_in_session(self, work: Callable[[DbSession], T]) -> T:
        db = self.session_factory()
        try:
            return work(db)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def submit(self, work: Callable[[DbSession], T]) -> Future:
        """Schedule ``work(db)`` on the pool without waiting for it."""
        return self._executor.submit(self._run_in_session, work)

    def wait(self, future: Future, label: str = "store call") -> T:
        """Wait for a submitted call, raising StoreTimeout when it overruns."""
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as e:
            future.cancel()
            logger.warning(f"{label} timed out after {self.timeout}s")
            raise StoreTimeout(f"{label} timed out after {self.timeout}s") from e

    def call(self, work: Callable[[DbSession], T], label: str = "store call") -> T:
        """Run ``work(db)`` with a fresh session and wait for the result."""
        return self.wait(self.submit(work), label)

    def close(self) -> None:
        """Stop the worker pool. Pending calls are abandoned."""
        self._executor.shutdown(wait=False, cancel_futures=True)
