"""Process-wide content services, built once at startup."""
from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.orm import sessionmaker

from api.config import (
    APP_ID,
    STATIC_CATALOG_DIR,
    STORAGE_BASE_URL,
    STORE_MAX_WORKERS,
    STORE_TIMEOUT_SECONDS,
)
from api.services.catalog_service import (
    CatalogFetcher,
    DynamicCatalogSource,
    StaticCatalogSource,
)
from api.services.history_service import HistoryStore
from api.services.selector_service import ContentSelector
from api.services.session_service import SessionRecorder
from api.services.store_client import StoreClient


@dataclass
class ContentContext:
    """Wiring between the store client and the content services."""

    store: StoreClient
    catalog: CatalogFetcher
    history: HistoryStore
    selector: ContentSelector
    recorder: SessionRecorder

    def close(self) -> None:
        self.store.close()


def build_context(
    session_factory: sessionmaker,
    app_id: str = APP_ID,
    static_dir: Path = STATIC_CATALOG_DIR,
    storage_base_url: str = STORAGE_BASE_URL,
    timeout: float = STORE_TIMEOUT_SECONDS,
    max_workers: int = STORE_MAX_WORKERS,
    rng: random.Random | None = None,
) -> ContentContext:
    """Create the store client and every adapter that shares it."""
    store = StoreClient(
        session_factory, app_id=app_id, timeout=timeout, max_workers=max_workers
    )
    catalog = CatalogFetcher(
        [DynamicCatalogSource(store), StaticCatalogSource(static_dir)]
    )
    history = HistoryStore(store)
    selector = ContentSelector(
        catalog, history, rng=rng, storage_base_url=storage_base_url
    )
    recorder = SessionRecorder(store, history)
    return ContentContext(
        store=store,
        catalog=catalog,
        history=history,
        selector=selector,
        recorder=recorder,
    )
