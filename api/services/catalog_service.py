"""Catalog sources and the fallback chain that reads them."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from api.models.db.catalog import CatalogEntry
from api.services.catalog_admin_service import list_entries
from api.services.store_client import StoreClient
from models import CatalogItem, CatalogResult
from serialization import items_from_payload

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    """Anything that can produce the catalog for one test type."""

    name: str

    def fetch(self, test_type: str) -> CatalogResult:
        ...


def entry_to_item(entry: CatalogEntry) -> CatalogItem:
    """Convert a dynamic store row to a CatalogItem."""
    return CatalogItem(
        id=entry.id,
        path=entry.path,
        text=entry.text,
        description=entry.description or "",
    )


class DynamicCatalogSource:
    """Items added through the admin tools, scoped to the client's app id."""

    name = "dynamic"

    def __init__(self, store: StoreClient) -> None:
        self.store = store

    def _load(self, db, test_type: str) -> list[CatalogItem]:
        entries = list_entries(db, self.store.app_id, test_type)
        return [entry_to_item(entry) for entry in entries]

    def fetch(self, test_type: str) -> CatalogResult:
        try:
            items = self.store.call(
                lambda db: self._load(db, test_type),
                label=f"catalog fetch ({test_type})",
            )
        except Exception as e:
            return CatalogResult(source=self.name, error=e)
        return CatalogResult(source=self.name, items=items)


class StaticCatalogSource:
    """Pre-shipped JSON bundle, one ``<test_type>.json`` file per test type."""

    name = "static"

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, test_type: str) -> Path:
        return self.directory / f"{test_type}.json"

    def fetch(self, test_type: str) -> CatalogResult:
        path = self.path_for(test_type)
        if not path.exists():
            logger.debug(f"No static catalog at {path}")
            return CatalogResult(source=self.name)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            return CatalogResult(source=self.name, error=e)
        if not isinstance(payload, list):
            return CatalogResult(
                source=self.name,
                error=ValueError(f"{path.name} does not contain a list of items"),
            )
        return CatalogResult(source=self.name, items=items_from_payload(payload))


class CatalogFetcher:
    """
    Reads a catalog from an ordered list of sources.

    The first source that yields a non-empty catalog wins; sources are never
    merged. Failures are logged and skipped. When every source fails or is
    empty the result is an empty list, and the caller decides what that means.
    Nothing is cached between calls.
    """

    def __init__(self, sources: list[CatalogSource]) -> None:
        self.sources = list(sources)

    def fetch_catalog(self, test_type: str) -> list[CatalogItem]:
        for source in self.sources:
            result = source.fetch(test_type)
            if result.error is not None:
                logger.warning(
                    f"Catalog source '{result.source}' failed for {test_type}: {result.error}"
                )
                continue
            if result.items:
                logger.debug(
                    f"Loaded {len(result.items)} {test_type} items from '{result.source}'"
                )
                return list(result.items)
            logger.info(f"Catalog source '{result.source}' has no {test_type} items")
        return []
