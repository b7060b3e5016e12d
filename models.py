from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List


@dataclass(frozen=True)
class CatalogItem:
    id: str
    path: str | None = None  # image URL (TAT, PPDT)
    text: str | None = None  # word, situation or question text
    description: str = ""

    def with_path(self, path: str | None) -> CatalogItem:
        return replace(self, path=path)


@dataclass
class CatalogResult:
    source: str
    items: List[CatalogItem] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.items)


@dataclass
class RecordOutcome:
    saved: bool
    history_updated: bool
    session_id: str | None = None
    reason: str | None = None  # "anonymous" | "session_write_failed" | ...
