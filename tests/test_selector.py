import random
from collections import Counter

import pytest

from api.errors import AllItemsSeen, EmptyCatalog
from api.services.selector_service import ContentSelector
from models import CatalogItem


class FakeCatalog:
    def __init__(self, items: list[CatalogItem]) -> None:
        self.items = items
        self.calls = 0

    def fetch_catalog(self, test_type: str) -> list[CatalogItem]:
        self.calls += 1
        return list(self.items)


class FakeHistory:
    def __init__(self, seen: dict[int, set[str]] | None = None) -> None:
        self.seen = seen or {}
        self.marked: list[tuple] = []

    def get_seen_ids(self, user_id: int | None, test_type: str) -> set[str]:
        if user_id is None:
            return set()
        return set(self.seen.get(user_id, set()))

    def mark_seen(self, user_id, test_type, item_ids) -> bool:
        self.marked.append((user_id, test_type, set(item_ids)))
        return True


def make_items(count: int) -> list[CatalogItem]:
    return [CatalogItem(id=str(n), text=f"word {n}") for n in range(1, count + 1)]


def make_selector(items, seen=None, rng=None, base_url="") -> ContentSelector:
    return ContentSelector(
        FakeCatalog(items),
        FakeHistory(seen),
        rng=rng or random.Random(42),
        storage_base_url=base_url,
    )


def test_pick_one_skips_seen_items_uniformly() -> None:
    selector = make_selector(make_items(5), seen={7: {"1", "2"}}, rng=random.Random(99))

    counts = Counter(selector.pick_one("tat", user_id=7).id for _ in range(3000))

    assert set(counts) == {"3", "4", "5"}
    for item_id in ("3", "4", "5"):
        assert 850 <= counts[item_id] <= 1150


def test_pick_one_raises_when_catalog_empty() -> None:
    selector = make_selector([])
    with pytest.raises(EmptyCatalog) as exc_info:
        selector.pick_one("ppdt", user_id=1)
    assert exc_info.value.test_type == "ppdt"
    assert "administrator" in exc_info.value.message


def test_pick_one_raises_when_everything_seen() -> None:
    selector = make_selector(make_items(3), seen={1: {"1", "2", "3"}})
    with pytest.raises(AllItemsSeen):
        selector.pick_one("tat", user_id=1)


def test_pick_one_ignores_seen_ids_not_in_catalog() -> None:
    selector = make_selector(make_items(2), seen={1: {"1", "retired-item"}})
    assert selector.pick_one("tat", user_id=1).id == "2"


def test_pick_one_has_no_side_effects() -> None:
    history = FakeHistory({1: {"1"}})
    selector = ContentSelector(FakeCatalog(make_items(4)), history, rng=random.Random(1))
    selector.pick_one("tat", user_id=1)
    selector.pick_batch("wat", 2, user_id=1)
    assert history.marked == []


def test_anonymous_user_gets_full_catalog_every_time() -> None:
    selector = make_selector(make_items(1))
    first = selector.pick_one("tat")
    second = selector.pick_one("tat")
    assert first.id == second.id == "1"


def test_pick_one_resolves_relative_image_paths() -> None:
    items = [CatalogItem(id="a", path="/images/a.jpg")]
    selector = make_selector(items, base_url="https://cdn.example.com/")
    assert selector.pick_one("tat").path == "https://cdn.example.com/images/a.jpg"


def test_pick_one_does_not_mutate_catalog_items() -> None:
    items = [CatalogItem(id="a", path="images/a.jpg")]
    selector = make_selector(items, base_url="https://cdn.example.com")
    selector.pick_one("tat")
    assert items[0].path == "images/a.jpg"


def test_pick_batch_underfills_small_catalog() -> None:
    selector = make_selector(make_items(3))
    batch = selector.pick_batch("wat", 10)
    assert len(batch) == 3
    assert sorted(item.id for item in batch) == ["1", "2", "3"]


def test_pick_batch_fills_from_seen_when_all_seen() -> None:
    all_ids = {str(n) for n in range(1, 11)}
    selector = make_selector(make_items(10), seen={3: all_ids})
    batch = selector.pick_batch("srt", 5, user_id=3)
    assert len(batch) == 5
    assert len({item.id for item in batch}) == 5
    assert {item.id for item in batch} <= all_ids


def test_pick_batch_prefers_unseen_items() -> None:
    seen = {str(n) for n in range(1, 8)}
    selector = make_selector(make_items(10), seen={3: seen})

    batch = selector.pick_batch("wat", 5, user_id=3)

    assert len(batch) == 5
    # The three unseen items come first, then seen fill
    assert {item.id for item in batch[:3]} == {"8", "9", "10"}
    assert all(item.id in seen for item in batch[3:])


def test_pick_batch_uses_only_unseen_when_enough() -> None:
    seen = {"1", "2"}
    selector = make_selector(make_items(20), seen={5: seen})
    for _ in range(50):
        batch = selector.pick_batch("wat", 18, user_id=5)
        assert len(batch) == 18
        assert not {item.id for item in batch} & seen


def test_pick_batch_is_a_permutation_without_duplicates() -> None:
    items = make_items(12)
    selector = make_selector(items)
    batch = selector.pick_batch("wat", 12)
    assert sorted(item.id for item in batch) == sorted(item.id for item in items)


def test_pick_batch_shuffles() -> None:
    selector = make_selector(make_items(30), rng=random.Random(5))
    orders = {tuple(item.id for item in selector.pick_batch("wat", 30)) for _ in range(5)}
    assert len(orders) > 1


def test_pick_batch_empty_catalog_returns_empty_list() -> None:
    selector = make_selector([])
    assert selector.pick_batch("oir", 30) == []


def test_pick_batch_rejects_non_positive_count() -> None:
    selector = make_selector(make_items(3))
    with pytest.raises(ValueError):
        selector.pick_batch("wat", 0)
