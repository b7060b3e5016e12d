import logging

import pytest

from api.services import history_service
from api.services.history_service import HistoryStore
from api.services.store_client import StoreClient


def broken_factory():
    raise RuntimeError("history store unreachable")


def test_anonymous_user_has_no_history(store: StoreClient) -> None:
    history = HistoryStore(store)
    assert history.get_seen_ids(None, "tat") == set()
    assert history.mark_seen(None, "tat", {"a", "b"}) is True
    assert history.get_seen_ids(None, "tat") == set()


def test_mark_seen_unions_with_existing(store: StoreClient, make_user) -> None:
    user_id = make_user()
    history = HistoryStore(store)

    history.mark_seen(user_id, "wat", {"w1", "w2"})
    history.mark_seen(user_id, "wat", {"w2", "w3"})

    assert history.get_seen_ids(user_id, "wat") == {"w1", "w2", "w3"}


def test_mark_seen_is_idempotent(store: StoreClient, make_user) -> None:
    user_id = make_user()
    history = HistoryStore(store)

    history.mark_seen(user_id, "srt", {"s1", "s2"})
    once = history.get_seen_ids(user_id, "srt")
    history.mark_seen(user_id, "srt", {"s1", "s2"})

    assert history.get_seen_ids(user_id, "srt") == once == {"s1", "s2"}


def test_marking_empty_set_changes_nothing(store: StoreClient, make_user) -> None:
    user_id = make_user()
    history = HistoryStore(store)
    history.mark_seen(user_id, "tat", {"t1"})

    assert history.mark_seen(user_id, "tat", set()) is True
    assert history.get_seen_ids(user_id, "tat") == {"t1"}


def test_history_is_scoped_by_user_and_test_type(store: StoreClient, make_user) -> None:
    alice = make_user("alice")
    bob = make_user("bobby")
    history = HistoryStore(store)

    history.mark_seen(alice, "tat", {"t1"})
    history.mark_seen(alice, "ppdt", {"p1"})
    history.mark_seen(bob, "tat", {"t2"})

    assert history.get_seen_ids(alice, "tat") == {"t1"}
    assert history.get_seen_ids(alice, "ppdt") == {"p1"}
    assert history.get_seen_ids(bob, "tat") == {"t2"}


def test_merge_seen_ids_counts_new_rows(session_factory, make_user) -> None:
    user_id = make_user()
    db = session_factory()
    try:
        assert history_service.merge_seen_ids(db, user_id, "wat", {"a", "b"}) == 2
        assert history_service.merge_seen_ids(db, user_id, "wat", {"b", "c"}) == 1
        assert history_service.read_seen_ids(db, user_id, "wat") == {"a", "b", "c"}
    finally:
        db.close()


def test_read_failure_degrades_to_empty(caplog: pytest.LogCaptureFixture) -> None:
    failing = StoreClient(broken_factory, timeout=1)
    try:
        with caplog.at_level(logging.WARNING):
            assert HistoryStore(failing).get_seen_ids(1, "tat") == set()
        assert "treating as empty" in caplog.text
    finally:
        failing.close()


def test_write_failure_is_swallowed(caplog: pytest.LogCaptureFixture) -> None:
    failing = StoreClient(broken_factory, timeout=1)
    try:
        with caplog.at_level(logging.WARNING):
            assert HistoryStore(failing).mark_seen(1, "tat", {"t1"}) is False
        assert "Could not update seen history" in caplog.text
    finally:
        failing.close()
