"""Service layer for the practice session log."""
from __future__ import annotations

import logging
from typing import Sequence

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session as DBSession

from api.errors import SessionPersistFailure
from api.models.db.practice_session import PracticeSession
from api.services.history_service import HistoryStore
from api.services.store_client import StoreClient
from models import CatalogItem, RecordOutcome

logger = logging.getLogger(__name__)


def write_session(
    db: DBSession,
    user_id: int,
    test_type: str,
    responses: list[str],
    item_ids: list[str],
    score: int | None = None,
    total: int | None = None,
    ai_feedback: str | None = None,
) -> str:
    """Append a session record and return its id."""
    session = PracticeSession(
        user_id=user_id,
        test_type=test_type,
        score=score,
        total=total,
        ai_feedback=ai_feedback,
    )
    session.responses = responses
    session.item_ids = item_ids

    db.add(session)
    db.commit()
    return session.id


def list_sessions(
    db: DBSession,
    user_id: int,
    test_type: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[PracticeSession]:
    """Get a user's sessions, newest first."""
    query = select(PracticeSession).where(PracticeSession.user_id == user_id)

    if test_type:
        query = query.where(PracticeSession.test_type == test_type)

    query = (
        query.order_by(PracticeSession.timestamp.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.execute(query).scalars().all())


def get_session(
    db: DBSession, user_id: int, session_id: str
) -> PracticeSession | None:
    """Get one of the user's sessions by id."""
    session = db.get(PracticeSession, session_id)
    if session is None or session.user_id != user_id:
        return None
    return session


class SessionRecorder:
    """
    Persists a completed test attempt and marks its items as seen.

    The session write and the history merge are issued together and joined,
    so a failure in one never hides the outcome of the other. Neither
    failure is raised; the returned RecordOutcome says what was saved.
    """

    def __init__(self, store: StoreClient, history: HistoryStore) -> None:
        self.store = store
        self.history = history

    def record_session(
        self,
        user_id: int | None,
        test_type: str,
        items: Sequence[CatalogItem],
        responses: Sequence[str],
        score: int | None = None,
        total: int | None = None,
        ai_feedback: str | None = None,
    ) -> RecordOutcome:
        item_ids = [item.id for item in items]
        responses = ["" if response is None else str(response) for response in responses]
        if len(responses) != len(item_ids):
            raise HTTPException(
                status_code=400,
                detail="responses and items must have the same length",
            )

        if user_id is None:
            logger.info(f"Not saving anonymous {test_type} session")
            return RecordOutcome(saved=False, history_updated=False, reason="anonymous")

        session_future = None
        try:
            session_future = self.store.submit(
                lambda db: write_session(
                    db, user_id, test_type, responses, item_ids, score, total, ai_feedback
                )
            )
        except Exception as e:
            logger.error(f"Could not schedule {test_type} session write for user {user_id}: {e}")

        history_future = None
        history_scheduled = True
        try:
            history_future = self.history.submit_mark_seen(user_id, test_type, item_ids)
        except Exception as e:
            logger.error(f"Could not schedule history write for user {user_id}/{test_type}: {e}")
            history_scheduled = False

        session_id = None
        if session_future is not None:
            try:
                session_id = self.store.wait(
                    session_future, label=f"session write ({test_type})"
                )
            except Exception as e:
                failure = SessionPersistFailure(
                    test_type, f"session write failed for user {user_id}: {e}"
                )
                logger.error(str(failure))

        history_updated = history_scheduled and self.history.finish_mark_seen(
            history_future, user_id, test_type
        )

        if session_id is None:
            return RecordOutcome(
                saved=False,
                history_updated=history_updated,
                reason="session_write_failed",
            )

        logger.info(f"Saved {test_type} session {session_id} for user {user_id}")
        return RecordOutcome(
            saved=True, history_updated=history_updated, session_id=session_id
        )
