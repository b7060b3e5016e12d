"""Practice session endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session as DbSession

from api.context import ContentContext
from api.database import get_db
from api.dependencies import get_content_context, get_current_user, get_optional_user
from api.models import SessionCreate, SessionRecordResponse, SessionResponse
from api.models.db.practice_session import PracticeSession
from api.models.db.user import User
from api.services import session_service
from api.utils import normalize_test_type, validate_id
from models import CatalogItem

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.post("", response_model=SessionRecordResponse)
def record_session(
    payload: SessionCreate,
    content: Annotated[ContentContext, Depends(get_content_context)],
    current_user: Annotated[User | None, Depends(get_optional_user)],
) -> dict[str, object]:
    """Record a completed test and mark its items as seen."""
    test_type = normalize_test_type(payload.testType)
    items = [CatalogItem(id=validate_id("itemId", item_id)) for item_id in payload.itemIds]

    outcome = content.recorder.record_session(
        current_user.id if current_user else None,
        test_type,
        items,
        payload.responses,
        score=payload.score,
        total=payload.total,
        ai_feedback=payload.aiFeedback,
    )

    if outcome.saved:
        message = "Results saved"
    elif outcome.reason == "anonymous":
        message = "Log in to save your results. This attempt was not saved."
    else:
        message = "Your results could not be saved. Your score is still shown above."

    return {
        "saved": outcome.saved,
        "historyUpdated": outcome.history_updated,
        "sessionId": outcome.session_id,
        "message": message,
    }


@router.get("", response_model=list[SessionResponse])
def list_sessions(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
    test_type: Annotated[str | None, Query(alias="testType")] = None,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[PracticeSession]:
    """List the current user's past sessions, newest first."""
    if test_type is not None:
        test_type = normalize_test_type(test_type)
    return session_service.list_sessions(
        db, current_user.id, test_type=test_type, limit=limit, offset=offset
    )


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> PracticeSession:
    """Get one of the current user's sessions."""
    session_id = validate_id("sessionId", session_id)
    session = session_service.get_session(db, current_user.id, session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session
