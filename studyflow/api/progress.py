from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from studyflow.api.deps import get_clock, get_current_user_id
from studyflow.api.schemas import ReviewRequest, UserProgressOut, UserStreakOut
from studyflow.core.database import get_db
from studyflow.services.progress_store import get_due_today, get_progress, review_question
from studyflow.services.streak_tracker import get_streak

router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("/review", response_model=UserProgressOut)
def review(
    data: ReviewRequest,
    user_id: int = Depends(get_current_user_id),
    now: datetime = Depends(get_clock),
    db: Session = Depends(get_db),
):
    return review_question(db, user_id, data.question_id, data.was_correct, now)


@router.get("/my-progress", response_model=list[UserProgressOut])
def my_progress(
    topic_id: int | None = Query(None, alias="topicId"),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_progress(db, user_id, topic_id)


@router.get("/due-today", response_model=list[UserProgressOut])
def due_today(
    user_id: int = Depends(get_current_user_id),
    now: datetime = Depends(get_clock),
    db: Session = Depends(get_db),
):
    return get_due_today(db, user_id, now)


@router.get("/streak", response_model=UserStreakOut)
def streak(
    user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    existing = get_streak(db, user_id)
    if existing is None:
        # Nothing studied yet; report an empty streak without persisting one
        return UserStreakOut(user_id=user_id, current_streak=0, longest_streak=0)
    return existing
