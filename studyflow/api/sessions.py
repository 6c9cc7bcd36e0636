from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyflow.api.deps import get_clock, get_current_user_id
from studyflow.api.schemas import (
    CreateSessionRequest,
    SessionAnswerOut,
    StudySessionOut,
    SubmitAnswer,
)
from studyflow.core.database import get_db
from studyflow.core.errors import InvalidArgument, NotFound
from studyflow.services import directory, session_recorder
from studyflow.services.grader import keyword_overlap_grader

router = APIRouter(prefix="/study-sessions", tags=["study-sessions"])


@router.post("", response_model=StudySessionOut)
def create_session(
    data: CreateSessionRequest,
    user_id: int = Depends(get_current_user_id),
    now: datetime = Depends(get_clock),
    db: Session = Depends(get_db),
):
    return session_recorder.create_session(db, user_id, data.topic_id, data.mode, now)


@router.get("", response_model=list[StudySessionOut])
def list_sessions(
    user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    return session_recorder.list_sessions(db, user_id)


@router.get("/{session_id}", response_model=StudySessionOut)
def get_session(
    session_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return session_recorder.get_session(db, session_id, user_id)


@router.post("/{session_id}/answer", response_model=SessionAnswerOut)
def submit_answer(
    session_id: int,
    data: SubmitAnswer,
    user_id: int = Depends(get_current_user_id),
    now: datetime = Depends(get_clock),
    db: Session = Depends(get_db),
):
    was_correct = data.was_correct
    if was_correct is None:
        if data.user_answer is None:
            raise InvalidArgument("Either wasCorrect or userAnswer is required")
        question = directory.get_question(db, data.question_id)
        if question is None:
            raise NotFound(f"Question {data.question_id} not found")
        was_correct = keyword_overlap_grader(data.user_answer, question.answer)

    return session_recorder.add_answer(
        db,
        session_id,
        data.question_id,
        was_correct,
        now,
        user_answer=data.user_answer,
        time_spent=data.time_spent,
        audio_url=data.audio_url,
        user_id=user_id,
    )


@router.patch("/{session_id}/end", response_model=StudySessionOut)
def end_session(
    session_id: int,
    user_id: int = Depends(get_current_user_id),
    now: datetime = Depends(get_clock),
    db: Session = Depends(get_db),
):
    return session_recorder.end_session(db, session_id, now, user_id=user_id)
