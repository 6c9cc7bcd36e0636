import logging
from datetime import datetime

from sqlalchemy.orm import Session

from studyflow.core.clock import as_naive_utc
from studyflow.core.database import run_in_transaction
from studyflow.core.errors import InvalidArgument, InvalidState, NotFound
from studyflow.models.session import SessionAnswer, StudyMode, StudySession
from studyflow.services import directory
from studyflow.services.progress_store import apply_review
from studyflow.services.streak_tracker import apply_activity

logger = logging.getLogger(__name__)


def get_session(db: Session, session_id: int, user_id: int | None = None) -> StudySession:
    query = db.query(StudySession).filter(StudySession.id == session_id)
    if user_id is not None:
        query = query.filter(StudySession.user_id == user_id)
    session = query.first()
    if session is None:
        raise NotFound(f"Study session {session_id} not found")
    return session


def list_sessions(db: Session, user_id: int) -> list[StudySession]:
    return (
        db.query(StudySession)
        .filter(StudySession.user_id == user_id)
        .order_by(StudySession.started_at.desc(), StudySession.id.desc())
        .all()
    )


def create_session(
    db: Session, user_id: int, topic_id: int | None, mode: StudyMode, now: datetime
) -> StudySession:
    try:
        mode = StudyMode(mode)
    except ValueError:
        raise InvalidArgument(f"Unknown study mode: {mode}")

    if topic_id is not None and not directory.topic_exists(db, topic_id):
        raise NotFound(f"Topic {topic_id} not found")

    def _create():
        session = StudySession(
            user_id=user_id,
            topic_id=topic_id,
            mode=mode,
            started_at=as_naive_utc(now),
            duration=0,
            questions_reviewed=0,
            questions_correct=0,
            questions_incorrect=0,
            is_completed=False,
        )
        db.add(session)
        db.flush()
        return session

    session = run_in_transaction(db, _create)
    logger.info(
        "User %s started %s session %s", user_id, session.mode.value, session.id
    )
    return session


def add_answer(
    db: Session,
    session_id: int,
    question_id: int,
    was_correct: bool,
    now: datetime,
    user_answer: str | None = None,
    time_spent: int | None = None,
    audio_url: str | None = None,
    user_id: int | None = None,
) -> SessionAnswer:
    """
    Record one answer and schedule the question in the same commit.

    The streak is left alone here; it moves once, when the session ends.
    """
    if time_spent is not None and time_spent < 0:
        raise InvalidArgument("timeSpent cannot be negative")
    now = as_naive_utc(now)

    def _add():
        session = get_session(db, session_id, user_id)
        if session.is_completed:
            raise InvalidState(f"Study session {session_id} is already completed")

        answer = SessionAnswer(
            question_id=question_id,
            was_correct=was_correct,
            user_answer=user_answer,
            audio_url=audio_url,
            time_spent=time_spent or 0,
            answered_at=now,
        )
        session.answers.append(answer)
        session.questions_reviewed += 1
        if was_correct:
            session.questions_correct += 1
        else:
            session.questions_incorrect += 1

        apply_review(db, session.user_id, question_id, was_correct, now)
        db.flush()
        return answer

    return run_in_transaction(db, _add)


def end_session(
    db: Session, session_id: int, now: datetime, user_id: int | None = None
) -> StudySession:
    now = as_naive_utc(now)

    def _end():
        session = get_session(db, session_id, user_id)
        if session.is_completed:
            raise InvalidState(f"Study session {session_id} is already completed")
        if now < session.started_at:
            raise InvalidArgument("A session cannot end before it started")

        session.ended_at = now
        session.duration = int((now - session.started_at).total_seconds())
        session.is_completed = True

        # Abandoned sessions close normally but do not count toward the streak
        if session.questions_reviewed > 0:
            apply_activity(db, session.user_id, now.date())
        db.flush()
        return session

    session = run_in_transaction(db, _end)
    logger.info(
        "Session %s ended: %d/%d correct in %ds",
        session.id,
        session.questions_correct,
        session.questions_reviewed,
        session.duration,
    )
    return session
