import logging
from datetime import date, datetime

from sqlalchemy.orm import Session

from studyflow.core.clock import as_naive_utc
from studyflow.core.database import flush_new_row, run_in_transaction
from studyflow.core.errors import NotFound
from studyflow.models.progress import INITIAL_EASE_FACTOR, UserProgress
from studyflow.services import directory
from studyflow.services.ease_model import Schedule, compute_next

logger = logging.getLogger(__name__)


def apply_review(
    db: Session, user_id: int, question_id: int, was_correct: bool, now: datetime
) -> UserProgress:
    """Stage one review on the session without committing it."""
    now = as_naive_utc(now)
    if not directory.question_exists(db, question_id):
        raise NotFound(f"Question {question_id} not found")

    progress = (
        db.query(UserProgress)
        .filter(
            UserProgress.user_id == user_id, UserProgress.question_id == question_id
        )
        .first()
    )
    created = progress is None
    if created:
        progress = UserProgress(
            user_id=user_id,
            question_id=question_id,
            ease_factor=INITIAL_EASE_FACTOR,
            interval=0,
            repetitions=0,
            times_reviewed=0,
            times_correct=0,
            times_incorrect=0,
        )

    schedule = compute_next(
        Schedule(progress.ease_factor, progress.interval, progress.repetitions),
        was_correct,
        now,
    )
    progress.ease_factor = schedule.ease_factor
    progress.interval = schedule.interval
    progress.repetitions = schedule.repetitions
    progress.next_review_date = schedule.next_review_date

    progress.times_reviewed += 1
    if was_correct:
        progress.times_correct += 1
    else:
        progress.times_incorrect += 1
    progress.last_reviewed_at = now

    if created:
        flush_new_row(db, progress)
    else:
        db.flush()
    logger.debug(
        "User %s reviewed question %s (correct=%s): ease=%.2f interval=%d",
        user_id,
        question_id,
        was_correct,
        progress.ease_factor,
        progress.interval,
    )
    return progress


def review_question(
    db: Session, user_id: int, question_id: int, was_correct: bool, now: datetime
) -> UserProgress:
    return run_in_transaction(
        db, lambda: apply_review(db, user_id, question_id, was_correct, now)
    )


def get_progress(
    db: Session, user_id: int, topic_id: int | None = None
) -> list[UserProgress]:
    query = db.query(UserProgress).filter(UserProgress.user_id == user_id)
    if topic_id is not None:
        question_ids = directory.questions_of_topic(db, topic_id)
        if not question_ids:
            return []
        query = query.filter(UserProgress.question_id.in_(question_ids))
    return query.order_by(UserProgress.question_id.asc()).all()


def get_due_today(db: Session, user_id: int, now: datetime | date) -> list[UserProgress]:
    today = as_naive_utc(now).date() if isinstance(now, datetime) else now
    return (
        db.query(UserProgress)
        .filter(
            UserProgress.user_id == user_id, UserProgress.next_review_date <= today
        )
        .order_by(UserProgress.next_review_date.asc(), UserProgress.ease_factor.asc())
        .all()
    )


def get_difficult(db: Session, user_id: int, limit: int = 10) -> list[UserProgress]:
    rows = (
        db.query(UserProgress)
        .filter(UserProgress.user_id == user_id, UserProgress.times_reviewed > 0)
        .all()
    )
    rows.sort(
        key=lambda p: (-p.times_incorrect, p.times_correct / p.times_reviewed, p.question_id)
    )
    return rows[:limit]
