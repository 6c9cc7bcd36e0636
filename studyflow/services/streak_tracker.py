import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from studyflow.core.database import flush_new_row, run_in_transaction
from studyflow.core.errors import InvalidArgument
from studyflow.models.streak import UserStreak

logger = logging.getLogger(__name__)


def get_streak(db: Session, user_id: int) -> UserStreak | None:
    return db.query(UserStreak).filter(UserStreak.user_id == user_id).first()


def apply_activity(db: Session, user_id: int, today: date) -> UserStreak:
    """Stage a day of activity without committing it."""
    streak = get_streak(db, user_id)

    if streak is None:
        streak = UserStreak(
            user_id=user_id, current_streak=1, longest_streak=1, last_study_date=today
        )
        flush_new_row(db, streak)
        logger.info("User %s started a streak on %s", user_id, today)
        return streak

    if today < streak.last_study_date:
        raise InvalidArgument(
            f"Activity on {today} is earlier than last study date {streak.last_study_date}"
        )

    if today == streak.last_study_date:
        return streak

    if today - streak.last_study_date == timedelta(days=1):
        streak.current_streak += 1
        logger.info("User %s streak now %d days", user_id, streak.current_streak)
    else:
        logger.info(
            "User %s streak of %d broken (last study %s)",
            user_id,
            streak.current_streak,
            streak.last_study_date,
        )
        streak.current_streak = 1

    streak.last_study_date = today
    streak.longest_streak = max(streak.longest_streak, streak.current_streak)
    db.flush()
    return streak


def record_activity(db: Session, user_id: int, today: date) -> UserStreak:
    return run_in_transaction(db, lambda: apply_activity(db, user_id, today))
