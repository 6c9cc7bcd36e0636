"""
SM-2 style scheduling driven by a plain correct/incorrect signal.

There is no 0-5 recall grade, so the ease factor moves by fixed steps:
up 0.1 on every correct answer, down 0.2 on a lapse, never below 1.3.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from studyflow.core.clock import as_naive_utc

MIN_EASE_FACTOR = 1.3
EASE_BONUS = 0.1
EASE_PENALTY = 0.2

FIRST_INTERVAL = 1
SECOND_INTERVAL = 6
LAPSE_INTERVAL = 1

# A hundred years; also keeps the due date inside the calendar
MAX_INTERVAL = 36500


@dataclass(frozen=True)
class Schedule:
    ease_factor: float
    interval: int
    repetitions: int
    next_review_date: date | None = None


def round_half_up(value: float | Decimal) -> int:
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_next(prior: Schedule, was_correct: bool, now: datetime | date) -> Schedule:
    """
    Args:
        prior: current ease factor, interval and repetitions. A question that
            was never reviewed comes in as (2.5, 0, 0).
        was_correct: outcome of the review
        now: review moment; only its calendar day matters

    Returns:
        The next schedule, with next_review_date = day(now) + interval. The interval
        is capped at MAX_INTERVAL days.
    """
    if was_correct:
        repetitions = prior.repetitions + 1
        ease_factor = max(MIN_EASE_FACTOR, round(prior.ease_factor + EASE_BONUS, 2))
        if repetitions == 1:
            interval = FIRST_INTERVAL
        elif repetitions == 2:
            interval = SECOND_INTERVAL
        else:
            interval = round_half_up(prior.interval * Decimal(str(ease_factor)))
    else:
        repetitions = 0
        ease_factor = max(MIN_EASE_FACTOR, round(prior.ease_factor - EASE_PENALTY, 2))
        interval = LAPSE_INTERVAL

    # No same-day rescheduling, even from a corrupted zero interval
    interval = min(max(interval, 1), MAX_INTERVAL)

    today = as_naive_utc(now).date() if isinstance(now, datetime) else now
    next_review_date = (
        today + timedelta(days=interval)
        if (date.max - today).days >= interval
        else date.max
    )
    return Schedule(
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        next_review_date=next_review_date,
    )
