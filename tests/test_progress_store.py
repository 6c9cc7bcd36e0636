from datetime import date, datetime, timedelta, timezone

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from studyflow.core.errors import NotFound
from studyflow.models.progress import UserProgress
from studyflow.services.ease_model import MAX_INTERVAL
from studyflow.services.progress_store import (
    get_difficult,
    get_due_today,
    get_progress,
    review_question,
)

NOW = datetime(2024, 3, 1, 9, 0)
USER = 7


def test_first_review_creates_record(db, topics):
    progress = review_question(db, USER, 1, True, NOW)

    assert progress.id is not None
    assert progress.repetitions == 1
    assert progress.interval == 1
    assert progress.ease_factor == pytest.approx(2.6)
    assert progress.next_review_date == date(2024, 3, 2)
    assert progress.times_reviewed == 1
    assert progress.times_correct == 1
    assert progress.times_incorrect == 0
    assert progress.last_reviewed_at == NOW
    assert db.query(UserProgress).count() == 1


def test_scenario_correct_correct_incorrect(db, topics):
    review_question(db, USER, 1, True, NOW)
    second = review_question(db, USER, 1, True, NOW + timedelta(days=1))
    assert (second.repetitions, second.interval) == (2, 6)
    assert second.ease_factor == pytest.approx(2.7)

    third = review_question(db, USER, 1, False, NOW + timedelta(days=7))
    assert (third.repetitions, third.interval) == (0, 1)
    assert third.ease_factor == pytest.approx(2.5)
    assert third.next_review_date == date(2024, 3, 9)
    assert (third.times_reviewed, third.times_correct, third.times_incorrect) == (3, 2, 1)
    assert db.query(UserProgress).count() == 1


def test_records_are_per_user(db, topics):
    review_question(db, USER, 1, True, NOW)
    other = review_question(db, USER + 1, 1, False, NOW)
    assert other.times_reviewed == 1
    assert other.repetitions == 0
    assert db.query(UserProgress).count() == 2


def test_aware_timestamp_is_stored_as_utc(db, topics):
    aware = datetime(2024, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    progress = review_question(db, USER, 1, True, aware)
    assert progress.last_reviewed_at == datetime(2024, 3, 2, 4, 30)
    assert progress.next_review_date == date(2024, 3, 3)


def test_due_today_uses_utc_day_for_aware_now(db, topics):
    eastern = timezone(timedelta(hours=-5))
    review_question(db, USER, 1, True, datetime(2024, 3, 1, 23, 30, tzinfo=eastern))

    # Still 03-02 in UTC
    assert get_due_today(db, USER, datetime(2024, 3, 2, 18, 0, tzinfo=eastern)) == []
    # 04:30 UTC on 03-03
    due = get_due_today(db, USER, datetime(2024, 3, 2, 23, 30, tzinfo=eastern))
    assert [p.question_id for p in due] == [1]


def test_long_correct_run_stays_schedulable(db, topics):
    for day in range(30):
        progress = review_question(db, USER, 1, True, NOW + timedelta(days=day))

    assert progress.repetitions == 30
    assert progress.interval == MAX_INTERVAL
    assert progress.next_review_date == (NOW + timedelta(days=29)).date() + timedelta(days=MAX_INTERVAL)


def test_unknown_question_is_not_found(db, topics):
    with pytest.raises(NotFound):
        review_question(db, USER, 999, True, NOW)
    assert db.query(UserProgress).count() == 0


def test_unknown_user_has_empty_collections(db, topics):
    assert get_progress(db, 12345) == []
    assert get_progress(db, 12345, topics["sql"]) == []
    assert get_due_today(db, 12345, NOW) == []


def test_get_progress_filters_by_topic(db, topics):
    for question_id in (1, 2, 4):
        review_question(db, USER, question_id, True, NOW)

    assert [p.question_id for p in get_progress(db, USER)] == [1, 2, 4]
    assert [p.question_id for p in get_progress(db, USER, topics["python"])] == [1, 2]
    assert [p.question_id for p in get_progress(db, USER, topics["sql"])] == [4]
    assert get_progress(db, USER, 404) == []


def test_due_today_is_inclusive_by_date(db, topics):
    review_question(db, USER, 1, True, NOW)  # due 03-02
    review_question(db, USER, 2, True, NOW)
    review_question(db, USER, 2, True, NOW)  # due 03-07

    assert get_due_today(db, USER, NOW) == []
    due = get_due_today(db, USER, datetime(2024, 3, 2, 0, 0))
    assert [p.question_id for p in due] == [1]
    due = get_due_today(db, USER, date(2024, 3, 7))
    assert [p.question_id for p in due] == [1, 2]


def test_difficult_orders_by_misses_then_success_rate(db, topics):
    review_question(db, USER, 1, False, NOW)
    review_question(db, USER, 1, False, NOW)
    review_question(db, USER, 2, False, NOW)
    review_question(db, USER, 2, True, NOW)
    review_question(db, USER, 3, False, NOW)
    review_question(db, USER, 4, True, NOW)

    rows = get_difficult(db, USER, limit=3)
    assert [p.question_id for p in rows] == [1, 3, 2]


@settings(max_examples=25, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(st.lists(st.booleans(), min_size=1, max_size=15))
def test_counters_stay_consistent(db, topics, outcomes):
    db.query(UserProgress).delete()
    db.commit()

    for day, correct in enumerate(outcomes):
        progress = review_question(db, USER, 3, correct, NOW + timedelta(days=day))
        assert progress.times_reviewed == progress.times_correct + progress.times_incorrect
        assert progress.repetitions <= progress.times_correct
        assert progress.ease_factor >= 1.3

    assert progress.times_reviewed == len(outcomes)
