from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from studyflow.core import config
from studyflow.models.progress import UserProgress
from studyflow.models.session import StudySession
from studyflow.models.topic import Question
from studyflow.services import directory
from studyflow.services.progress_store import get_difficult, get_progress
from studyflow.services.streak_tracker import get_streak


@dataclass
class Statistics:
    total_questions: int
    total_reviews: int
    total_correct: int
    total_incorrect: int
    success_rate: float
    total_mastered: int
    current_streak: int
    longest_streak: int
    total_study_time: int
    total_sessions: int


def success_rate(correct: int, reviewed: int) -> float:
    if reviewed == 0:
        return 0.0
    return round(correct / reviewed * 100, 2)


def get_overview(
    db: Session, user_id: int, mastery_threshold: float | None = None
) -> Statistics:
    threshold = (
        config.MASTERY_THRESHOLD if mastery_threshold is None else mastery_threshold
    )
    rows = get_progress(db, user_id)

    total_reviews = sum(p.times_reviewed for p in rows)
    total_correct = sum(p.times_correct for p in rows)
    total_incorrect = sum(p.times_incorrect for p in rows)

    streak = get_streak(db, user_id)

    sessions = (
        db.query(
            func.count(StudySession.id), func.coalesce(func.sum(StudySession.duration), 0)
        )
        .filter(StudySession.user_id == user_id, StudySession.is_completed.is_(True))
        .one()
    )

    return Statistics(
        total_questions=directory.total_question_count(db),
        total_reviews=total_reviews,
        total_correct=total_correct,
        total_incorrect=total_incorrect,
        success_rate=success_rate(total_correct, total_reviews),
        total_mastered=sum(1 for p in rows if p.ease_factor >= threshold),
        current_streak=streak.current_streak if streak else 0,
        longest_streak=streak.longest_streak if streak else 0,
        total_study_time=int(sessions[1]),
        total_sessions=int(sessions[0]),
    )


def get_difficult_questions(db: Session, user_id: int, limit: int = 10) -> list[dict]:
    rows = get_difficult(db, user_id, limit)
    questions = {
        q.id: q
        for q in db.query(Question).filter(
            Question.id.in_([p.question_id for p in rows])
        )
    }

    results = []
    for p in rows:
        question = questions.get(p.question_id)
        results.append(
            {
                "question_id": p.question_id,
                "question": question.question if question else None,
                "topic_id": question.topic_id if question else None,
                "times_reviewed": p.times_reviewed,
                "times_incorrect": p.times_incorrect,
                "success_rate": success_rate(p.times_correct, p.times_reviewed),
                "ease_factor": p.ease_factor,
            }
        )
    return results


def get_by_topic(
    db: Session, user_id: int, mastery_threshold: float | None = None
) -> list[dict]:
    threshold = (
        config.MASTERY_THRESHOLD if mastery_threshold is None else mastery_threshold
    )
    progress_by_question = {p.question_id: p for p in get_progress(db, user_id)}

    results = []
    for topic in directory.list_topics(db):
        question_ids = directory.questions_of_topic(db, topic.id)
        rows = [progress_by_question[q] for q in question_ids if q in progress_by_question]
        reviews = sum(p.times_reviewed for p in rows)
        correct = sum(p.times_correct for p in rows)
        results.append(
            {
                "topic_id": topic.id,
                "topic_name": topic.name,
                "total_questions": len(question_ids),
                "reviewed_questions": len(rows),
                "mastered_questions": sum(1 for p in rows if p.ease_factor >= threshold),
                "total_reviews": reviews,
                "success_rate": success_rate(correct, reviews),
            }
        )
    return results
