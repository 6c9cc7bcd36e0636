from sqlalchemy.orm import Session

from studyflow.models.topic import Question, Topic


def get_question(db: Session, question_id: int) -> Question | None:
    return (
        db.query(Question)
        .filter(Question.id == question_id, Question.is_active.is_(True))
        .first()
    )


def question_exists(db: Session, question_id: int) -> bool:
    return get_question(db, question_id) is not None


def questions_of_topic(db: Session, topic_id: int) -> list[int]:
    rows = (
        db.query(Question.id)
        .filter(Question.topic_id == topic_id, Question.is_active.is_(True))
        .all()
    )
    return [row.id for row in rows]


def total_question_count(db: Session) -> int:
    return db.query(Question).filter(Question.is_active.is_(True)).count()


def list_topics(db: Session) -> list[Topic]:
    return (
        db.query(Topic).filter(Topic.is_active.is_(True)).order_by(Topic.id.asc()).all()
    )


def topic_exists(db: Session, topic_id: int) -> bool:
    return (
        db.query(Topic.id)
        .filter(Topic.id == topic_id, Topic.is_active.is_(True))
        .first()
        is not None
    )
