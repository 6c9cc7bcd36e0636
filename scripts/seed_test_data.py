# scripts/seed_test_data.py
"""
Quick script to populate your database with topics and questions.
Run this ONCE to get started testing.
"""

from studyflow.core.database import Base, SessionLocal, engine
from studyflow.models import progress, session, streak  # noqa: F401
from studyflow.models.topic import Question, QuestionDifficulty, Topic

TOPICS = {
    "Python Basics": [
        ("What does the 'yield' keyword do?", "It turns a function into a generator that produces values lazily", QuestionDifficulty.MEDIUM),
        ("What is a list comprehension?", "A compact expression that builds a list from an iterable", QuestionDifficulty.EASY),
        ("What is the GIL?", "The global interpreter lock serializes bytecode execution across threads", QuestionDifficulty.HARD),
    ],
    "Databases": [
        ("What does ACID stand for?", "Atomicity consistency isolation durability", QuestionDifficulty.MEDIUM),
        ("What is an index?", "A data structure that speeds up lookups on a column", QuestionDifficulty.EASY),
        ("What is optimistic locking?", "Detecting concurrent writes by comparing a row version before updating", QuestionDifficulty.HARD),
    ],
}


def seed_database():
    """Add test topics and questions"""

    # Create tables if they don't exist
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    print("🌱 Seeding test data...")

    existing_questions = db.query(Question).count()
    if existing_questions > 0:
        print(f"⚠️  Database already has {existing_questions} questions. Skipping seed.")
        print("   Delete your database and re-run if you want fresh data.")
        db.close()
        return

    for order, (name, questions) in enumerate(TOPICS.items(), 1):
        topic = Topic(name=name, description=f"Seed topic #{order}")
        db.add(topic)
        db.flush()

        for text, answer, difficulty in questions:
            db.add(
                Question(
                    topic_id=topic.id,
                    question=text,
                    answer=answer,
                    key_points=[],
                    difficulty=difficulty,
                    is_quick_review=difficulty == QuestionDifficulty.EASY,
                )
            )
        print(f"   Added topic '{name}' with {len(questions)} questions")

    db.commit()
    db.close()

    print("✅ Seed complete!")


if __name__ == "__main__":
    seed_database()
