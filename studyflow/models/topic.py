import enum

from sqlalchemy import JSON, Boolean, Column, Enum, ForeignKey, Integer, String, Text

from studyflow.core.database import Base


class QuestionDifficulty(enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Topic(Base):
    __tablename__ = "topics"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    parent_id = Column(Integer, ForeignKey("topics.id"), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True)
    topic_id = Column(Integer, ForeignKey("topics.id"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    # Carried for the client's question shape; scheduling does not read them
    key_points = Column(JSON, default=list)
    difficulty = Column(Enum(QuestionDifficulty), default=QuestionDifficulty.MEDIUM)
    is_quick_review = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
