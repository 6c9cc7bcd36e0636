import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyflow.core.database import Base


class StudyMode(enum.Enum):
    FLASHCARD = "flashcard"
    EXAM = "exam"
    QUICK_REVIEW = "quick-review"


class StudySession(Base):
    __tablename__ = "study_sessions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    topic_id = Column(Integer, ForeignKey("topics.id"), nullable=True)
    mode = Column(
        Enum(StudyMode, values_callable=lambda modes: [m.value for m in modes]),
        nullable=False,
    )
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    ended_at: Mapped[datetime] = mapped_column(DateTime, nullable=True)
    duration: Mapped[int] = mapped_column(Integer, default=0)  # seconds
    questions_reviewed: Mapped[int] = mapped_column(Integer, default=0)
    questions_correct: Mapped[int] = mapped_column(Integer, default=0)
    questions_incorrect: Mapped[int] = mapped_column(Integer, default=0)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    answers = relationship(
        "SessionAnswer",
        back_populates="session",
        order_by="[SessionAnswer.answered_at, SessionAnswer.id]",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}


class SessionAnswer(Base):
    __tablename__ = "session_answers"

    id = Column(Integer, primary_key=True)
    session_id = Column(
        Integer, ForeignKey("study_sessions.id"), nullable=False, index=True
    )
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)
    was_correct = Column(Boolean, nullable=False)
    user_answer = Column(Text, nullable=True)
    audio_url = Column(String, nullable=True)
    time_spent = Column(Integer, default=0)  # seconds
    answered_at = Column(DateTime, nullable=False)

    session = relationship("StudySession", back_populates="answers")
