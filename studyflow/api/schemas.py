from datetime import date, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from studyflow.models.session import StudyMode


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class UserProgressOut(CamelModel):
    id: int
    user_id: int
    question_id: int
    ease_factor: float
    interval: int
    repetitions: int
    next_review_date: date
    times_reviewed: int
    times_correct: int
    times_incorrect: int
    last_reviewed_at: datetime | None = None


class UserStreakOut(CamelModel):
    id: int | None = None
    user_id: int
    current_streak: int
    longest_streak: int
    last_study_date: date | None = None


class SessionAnswerOut(CamelModel):
    id: int
    session_id: int
    question_id: int
    was_correct: bool
    user_answer: str | None = None
    audio_url: str | None = None
    time_spent: int
    answered_at: datetime


class StudySessionOut(CamelModel):
    id: int
    user_id: int
    topic_id: int | None = None
    mode: StudyMode
    started_at: datetime
    ended_at: datetime | None = None
    duration: int
    questions_reviewed: int
    questions_correct: int
    questions_incorrect: int
    is_completed: bool
    answers: list[SessionAnswerOut] = []


class StatisticsOut(CamelModel):
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


class DifficultQuestionOut(CamelModel):
    question_id: int
    question: str | None = None
    topic_id: int | None = None
    times_reviewed: int
    times_incorrect: int
    success_rate: float
    ease_factor: float


class TopicStatisticsOut(CamelModel):
    topic_id: int
    topic_name: str
    total_questions: int
    reviewed_questions: int
    mastered_questions: int
    total_reviews: int
    success_rate: float


class ReviewRequest(CamelModel):
    question_id: int
    was_correct: bool


class CreateSessionRequest(CamelModel):
    topic_id: int | None = None
    mode: StudyMode


class SubmitAnswer(CamelModel):
    question_id: int
    # Left out for exam answers that should be graded from user_answer
    was_correct: bool | None = None
    user_answer: str | None = None
    audio_url: str | None = None
    time_spent: int | None = None
