from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from studyflow.api.deps import get_current_user_id
from studyflow.api.schemas import DifficultQuestionOut, StatisticsOut, TopicStatisticsOut
from studyflow.core.database import get_db
from studyflow.services import statistics

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/overview", response_model=StatisticsOut)
def overview(
    user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    return statistics.get_overview(db, user_id)


@router.get("/difficult", response_model=list[DifficultQuestionOut])
def difficult(
    limit: int = Query(10, ge=1, le=100),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return statistics.get_difficult_questions(db, user_id, limit)


@router.get("/by-topic", response_model=list[TopicStatisticsOut])
def by_topic(
    user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    return statistics.get_by_topic(db, user_id)
