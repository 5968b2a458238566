"""Daily macro goal routes"""

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_identity
from api.responses import AUTH_ERRORS
from domain.mappers import GoalMapper, SummaryMapper
from domain.schemas import GoalCreate, GoalProgressResponse, GoalResponse, GoalUpdate
from services.authorization import Identity
from services.goal_service import GoalService

router = APIRouter(prefix="/goals", tags=["Goals"], responses=AUTH_ERRORS)


@router.get("", response_model=GoalResponse)
def get_goal(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return GoalMapper.to_response(GoalService.get_goal(db, identity))


@router.post("", response_model=GoalResponse)
def upsert_goal(
    data: GoalCreate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Set all four targets, replacing any existing goal"""
    return GoalMapper.to_response(GoalService.upsert_goal(db, identity, data))


@router.put("", response_model=GoalResponse)
def update_goal(
    data: GoalUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Change only the targets present in the body"""
    return GoalMapper.to_response(GoalService.update_goal(db, identity, data))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    GoalService.delete_goal(db, identity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/progress", response_model=GoalProgressResponse)
def goal_progress(
    day: Optional[date] = Query(None, alias="date", description="UTC day, defaults to today"),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Consumed and remaining macros for one day against the goal"""
    day = day or datetime.now(timezone.utc).date()
    progress = GoalService.progress(db, identity, day)
    return SummaryMapper.to_progress_response(day, progress)
