"""Entry routes addressed by entry id alone; ownership goes through the parent meal"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_identity
from api.responses import AUTH_ERRORS
from domain.mappers import MealMapper
from domain.schemas import MealEntryResponse, MealEntryUpdate
from services.authorization import Identity
from services.meal_service import MealService

router = APIRouter(prefix="/entries", tags=["Entries"], responses=AUTH_ERRORS)


@router.put("/{entry_id}", response_model=MealEntryResponse)
def update_entry(
    entry_id: int,
    data: MealEntryUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    entry = MealService.update_entry(db, identity, entry_id, data)
    return MealMapper.to_entry_response(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    MealService.delete_entry(db, identity, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
