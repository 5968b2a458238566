"""Routes for the caller's own account"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_identity
from api.responses import AUTH_ERRORS
from domain.mappers import UserMapper
from domain.schemas import UserResponse, UserUpdateRequest
from services.authorization import Identity
from services.profile_service import ProfileService

router = APIRouter(prefix="/users", tags=["Users"], responses=AUTH_ERRORS)


@router.get("/me", response_model=UserResponse)
def get_me(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    user = ProfileService.get_profile(db, identity)
    return UserMapper.to_response(user)


@router.put("/me", response_model=UserResponse)
def update_me(
    data: UserUpdateRequest,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Change name and/or email; a taken email is a 400 conflict"""
    user = ProfileService.update_profile(db, identity, data)
    return UserMapper.to_response(user)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    """Delete the account together with its meals, entries and goal"""
    ProfileService.delete_user(db, identity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
