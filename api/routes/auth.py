"""Registration and login routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_settings
from api.responses import ErrorResponse
from app.config import Settings
from domain.mappers import UserMapper
from domain.schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from services.auth_service import AuthService

router = APIRouter(tags=["Auth"])
logger = logging.getLogger("nutrition_tracker.api.auth")


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account. The response never includes the password."""
    user = AuthService.register(db, data)
    return UserMapper.to_response(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for a bearer token"""
    user, token = AuthService.login(db, data, settings)
    return UserMapper.to_token_response(user, token, settings.token_ttl_seconds)
