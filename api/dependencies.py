"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import AuthenticationError
from repositories import UserRepository
from services.auth_service import AuthService
from services.authorization import Identity

logger = logging.getLogger("nutrition_tracker.api.auth")

# Missing credentials are reported by get_identity, not by FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from request.app.state.database.get_session()


def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """
    Resolve the bearer token to the calling user.

    Raises:
        AuthenticationError: no Bearer credentials, or the user no longer exists (401)
        InvalidTokenError: token fails verification (403)
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Authentication required")

    identity = AuthService.decode_access_token(credentials.credentials, settings)
    if UserRepository(db).get_by_id(identity.user_id) is None:
        logger.warning(f"token_for_missing_user user_id={identity.user_id}")
        raise AuthenticationError("User no longer exists")
    return identity
