from datetime import datetime, timedelta, timezone
from typing import Tuple
import logging

import jwt
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from app.config import Settings
from app.exceptions import AuthenticationError, ConflictError, InvalidTokenError
from domain.models import User
from domain.schemas import RegisterRequest, LoginRequest
from repositories import UserRepository
from services.authorization import Identity
from services.transaction import unit_of_work

logger = logging.getLogger("nutrition_tracker.auth")


class AuthService:
    """Registration, credential checks and bearer tokens"""

    @staticmethod
    def hash_password(password: str) -> str:
        return generate_password_hash(password)

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        return check_password_hash(password_hash, password)

    @staticmethod
    def create_access_token(user_id: int, settings: Settings) -> str:
        """Return a signed token whose subject is the user id"""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(days=settings.token_ttl_days),
        }
        return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_access_token(token: str, settings: Settings) -> Identity:
        """
        Verify a bearer token and return the identity it carries.

        Raises:
            InvalidTokenError: bad signature, expired, or no usable subject
        """
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret_key,
                algorithms=[settings.jwt_algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Token is invalid") from e

        try:
            return Identity(user_id=int(payload["sub"]))
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Token is invalid") from e

    @staticmethod
    def register(db: Session, data: RegisterRequest) -> User:
        """Create a user account; duplicate emails raise ConflictError"""
        user_repo = UserRepository(db)
        email = data.email

        with unit_of_work(db, "user_register"):
            if user_repo.get_by_email(email) is not None:
                raise ConflictError(f"User with email {email} already exists")
            user = user_repo.create_user(
                email=email,
                password_hash=AuthService.hash_password(data.password),
                name=data.name,
            )

        db.refresh(user)
        logger.info(f"user_registered user_id={user.id}")
        return user

    @staticmethod
    def login(db: Session, data: LoginRequest, settings: Settings) -> Tuple[User, str]:
        """Check credentials and issue a token. Unknown email and wrong password look the same."""
        user = UserRepository(db).get_by_email(data.email)
        if user is None or not AuthService.verify_password(data.password, user.password_hash):
            logger.warning("login_failed reason=bad_credentials")
            raise AuthenticationError("Invalid email or password")

        token = AuthService.create_access_token(user.id, settings)
        logger.info(f"login_succeeded user_id={user.id}")
        return user, token
