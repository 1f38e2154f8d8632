"""
Authentication Service.
"""

import logging
from typing import Optional

from listo.core import security
from listo.schemas import UserCreate, UserInDB, UserRegister
from listo.storage.base import Storage

logger = logging.getLogger(__name__)


class AuthService:
    def authenticate_user(
        self, storage: Storage, login: str, password: str
    ) -> Optional[UserInDB]:
        """Authenticate a user by email (or username) and password."""
        user = storage.get_user_by_email(login) or storage.get_user_by_username(login)
        if not user:
            return None
        if not security.verify_password(password, user.password):
            return None
        return user

    def register_user(self, storage: Storage, user_in: UserRegister) -> UserInDB:
        """
        Create a new user with a hashed password.

        The username defaults to the email address when not given. Raises
        ``UniqueConstraintViolation`` if the username or email is taken.
        """
        user = storage.create_user(
            UserCreate(
                username=user_in.username or user_in.email,
                name=user_in.name,
                email=user_in.email,
                avatar_url=user_in.avatar_url,
                password=security.get_password_hash(user_in.password),
            )
        )
        logger.info(f"Registered user {user.id}")
        return user

    def create_user_token(self, user: UserInDB) -> dict:
        """Create access token for user."""
        access_token = security.create_access_token(
            data={"sub": user.email, "user_id": user.id}
        )
        return {"access_token": access_token, "token_type": "bearer"}


auth_service = AuthService()
