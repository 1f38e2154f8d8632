"""
Authentication API endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm

from listo.config import settings
from listo.core.rate_limit import limiter
from listo.dependencies import get_current_user, get_storage
from listo.schemas import Token, UserInDB, UserLogin, UserRegister, UserResponse
from listo.services.auth_service import auth_service
from listo.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_in: UserRegister, storage: Storage = Depends(get_storage)) -> Any:
    """
    Register a new user.
    """
    return auth_service.register_user(storage, user_in)


@router.post("/login", response_model=Token)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    credentials: UserLogin,
    storage: Storage = Depends(get_storage),
) -> Any:
    """
    JSON login with email and password, returns an access token.
    """
    user = auth_service.authenticate_user(storage, credentials.email, credentials.password)
    if not user:
        logger.info(f"Failed login for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Incorrect email or password",
        )
    return auth_service.create_user_token(user)


@router.post("/token", response_model=Token)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login_access_token(
    request: Request,
    storage: Storage = Depends(get_storage),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Any:
    """
    OAuth2 compatible token login, get an access token for future requests.
    """
    user = auth_service.authenticate_user(storage, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Incorrect email or password",
        )
    return auth_service.create_user_token(user)


@router.get("/users/me", response_model=UserResponse)
async def read_users_me(
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Get current user.
    """
    return current_user
