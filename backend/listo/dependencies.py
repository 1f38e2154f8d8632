"""
Shared API dependencies.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from listo.core import security
from listo.schemas import UserInDB
from listo.storage.base import Storage

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def get_storage(request: Request) -> Storage:
    """Store injected into the app by ``create_app``."""
    return request.app.state.storage


async def get_current_user(
    storage: Storage = Depends(get_storage), token: str = Depends(oauth2_scheme)
) -> UserInDB:
    """
    Validate access token and return current user.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = security.decode_access_token(token)
    if payload is None:
        raise credentials_exception

    user_id = payload.get("user_id")
    email = payload.get("sub")

    if user_id:
        user = storage.get_user(int(user_id))
    elif email:
        user = storage.get_user_by_email(email)
    else:
        raise credentials_exception

    if user is None:
        raise credentials_exception

    return user
