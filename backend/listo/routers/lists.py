"""
Shopping list endpoints.

Reading a list is open to its owner and participants; updating and deleting
are owner-only.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from listo.core.access import require_list_access, require_list_owner
from listo.dependencies import get_current_user, get_storage
from listo.schemas import (
    MessageResponse,
    ShoppingList,
    ShoppingListCreate,
    ShoppingListUpdate,
    UserInDB,
)
from listo.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ShoppingList])
async def list_lists(
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Lists owned by the current user followed by lists shared with them."""
    return storage.get_user_lists(current_user.id)


@router.post("", response_model=ShoppingList, status_code=status.HTTP_201_CREATED)
async def create_list(
    list_in: ShoppingListCreate,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    # owner always comes from the token, never from the body
    return storage.create_list(current_user.id, list_in)


@router.get("/{list_id}", response_model=ShoppingList)
async def get_list(
    list_id: int,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return require_list_access(storage, current_user.id, list_id)


@router.put("/{list_id}", response_model=ShoppingList)
async def update_list(
    list_id: int,
    list_update: ShoppingListUpdate,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Update name, description, planned date/time or color of a list.

    Any other keys in the body are ignored.
    """
    require_list_owner(storage, current_user.id, list_id)
    return storage.update_list(list_id, list_update)


@router.delete("/{list_id}", response_model=MessageResponse)
async def delete_list(
    list_id: int,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Delete a list together with its items and participants."""
    require_list_owner(storage, current_user.id, list_id)
    storage.delete_list(list_id)
    return {"message": "List deleted"}
