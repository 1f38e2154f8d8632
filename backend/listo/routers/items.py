"""
List item endpoints, open to the list owner and its participants.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from listo.core.access import require_list_access
from listo.dependencies import get_current_user, get_storage
from listo.schemas import ListItem, ListItemCreate, ListItemUpdate, MessageResponse, UserInDB
from listo.storage.base import Storage

router = APIRouter()


def _item_in_list(storage: Storage, list_id: int, item_id: int) -> ListItem:
    item = storage.get_list_item(item_id)
    if item is None or item.list_id != list_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


@router.get("/{list_id}/items", response_model=List[ListItem])
async def list_items(
    list_id: int,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    require_list_access(storage, current_user.id, list_id)
    return storage.get_list_items(list_id)


@router.post("/{list_id}/items", response_model=ListItem, status_code=status.HTTP_201_CREATED)
async def create_item(
    list_id: int,
    item_in: ListItemCreate,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    require_list_access(storage, current_user.id, list_id)
    return storage.create_list_item(list_id, item_in)


@router.put("/{list_id}/items/{item_id}", response_model=ListItem)
async def update_item(
    list_id: int,
    item_id: int,
    item_update: ListItemUpdate,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Change any item field, e.g. mark it purchased."""
    require_list_access(storage, current_user.id, list_id)
    _item_in_list(storage, list_id, item_id)
    return storage.update_list_item(item_id, item_update)


@router.delete("/{list_id}/items/{item_id}", response_model=MessageResponse)
async def delete_item(
    list_id: int,
    item_id: int,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Delete an item. Deleting an item that no longer exists succeeds, but an
    item belonging to another list is not found.
    """
    require_list_access(storage, current_user.id, list_id)
    item = storage.get_list_item(item_id)
    if item is not None:
        if item.list_id != list_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
        storage.delete_list_item(item_id)
    return {"message": "Item deleted"}
