"""
Access control for shopping lists.

Owners hold every right over a list; participants may read the list and
work with its items and participant listing. All checks are plain functions
over store reads and are evaluated again on every request.
"""

import logging
from typing import TYPE_CHECKING, Optional

from listo.core.exceptions import ForbiddenError, NotFoundError
from listo.schemas import ShoppingList

if TYPE_CHECKING:
    from listo.storage.base import Storage

logger = logging.getLogger(__name__)


def is_list_owner(shopping_list: Optional[ShoppingList], user_id: int) -> bool:
    return shopping_list is not None and shopping_list.owner_id == user_id


def can_user_access_list(storage: "Storage", user_id: int, list_id: int) -> bool:
    """True iff the user owns the list or is one of its participants."""
    shopping_list = storage.get_list_by_id(list_id)
    if shopping_list is None:
        return False
    if is_list_owner(shopping_list, user_id):
        return True
    return storage.is_list_shared_with_user(list_id, user_id)


def _load_list(storage: "Storage", list_id: int) -> ShoppingList:
    shopping_list = storage.get_list_by_id(list_id)
    if shopping_list is None:
        raise NotFoundError("List not found")
    return shopping_list


def require_list_access(storage: "Storage", user_id: int, list_id: int) -> ShoppingList:
    """
    Return the list if ``user_id`` is its owner or a participant.

    Raises:
        NotFoundError: list does not exist
        ForbiddenError: user is neither owner nor participant
    """
    shopping_list = _load_list(storage, list_id)
    if is_list_owner(shopping_list, user_id):
        return shopping_list
    if not storage.is_list_shared_with_user(list_id, user_id):
        logger.warning(f"User {user_id} denied access to list {list_id}")
        raise ForbiddenError("You do not have access to this list")
    return shopping_list


def require_list_owner(storage: "Storage", user_id: int, list_id: int) -> ShoppingList:
    """Return the list if ``user_id`` owns it, otherwise raise."""
    shopping_list = _load_list(storage, list_id)
    if not is_list_owner(shopping_list, user_id):
        logger.warning(f"User {user_id} is not the owner of list {list_id}")
        raise ForbiddenError("Only the list owner can perform this action")
    return shopping_list
