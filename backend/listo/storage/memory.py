"""
In-memory storage backend.

Everything lives in plain dicts for the lifetime of the process. Meant for
development and tests; state is lost on restart. Records are copied on the
way in and out so callers never hold a reference into the store.
"""

import itertools
import logging
from typing import Dict, List, Optional, Union

from listo.core.exceptions import ConflictError, NotFoundError, UniqueConstraintViolation
from listo.schemas import (
    ListItem,
    ListItemCreate,
    ListItemUpdate,
    ListParticipant,
    ShoppingList,
    ShoppingListCreate,
    ShoppingListUpdate,
    UserCreate,
    UserInDB,
    UserUpdate,
)
from listo.storage.base import Storage, coerce_update

logger = logging.getLogger(__name__)


class MemoryStorage(Storage):
    """Dict-backed implementation of :class:`Storage`."""

    def __init__(self):
        self._users: Dict[int, UserInDB] = {}
        self._lists: Dict[int, ShoppingList] = {}
        self._items: Dict[int, ListItem] = {}
        self._participants: Dict[int, ListParticipant] = {}
        self._user_ids = itertools.count(1)
        self._list_ids = itertools.count(1)
        self._item_ids = itertools.count(1)
        self._participant_ids = itertools.count(1)

    # --- Users ---
    def get_user(self, user_id: int) -> Optional[UserInDB]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy()
        return None

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        for user in self._users.values():
            if user.email == email:
                return user.model_copy()
        return None

    def _check_user_unique(self, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None):
        others = [user for user in self._users.values() if user.id != exclude_id]
        if email is not None and any(user.email == email for user in others):
            raise UniqueConstraintViolation(f"Email '{email}' is already registered")
        if username is not None and any(user.username == username for user in others):
            raise UniqueConstraintViolation(f"Username '{username}' is already taken")

    def create_user(self, data: UserCreate) -> UserInDB:
        self._check_user_unique(data.username, data.email)
        user = UserInDB(id=next(self._user_ids), **data.model_dump())
        self._users[user.id] = user
        logger.info(f"Created user {user.id} ({user.username})")
        return user.model_copy()

    def update_user(self, user_id: int, data: Union[UserUpdate, dict]) -> UserInDB:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        changes = coerce_update(UserUpdate, data)
        self._check_user_unique(changes.get("username"), changes.get("email"), exclude_id=user_id)
        updated = user.model_copy(update=changes)
        self._users[user_id] = updated
        return updated.model_copy()

    # --- Shopping lists ---
    def _with_owner(self, shopping_list: ShoppingList) -> ShoppingList:
        owner = self._users.get(shopping_list.owner_id)
        return shopping_list.model_copy(update={
            "owner_name": owner.name if owner else None,
            "owner_avatar_url": owner.avatar_url if owner else None,
        })

    def get_list_by_id(self, list_id: int) -> Optional[ShoppingList]:
        shopping_list = self._lists.get(list_id)
        return self._with_owner(shopping_list) if shopping_list else None

    def get_user_lists(self, user_id: int) -> List[ShoppingList]:
        owned = [lst for lst in self._lists.values() if lst.owner_id == user_id]
        shared_ids = {p.list_id for p in self._participants.values() if p.user_id == user_id}
        shared = [lst for lst in self._lists.values() if lst.id in shared_ids]
        return [self._with_owner(lst) for lst in owned + shared]

    def create_list(self, owner_id: int, data: ShoppingListCreate) -> ShoppingList:
        if owner_id not in self._users:
            raise NotFoundError(f"User {owner_id} not found")
        shopping_list = ShoppingList(id=next(self._list_ids), owner_id=owner_id, **data.model_dump())
        self._lists[shopping_list.id] = shopping_list
        logger.info(f"Created list {shopping_list.id} for owner {owner_id}")
        return self._with_owner(shopping_list)

    def update_list(self, list_id: int, data: Union[ShoppingListUpdate, dict]) -> ShoppingList:
        shopping_list = self._lists.get(list_id)
        if shopping_list is None:
            raise NotFoundError(f"List {list_id} not found")
        changes = coerce_update(ShoppingListUpdate, data)
        updated = shopping_list.model_copy(update=changes)
        self._lists[list_id] = updated
        return self._with_owner(updated)

    def delete_list(self, list_id: int) -> None:
        self._items = {k: v for k, v in self._items.items() if v.list_id != list_id}
        self._participants = {k: v for k, v in self._participants.items() if v.list_id != list_id}
        self._lists.pop(list_id, None)
        logger.info(f"Deleted list {list_id} with its items and participants")

    # --- List items ---
    def get_list_items(self, list_id: int) -> List[ListItem]:
        return [item.model_copy() for item in self._items.values() if item.list_id == list_id]

    def get_list_item(self, item_id: int) -> Optional[ListItem]:
        item = self._items.get(item_id)
        return item.model_copy() if item else None

    def create_list_item(self, list_id: int, data: ListItemCreate) -> ListItem:
        shopping_list = self._lists.get(list_id)
        if shopping_list is None:
            raise NotFoundError(f"List {list_id} not found")
        values = data.model_dump()
        if values.get("color") is None:
            values["color"] = shopping_list.color
        item = ListItem(id=next(self._item_ids), list_id=list_id, **values)
        self._items[item.id] = item
        return item.model_copy()

    def update_list_item(self, item_id: int, data: Union[ListItemUpdate, dict]) -> ListItem:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError(f"Item {item_id} not found")
        updated = item.model_copy(update=coerce_update(ListItemUpdate, data))
        self._items[item_id] = updated
        return updated.model_copy()

    def delete_list_item(self, item_id: int) -> None:
        self._items.pop(item_id, None)

    # --- Participants ---
    def get_list_participants(self, list_id: int) -> List[UserInDB]:
        return [
            self._users[p.user_id].model_copy()
            for p in self._participants.values()
            if p.list_id == list_id and p.user_id in self._users
        ]

    def get_list_participant(self, list_id: int, user_id: int) -> Optional[ListParticipant]:
        for participant in self._participants.values():
            if participant.list_id == list_id and participant.user_id == user_id:
                return participant.model_copy()
        return None

    def add_list_participant(self, list_id: int, user_id: int) -> ListParticipant:
        shopping_list = self._lists.get(list_id)
        if shopping_list is None:
            raise NotFoundError(f"List {list_id} not found")
        if user_id not in self._users:
            raise NotFoundError(f"User {user_id} not found")
        if shopping_list.owner_id == user_id:
            raise ConflictError("The list owner cannot be added as a participant")
        if self.get_list_participant(list_id, user_id) is not None:
            raise UniqueConstraintViolation(f"List {list_id} is already shared with user {user_id}")
        participant = ListParticipant(id=next(self._participant_ids), list_id=list_id, user_id=user_id)
        self._participants[participant.id] = participant
        logger.info(f"Shared list {list_id} with user {user_id}")
        return participant.model_copy()

    def remove_list_participant(self, participant_id: int) -> None:
        self._participants.pop(participant_id, None)
