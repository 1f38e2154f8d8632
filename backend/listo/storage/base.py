"""
Storage interface shared by every backend.

``MemoryStorage`` and ``SQLStorage`` implement the same contract and the
same test suite runs against both:

* lookups return ``None`` when nothing matches;
* mutations on a missing primary key raise ``NotFoundError``;
* unique key collisions raise ``UniqueConstraintViolation``;
* deletes of items and participants are idempotent;
* every list returned carries ``owner_name`` and ``owner_avatar_url``.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from listo.core import access
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


class Storage(ABC):
    """Persistence for users, shopping lists, list items and participants."""

    # --- Users ---
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserInDB]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> UserInDB:
        ...

    @abstractmethod
    def update_user(self, user_id: int, data: Union[UserUpdate, dict]) -> UserInDB:
        ...

    # --- Shopping lists ---
    @abstractmethod
    def get_list_by_id(self, list_id: int) -> Optional[ShoppingList]:
        ...

    @abstractmethod
    def get_user_lists(self, user_id: int) -> List[ShoppingList]:
        """Lists owned by the user, then lists shared with them."""

    @abstractmethod
    def create_list(self, owner_id: int, data: ShoppingListCreate) -> ShoppingList:
        ...

    @abstractmethod
    def update_list(self, list_id: int, data: Union[ShoppingListUpdate, dict]) -> ShoppingList:
        ...

    @abstractmethod
    def delete_list(self, list_id: int) -> None:
        """Delete the list together with its items and participants."""

    def can_user_access_list(self, user_id: int, list_id: int) -> bool:
        return access.can_user_access_list(self, user_id, list_id)

    # --- List items ---
    @abstractmethod
    def get_list_items(self, list_id: int) -> List[ListItem]:
        ...

    @abstractmethod
    def get_list_item(self, item_id: int) -> Optional[ListItem]:
        ...

    @abstractmethod
    def create_list_item(self, list_id: int, data: ListItemCreate) -> ListItem:
        ...

    @abstractmethod
    def update_list_item(self, item_id: int, data: Union[ListItemUpdate, dict]) -> ListItem:
        ...

    @abstractmethod
    def delete_list_item(self, item_id: int) -> None:
        ...

    # --- Participants ---
    @abstractmethod
    def get_list_participants(self, list_id: int) -> List[UserInDB]:
        ...

    @abstractmethod
    def get_list_participant(self, list_id: int, user_id: int) -> Optional[ListParticipant]:
        ...

    def is_list_shared_with_user(self, list_id: int, user_id: int) -> bool:
        return self.get_list_participant(list_id, user_id) is not None

    @abstractmethod
    def add_list_participant(self, list_id: int, user_id: int) -> ListParticipant:
        ...

    @abstractmethod
    def remove_list_participant(self, participant_id: int) -> None:
        ...

    def close(self) -> None:
        """Release backend resources."""


def coerce_update(schema, data):
    """
    Validate a partial update against its typed schema.

    Returns only the fields that were explicitly given. ``None`` clears a
    column listed in ``schema.NULLABLE_FIELDS`` and is ignored elsewhere.
    """
    if not isinstance(data, schema):
        data = schema.model_validate(data)
    return {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key in schema.NULLABLE_FIELDS
    }
