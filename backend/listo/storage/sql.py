"""
SQLite storage backend built on SQLAlchemy ORM.

Each operation runs in its own session; multi-step mutations such as the
list delete cascade are committed as a single transaction.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from listo.core.exceptions import ConflictError, NotFoundError, UniqueConstraintViolation
from listo.database import create_db_engine, create_session_factory, init_db
from listo.models import ListItem as ListItemModel
from listo.models import ListParticipant as ListParticipantModel
from listo.models import ShoppingList as ShoppingListModel
from listo.models import User as UserModel
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


def _plain(values: dict) -> dict:
    """Replace enum members with their values before they reach the ORM."""
    return {key: value.value if isinstance(value, Enum) else value for key, value in values.items()}


class SQLStorage(Storage):
    """SQL-backed implementation of :class:`Storage`."""

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = create_db_engine(database_url, echo=echo)
        self.SessionLocal = create_session_factory(self.engine)
        init_db(self.engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on any error."""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.info(f"Integrity error: {e.orig}")
            raise UniqueConstraintViolation("A record with the same unique key already exists") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()

    # --- Users ---
    def get_user(self, user_id: int) -> Optional[UserInDB]:
        with self._session() as db:
            user = db.get(UserModel, user_id)
            return UserInDB.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        with self._session() as db:
            user = db.query(UserModel).filter(UserModel.username == username).first()
            return UserInDB.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        with self._session() as db:
            user = db.query(UserModel).filter(UserModel.email == email).first()
            return UserInDB.model_validate(user) if user else None

    def _check_user_unique(
        self, db: Session, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None
    ) -> None:
        """Raise the same collision errors as the in-memory store."""
        others = db.query(UserModel)
        if exclude_id is not None:
            others = others.filter(UserModel.id != exclude_id)
        if email is not None and others.filter(UserModel.email == email).first():
            raise UniqueConstraintViolation(f"Email '{email}' is already registered")
        if username is not None and others.filter(UserModel.username == username).first():
            raise UniqueConstraintViolation(f"Username '{username}' is already taken")

    def create_user(self, data: UserCreate) -> UserInDB:
        with self._session() as db:
            self._check_user_unique(db, data.username, data.email)
            user = UserModel(**data.model_dump())
            db.add(user)
            db.flush()
            logger.info(f"Created user {user.id} ({user.username})")
            return UserInDB.model_validate(user)

    def update_user(self, user_id: int, data: Union[UserUpdate, dict]) -> UserInDB:
        changes = coerce_update(UserUpdate, data)
        with self._session() as db:
            user = db.get(UserModel, user_id)
            if user is None:
                raise NotFoundError(f"User {user_id} not found")
            self._check_user_unique(db, changes.get("username"), changes.get("email"), exclude_id=user_id)
            for key, value in changes.items():
                setattr(user, key, value)
            db.flush()
            return UserInDB.model_validate(user)

    # --- Shopping lists ---
    def _list_query(self, db: Session):
        """Lists joined with their owner's display fields."""
        return db.query(ShoppingListModel, UserModel.name, UserModel.avatar_url).outerjoin(
            UserModel, UserModel.id == ShoppingListModel.owner_id
        )

    @staticmethod
    def _to_list(row) -> ShoppingList:
        shopping_list, owner_name, owner_avatar_url = row
        result = ShoppingList.model_validate(shopping_list)
        return result.model_copy(update={"owner_name": owner_name, "owner_avatar_url": owner_avatar_url})

    def _get_list(self, db: Session, list_id: int) -> Optional[ShoppingList]:
        row = self._list_query(db).filter(ShoppingListModel.id == list_id).first()
        return self._to_list(row) if row else None

    def get_list_by_id(self, list_id: int) -> Optional[ShoppingList]:
        with self._session() as db:
            return self._get_list(db, list_id)

    def get_user_lists(self, user_id: int) -> List[ShoppingList]:
        with self._session() as db:
            owned = (
                self._list_query(db)
                .filter(ShoppingListModel.owner_id == user_id)
                .order_by(ShoppingListModel.id)
                .all()
            )
            shared = (
                self._list_query(db)
                .join(ListParticipantModel, ListParticipantModel.list_id == ShoppingListModel.id)
                .filter(ListParticipantModel.user_id == user_id)
                .order_by(ShoppingListModel.id)
                .all()
            )
            return [self._to_list(row) for row in owned + shared]

    def create_list(self, owner_id: int, data: ShoppingListCreate) -> ShoppingList:
        with self._session() as db:
            if db.get(UserModel, owner_id) is None:
                raise NotFoundError(f"User {owner_id} not found")
            shopping_list = ShoppingListModel(owner_id=owner_id, **data.model_dump())
            db.add(shopping_list)
            db.flush()
            logger.info(f"Created list {shopping_list.id} for owner {owner_id}")
            return self._get_list(db, shopping_list.id)

    def update_list(self, list_id: int, data: Union[ShoppingListUpdate, dict]) -> ShoppingList:
        changes = coerce_update(ShoppingListUpdate, data)
        with self._session() as db:
            shopping_list = db.get(ShoppingListModel, list_id)
            if shopping_list is None:
                raise NotFoundError(f"List {list_id} not found")
            for key, value in changes.items():
                setattr(shopping_list, key, value)
            db.flush()
            return self._get_list(db, list_id)

    def delete_list(self, list_id: int) -> None:
        with self._session() as db:
            db.query(ListItemModel).filter(ListItemModel.list_id == list_id).delete(synchronize_session=False)
            db.query(ListParticipantModel).filter(ListParticipantModel.list_id == list_id).delete(
                synchronize_session=False
            )
            db.query(ShoppingListModel).filter(ShoppingListModel.id == list_id).delete(synchronize_session=False)
        logger.info(f"Deleted list {list_id} with its items and participants")

    # --- List items ---
    def get_list_items(self, list_id: int) -> List[ListItem]:
        with self._session() as db:
            items = (
                db.query(ListItemModel)
                .filter(ListItemModel.list_id == list_id)
                .order_by(ListItemModel.id)
                .all()
            )
            return [ListItem.model_validate(item) for item in items]

    def get_list_item(self, item_id: int) -> Optional[ListItem]:
        with self._session() as db:
            item = db.get(ListItemModel, item_id)
            return ListItem.model_validate(item) if item else None

    def create_list_item(self, list_id: int, data: ListItemCreate) -> ListItem:
        with self._session() as db:
            shopping_list = db.get(ShoppingListModel, list_id)
            if shopping_list is None:
                raise NotFoundError(f"List {list_id} not found")
            values = _plain(data.model_dump())
            if values.get("color") is None:
                values["color"] = shopping_list.color
            item = ListItemModel(list_id=list_id, **values)
            db.add(item)
            db.flush()
            return ListItem.model_validate(item)

    def update_list_item(self, item_id: int, data: Union[ListItemUpdate, dict]) -> ListItem:
        changes = _plain(coerce_update(ListItemUpdate, data))
        with self._session() as db:
            item = db.get(ListItemModel, item_id)
            if item is None:
                raise NotFoundError(f"Item {item_id} not found")
            for key, value in changes.items():
                setattr(item, key, value)
            db.flush()
            db.refresh(item)
            return ListItem.model_validate(item)

    def delete_list_item(self, item_id: int) -> None:
        with self._session() as db:
            db.query(ListItemModel).filter(ListItemModel.id == item_id).delete(synchronize_session=False)

    # --- Participants ---
    def get_list_participants(self, list_id: int) -> List[UserInDB]:
        with self._session() as db:
            users = (
                db.query(UserModel)
                .join(ListParticipantModel, ListParticipantModel.user_id == UserModel.id)
                .filter(ListParticipantModel.list_id == list_id)
                .order_by(ListParticipantModel.id)
                .all()
            )
            return [UserInDB.model_validate(user) for user in users]

    @staticmethod
    def _find_participant(db: Session, list_id: int, user_id: int) -> Optional[ListParticipantModel]:
        return (
            db.query(ListParticipantModel)
            .filter(ListParticipantModel.list_id == list_id, ListParticipantModel.user_id == user_id)
            .first()
        )

    def get_list_participant(self, list_id: int, user_id: int) -> Optional[ListParticipant]:
        with self._session() as db:
            participant = self._find_participant(db, list_id, user_id)
            return ListParticipant.model_validate(participant) if participant else None

    def add_list_participant(self, list_id: int, user_id: int) -> ListParticipant:
        with self._session() as db:
            shopping_list = db.get(ShoppingListModel, list_id)
            if shopping_list is None:
                raise NotFoundError(f"List {list_id} not found")
            if db.get(UserModel, user_id) is None:
                raise NotFoundError(f"User {user_id} not found")
            if shopping_list.owner_id == user_id:
                raise ConflictError("The list owner cannot be added as a participant")
            if self._find_participant(db, list_id, user_id) is not None:
                raise UniqueConstraintViolation(f"List {list_id} is already shared with user {user_id}")
            participant = ListParticipantModel(list_id=list_id, user_id=user_id)
            db.add(participant)
            db.flush()
            logger.info(f"Shared list {list_id} with user {user_id}")
            return ListParticipant.model_validate(participant)

    def remove_list_participant(self, participant_id: int) -> None:
        with self._session() as db:
            db.query(ListParticipantModel).filter(ListParticipantModel.id == participant_id).delete(
                synchronize_session=False
            )
