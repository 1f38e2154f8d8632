from enum import Enum
from typing import ClassVar, FrozenSet, List, Optional
from pydantic import BaseModel, Field, EmailStr, field_validator


DEFAULT_LIST_COLOR = "#22c55e"


# --- Enums ---
class ItemStatus(str, Enum):
    PENDING = "pending"
    PURCHASED = "purchased"


class ItemUnit(str, Enum):
    UNITS = "units"
    KG = "kg"
    G = "g"
    L = "l"
    ML = "ml"
    PACK = "pack"


class ItemCategory(str, Enum):
    DAIRY = "dairy"
    FRUITS = "fruits"
    VEGETABLES = "vegetables"
    MEAT = "meat"
    BREAD = "bread"
    CLEANING = "cleaning"
    OTHER = "other"


# --- User ---
class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=100)
    email: str
    avatar_url: Optional[str] = None


class UserCreate(UserBase):
    """Store input; ``password`` is already hashed."""

    password: str


class UserUpdate(BaseModel):
    """Fields of a user that may be changed after registration."""

    username: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    password: Optional[str] = None

    NULLABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"avatar_url"})


class UserInDB(UserBase):
    id: int
    password: str

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    id: int
    username: str
    name: str
    email: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class UserRegister(BaseModel):
    # "@" is reserved for emails, which double as login names
    username: Optional[str] = Field(None, min_length=1, max_length=100, pattern=r"^[^@]+$")
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    avatar_url: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        # bcrypt rejects anything over 72 bytes, not characters
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes long")
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    avatar_url: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str


# --- Shopping list ---
class ShoppingListBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    date_planned: Optional[str] = None
    time_planned: Optional[str] = None
    color: str = Field(DEFAULT_LIST_COLOR, min_length=1, max_length=50)


class ShoppingListCreate(ShoppingListBase):
    pass


class ShoppingListUpdate(BaseModel):
    """
    The only list fields an update may touch.

    Unknown keys (``id``, ``owner_id`` ...) are dropped on validation.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    date_planned: Optional[str] = None
    time_planned: Optional[str] = None
    color: Optional[str] = Field(None, min_length=1, max_length=50)

    NULLABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"description", "date_planned", "time_planned"})


class ShoppingList(ShoppingListBase):
    id: int
    owner_id: int
    owner_name: Optional[str] = None
    owner_avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


# --- List item ---
class ListItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    quantity: int = Field(1, gt=0)
    unit: Optional[ItemUnit] = None
    category: Optional[ItemCategory] = None
    status: ItemStatus = ItemStatus.PENDING
    color: Optional[str] = Field(None, max_length=50)


class ListItemCreate(ListItemBase):
    pass


class ListItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[int] = Field(None, gt=0)
    unit: Optional[ItemUnit] = None
    category: Optional[ItemCategory] = None
    status: Optional[ItemStatus] = None
    color: Optional[str] = Field(None, max_length=50)

    NULLABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"unit", "category", "color"})


class ListItem(ListItemBase):
    id: int
    list_id: int

    class Config:
        from_attributes = True


# --- Participants ---
class ListParticipant(BaseModel):
    id: int
    list_id: int
    user_id: int

    class Config:
        from_attributes = True


class ShareRequest(BaseModel):
    email: EmailStr


# --- Errors ---
class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    message: str
    errors: Optional[List[FieldError]] = None


class MessageResponse(BaseModel):
    message: str
