"""
Database models for the Listo API.

All SQLAlchemy models are imported here so ``Base.metadata`` knows every table.
"""

from listo.models.user import User
from listo.models.shopping_list import ShoppingList
from listo.models.list_item import ListItem
from listo.models.list_participant import ListParticipant

__all__ = [
    "User",
    "ShoppingList",
    "ListItem",
    "ListParticipant",
]
