"""
ShoppingList database model.
"""

from sqlalchemy import Column, Integer, String, ForeignKey

from listo.database import Base
from listo.schemas import DEFAULT_LIST_COLOR


class ShoppingList(Base):
    """Shopping list owned by a single user."""

    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    date_planned = Column(String, nullable=True)
    time_planned = Column(String, nullable=True)  # "HH:MM"
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    color = Column(String, nullable=False, default=DEFAULT_LIST_COLOR)
