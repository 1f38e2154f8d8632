"""
ListParticipant database model: a user a list has been shared with.
"""

from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint

from listo.database import Base


class ListParticipant(Base):
    """Join record granting a non-owner access to a list."""

    __tablename__ = "list_participants"
    __table_args__ = (
        UniqueConstraint("list_id", "user_id", name="uq_list_participants_list_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    list_id = Column(Integer, ForeignKey("shopping_lists.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
