from sqlalchemy import Column, Integer, String, ForeignKey, Enum
from listo.database import Base
from listo.schemas import ItemStatus


class ListItem(Base):
    __tablename__ = "list_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit = Column(String, nullable=True)      # ItemUnit value
    category = Column(String, nullable=True)  # ItemCategory value
    status = Column(
        Enum(ItemStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        default=ItemStatus.PENDING,
        nullable=False,
    )
    list_id = Column(Integer, ForeignKey("shopping_lists.id"), nullable=False, index=True)
    color = Column(String, nullable=True)  # copied from the list on creation
