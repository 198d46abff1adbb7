"""ORM building blocks for ordered record types."""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column


class OrderedMixin:
    """
    Adds the ``position`` column to a mapped class.

    Combine with ``@ordered(scope=...)`` to register the class's scope.
    When the scope is a relationship, save the related record first: a
    record cannot take a position under a holder that has no primary key.

    Example:
        @ordered(scope="board")
        class Card(OrderedMixin, Base):
            __tablename__ = "cards"
            ...
    """

    # Unset only between construction and the first save
    position: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
