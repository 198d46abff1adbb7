"""Ordered models used across the test suite."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scoped_ordering import ordered
from scoped_ordering.database import Base
from scoped_ordering.infrastructure.ordering.orm import OrderedMixin


@ordered()
class Board(OrderedMixin, Base):
    """All boards share one global group."""

    __tablename__ = "boards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    cards: Mapped[list["Card"]] = relationship(
        back_populates="board", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Board(id={self.id}, name='{self.name}', position={self.position})>"


@ordered(scope="board")
class Card(OrderedMixin, Base):
    """Cards are ordered per board."""

    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    board_id: Mapped[int | None] = mapped_column(ForeignKey("boards.id"), nullable=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)

    board: Mapped["Board | None"] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<Card(id={self.id}, board_id={self.board_id}, position={self.position})>"


@ordered(scope=["project", "status"])
class Task(OrderedMixin, Base):
    """Tasks are ordered per (project, status) pair."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    project: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False, default="")
