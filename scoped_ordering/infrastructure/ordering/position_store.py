"""Store primitives for position updates on a SQLAlchemy session."""

import logging

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scoped_ordering.domain.common.exceptions import ValidationError

logger = logging.getLogger(__name__)


class SqlAlchemyPositionStore:
    """Per-record increments and saves issued within the caller's transaction."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def increment(self, record: object, delta: int) -> None:
        """
        Add delta to record's stored position.

        The UPDATE is evaluated by the database; the in-session instance is
        synchronised afterwards.

        Args:
            record: A persisted ordered record
            delta: Amount to add, usually 1 or -1
        """
        model = type(record)
        identity = sa_inspect(record).identity
        if identity is None:
            raise ValidationError(
                f"{model.__name__} must be persisted before its position can change",
                field="position",
            )
        primary_key = sa_inspect(model).primary_key
        stmt = (
            update(model)
            .where(*(column == value for column, value in zip(primary_key, identity, strict=True)))
            .values(position=model.position + delta)  # type: ignore[attr-defined]
            .execution_options(synchronize_session="fetch")
        )
        with self.db.no_autoflush:
            self.db.execute(stmt)

    def save(self, record: object) -> None:
        """Flush record's pending changes."""
        try:
            self.db.add(record)
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save {type(record).__name__}: {e!s}")
            raise
