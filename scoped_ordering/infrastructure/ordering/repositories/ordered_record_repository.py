"""Repository that persists ordered records and runs the ordering hooks."""

import logging
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scoped_ordering.application.ordering.services.ordering_lifecycle import OrderingLifecycle
from scoped_ordering.domain.ordering.scope import ScopeRegistry
from scoped_ordering.infrastructure.ordering.change_tracking import capture_changes
from scoped_ordering.infrastructure.ordering.scope_resolver import SqlAlchemyScopeResolver
from scoped_ordering.infrastructure.ordering.siblings_resolver import SqlAlchemySiblingsResolver

logger = logging.getLogger(__name__)


class OrderedRecordRepository:
    """Persistence host for ordered records."""

    def __init__(
        self,
        db: Session,
        lifecycle: OrderingLifecycle,
        siblings_resolver: SqlAlchemySiblingsResolver,
        scope_resolver: SqlAlchemyScopeResolver,
        registry: ScopeRegistry,
    ) -> None:
        self.db = db
        self.lifecycle = lifecycle
        self.siblings_resolver = siblings_resolver
        self.scope_resolver = scope_resolver
        self.registry = registry

    def find_by_id(self, record_type: type, record_id: object) -> Any | None:  # noqa: ANN401
        """
        Find an ordered record by primary key.

        Args:
            record_type: A registered ordered type
            record_id: The primary key value

        Returns:
            The record if found, None otherwise
        """
        return self.db.get(record_type, record_id)

    def scope_group(self, record: object) -> list[Any]:
        """All records of record's scope group, ascending by position."""
        return self.siblings_resolver.siblings_and_self(record).all()

    def save(self, record: Any) -> Any:  # noqa: ANN401
        """
        Save a record, assigning or repositioning it as its scope requires.

        Args:
            record: New or modified ordered record

        Returns:
            The saved record
        """
        configuration = self.registry.configuration_for(record)
        changes = capture_changes(record, configuration, self.scope_resolver)
        try:
            self.lifecycle.before_save(record, changes)
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save {type(record).__name__}: {e!s}", exc_info=True)
            self.db.rollback()
            raise
        return record

    def delete(self, record: Any) -> None:  # noqa: ANN401
        """
        Delete a record and close the gap it leaves in its scope group.

        Ordered records removed by ORM delete cascades get the same treatment,
        except those whose whole group goes away with a deleted scope holder.
        """
        self.db.delete(record)
        doomed = [obj for obj in self.db.deleted if self.registry.is_registered(type(obj))]
        with self.db.no_autoflush:
            # Highest position first, so each closure leaves the next one's position valid
            doomed.sort(key=lambda obj: -1 if obj.position is None else obj.position, reverse=True)
            for obj in doomed:
                self._load_scope_relations(obj)

        try:
            self.db.flush()
            for obj in doomed:
                self.lifecycle.after_destroy(obj)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {type(record).__name__}: {e!s}", exc_info=True)
            self.db.rollback()
            raise

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def _load_scope_relations(self, record: object) -> None:
        # Cascade detection only inspects relations already loaded on the record
        mapper = sa_inspect(type(record))
        for key in self.registry.configuration_for(record):
            if key in mapper.relationships:
                getattr(record, key)
