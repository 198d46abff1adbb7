"""Siblings Resolver and sibling query handle over a SQLAlchemy session."""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Self

from sqlalchemy import ColumnElement, Select, and_, func, not_, select, update
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from scoped_ordering.domain.ordering.scope import ScopeRegistry
from scoped_ordering.infrastructure.ordering.scope_resolver import SqlAlchemyScopeResolver


class SqlAlchemySiblingQuery:
    """
    Ordered query over one scope group.

    Each filter returns a new handle. Queries run with autoflush disabled so
    pending changes on the record being saved do not leak into the lookup.
    """

    def __init__(
        self,
        db: Session,
        model: type[Any],
        criteria: Sequence[ColumnElement[bool]] = (),
    ) -> None:
        self.db = db
        self.model = model
        self.criteria = tuple(criteria)

    def narrow(self, criterion: ColumnElement[bool]) -> Self:
        return type(self)(self.db, self.model, (*self.criteria, criterion))

    def positioned_before(self, position: int) -> Self:
        return self.narrow(self.model.position < position)

    def positioned_after(self, position: int) -> Self:
        return self.narrow(self.model.position > position)

    def positioned_at(self, position: int) -> Self:
        return self.narrow(self.model.position == position)

    def first(self) -> Any | None:  # noqa: ANN401
        with self.db.no_autoflush:
            return self.db.execute(self._select().limit(1)).scalars().first()

    def last(self) -> Any | None:  # noqa: ANN401
        with self.db.no_autoflush:
            return self.db.execute(self._select(descending=True).limit(1)).scalars().first()

    def all(self) -> list[Any]:
        with self.db.no_autoflush:
            return list(self.db.execute(self._select()).scalars().all())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.all())

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self.criteria)
        with self.db.no_autoflush:
            return self.db.execute(stmt).scalar_one()

    def is_empty(self) -> bool:
        return self.count() == 0

    def max_position(self) -> int | None:
        stmt = select(func.max(self.model.position)).where(*self.criteria)
        with self.db.no_autoflush:
            return self.db.execute(stmt).scalar_one_or_none()

    def shift(self, delta: int) -> int:
        """Add delta to the position of every matched record in one statement."""
        stmt = (
            update(self.model)
            .where(*self.criteria)
            .values(position=self.model.position + delta)
            .execution_options(synchronize_session="fetch")
        )
        with self.db.no_autoflush:
            result = self.db.execute(stmt)
        return result.rowcount

    def _select(self, descending: bool = False) -> Select[Any]:
        position = self.model.position
        order = position.desc() if descending else position.asc()
        primary_key = sa_inspect(self.model).primary_key
        tie_breakers = [c.desc() if descending else c.asc() for c in primary_key]
        return (
            select(self.model)
            .where(*self.criteria)
            .order_by(order.nulls_last(), *tie_breakers)
        )


class SqlAlchemySiblingsResolver:
    """Builds scope-group queries from a record's scope configuration."""

    def __init__(
        self,
        db: Session,
        scope_resolver: SqlAlchemyScopeResolver,
        registry: ScopeRegistry,
    ) -> None:
        self.db = db
        self.scope_resolver = scope_resolver
        self.registry = registry

    def siblings_and_self(
        self,
        record: object,
        scope_override: Mapping[str, object] | None = None,
    ) -> SqlAlchemySiblingQuery:
        """
        Query the records sharing record's scope values, record included.

        Args:
            record: Any instance of a registered ordered type
            scope_override: Values to use instead of the record's own for
                the given scope keys

        Returns:
            Query handle ordered ascending by position
        """
        model = self.registry.ordered_type_for(type(record))
        override = scope_override or {}
        criteria: list[ColumnElement[bool]] = []
        for key in self.registry.configuration_for(model):
            column = self.scope_resolver.column_for(model, key)
            value = override[key] if key in override else self.scope_resolver.resolve(key, record)
            criteria.append(column.is_(None) if value is None else column == value)
        return SqlAlchemySiblingQuery(self.db, model, criteria)

    def siblings(
        self,
        record: object,
        scope_override: Mapping[str, object] | None = None,
    ) -> SqlAlchemySiblingQuery:
        """Same as siblings_and_self, without record itself."""
        query = self.siblings_and_self(record, scope_override)
        identity = sa_inspect(record).identity
        if identity is None:
            # Not persisted yet, so it cannot show up in the results
            return query
        primary_key = sa_inspect(query.model).primary_key
        return query.narrow(
            not_(and_(*(column == value for column, value in zip(primary_key, identity, strict=True))))
        )

    def is_sibling_of(self, record: object, other: object) -> bool:
        """Whether other belongs to the same scope group as record."""
        if not self.registry.is_registered(type(other)):
            return False
        model = self.registry.ordered_type_for(type(record))
        if self.registry.ordered_type_for(type(other)) is not model:
            return False
        return all(
            self.scope_resolver.resolve(key, record) == self.scope_resolver.resolve(key, other)
            for key in self.registry.configuration_for(model)
        )
