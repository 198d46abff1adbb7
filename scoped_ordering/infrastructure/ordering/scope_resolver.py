"""Scope Resolver backed by SQLAlchemy mapper metadata."""

import logging

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.orm import ColumnProperty, Mapper, RelationshipDirection, RelationshipProperty
from sqlalchemy.orm.attributes import History, InstrumentedAttribute

from scoped_ordering.domain.common.exceptions import ScopeConfigurationError, ValidationError

logger = logging.getLogger(__name__)


def committed_value(history: History) -> object:
    """Value an attribute had before its pending change, if known."""
    if history.deleted:
        return history.deleted[0]
    if history.unchanged:
        return history.unchanged[0]
    return None


class SqlAlchemyScopeResolver:
    """
    Reads scope values off mapped instances.

    A scope key is either a column attribute or a many-to-one relationship
    with a single foreign-key column; relationship scopes are compared by
    that column's value.
    """

    def column_for(self, model: type, scope_key: str) -> InstrumentedAttribute[object]:
        """Column attribute used to filter a scope group on scope_key."""
        mapper = sa_inspect(model)
        if scope_key in mapper.relationships:
            return self._foreign_key_property(mapper, scope_key).class_attribute
        if scope_key in mapper.column_attrs:
            return mapper.column_attrs[scope_key].class_attribute
        raise ScopeConfigurationError(
            model.__name__,
            f"Scope key {scope_key!r} is neither a column nor a relationship of {model.__name__}",
        )

    def resolve(self, scope_key: str, record: object) -> object:
        """Current value of scope_key, including changes not yet flushed."""
        mapper = sa_inspect(type(record))
        if scope_key not in mapper.relationships:
            return getattr(record, scope_key)

        fk_property = self._foreign_key_property(mapper, scope_key)
        if sa_inspect(record).attrs[scope_key].history.has_changes():
            # The foreign key is only synced at flush time
            return self._identity_of(getattr(record, scope_key), mapper.relationships[scope_key])
        return getattr(record, fk_property.key)

    def former(self, scope_key: str, record: object) -> object:
        """Committed value of scope_key before the record's pending changes."""
        mapper = sa_inspect(type(record))
        key = scope_key
        if scope_key in mapper.relationships:
            key = self._foreign_key_property(mapper, scope_key).key
        return self.stored_value(record, key)

    def stored_value(self, record: object, key: str) -> object:
        """
        Committed value of the column attribute key.

        An attribute assigned while expired carries no previous value in its
        history; that value is then read back from the database.
        """
        state = sa_inspect(record)
        history = state.attrs[key].load_history()
        if history.added and not history.deleted and state.identity is not None:
            if state.session is None:
                raise ValidationError(
                    f"{type(record).__name__} is detached; its stored {key} is unknown",
                    field=key,
                )
            mapper = state.mapper
            pairs = zip(mapper.primary_key, state.identity, strict=True)
            stmt = select(mapper.attrs[key].class_attribute).where(
                *(column == value for column, value in pairs)
            )
            with state.session.no_autoflush:
                return state.session.execute(stmt).scalar_one_or_none()
        return committed_value(history)

    def was_destructive_cascade(self, scope_key: str, record: object) -> bool:
        """
        Whether record is being removed because its scope holder is.

        True when scope_key is a relationship whose related object is marked
        for deletion and whose inverse relationship cascades deletes. Only the
        already-loaded related object is inspected; nothing is lazy-loaded.
        """
        mapper = sa_inspect(type(record))
        if scope_key not in mapper.relationships:
            return False

        related = sa_inspect(record).dict.get(scope_key)
        if related is None:
            return False

        related_state = sa_inspect(related)
        flagged = (
            related_state.deleted
            or related_state.was_deleted
            or (related_state.session is not None and related in related_state.session.deleted)
        )
        if not flagged:
            return False

        inverse = self._inverse_of(mapper.relationships[scope_key])
        return inverse is not None and inverse.cascade.delete

    def _foreign_key_property(self, mapper: Mapper[object], scope_key: str) -> ColumnProperty[object]:
        relationship = mapper.relationships[scope_key]
        if (
            relationship.direction is not RelationshipDirection.MANYTOONE
            or len(relationship.local_columns) != 1
        ):
            raise ScopeConfigurationError(
                mapper.class_.__name__,
                f"Relationship scope {scope_key!r} must be many-to-one over a single column",
            )
        (column,) = relationship.local_columns
        return mapper.get_property_by_column(column)

    @staticmethod
    def _identity_of(related: object, relationship: RelationshipProperty[object]) -> object:
        if related is None:
            return None
        _, remote_column = relationship.local_remote_pairs[0]
        related_mapper = sa_inspect(related).mapper
        value = getattr(related, related_mapper.get_property_by_column(remote_column).key)
        if value is None:
            raise ValidationError(
                f"{type(related).__name__} must be flushed before records can be ordered under it",
                field=relationship.key,
            )
        return value

    @staticmethod
    def _inverse_of(relationship: RelationshipProperty[object]) -> RelationshipProperty[object] | None:
        target = relationship.mapper
        if relationship.back_populates and relationship.back_populates in target.relationships:
            return target.relationships[relationship.back_populates]
        for candidate in target.relationships:
            if (
                candidate.back_populates == relationship.key
                and candidate.mapper.class_ is relationship.parent.class_
            ):
                return candidate
        return None
