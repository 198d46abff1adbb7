"""Capture the ordering-relevant changes of a mapped instance before it is saved."""

from sqlalchemy import inspect as sa_inspect

from scoped_ordering.domain.ordering.change_set import ChangeSet, ScopeChange
from scoped_ordering.domain.ordering.scope import ScopeConfiguration
from scoped_ordering.infrastructure.ordering.scope_resolver import SqlAlchemyScopeResolver


def capture_changes(
    record: object,
    configuration: ScopeConfiguration,
    scope_resolver: SqlAlchemyScopeResolver,
) -> ChangeSet:
    """
    Build the ChangeSet for record from its SQLAlchemy attribute history.

    Must be called before anything assigns record.position, since the former
    position is read from the committed state.
    """
    state = sa_inspect(record)
    if state.key is None:
        return ChangeSet.for_new_record()

    former_position = scope_resolver.stored_value(record, "position")

    scope_changes: list[ScopeChange] = []
    for key in configuration:
        former = scope_resolver.former(key, record)
        current = scope_resolver.resolve(key, record)
        if former != current:
            scope_changes.append(ScopeChange(key=key, former=former, current=current))

    return ChangeSet(
        is_new=False,
        former_position=former_position,  # type: ignore[arg-type]
        scope_changes=tuple(scope_changes),
    )
