"""Dense, scope-aware position ordering for SQLAlchemy records."""

from scoped_ordering.domain.ordering import ChangeSet, MoveAction, ScopeConfiguration, ordered
from scoped_ordering.domain.ordering.scope import scope_registry

__all__ = ["ChangeSet", "MoveAction", "ScopeConfiguration", "ordered", "scope_registry"]
