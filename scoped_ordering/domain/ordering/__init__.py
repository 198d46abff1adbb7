"""
Ordering domain.

Value objects describing how records are grouped and what changed on save:
- ScopeConfiguration / ScopeRegistry: which keys define a scope group
- ChangeSet: the explicit change signal consumed by the save hook
- MoveAction: reordering operations exposed to callers
"""

from .change_set import ChangeSet, ScopeChange
from .move import MoveAction
from .scope import ScopeConfiguration, ScopeRegistry, ordered, scope_registry

__all__ = [
    "ChangeSet",
    "MoveAction",
    "ScopeChange",
    "ScopeConfiguration",
    "ScopeRegistry",
    "ordered",
    "scope_registry",
]
