"""Ports consumed by the ordering services."""

from .ordered_record import OrderedRecordProtocol
from .ordered_record_repository import OrderedRecordRepositoryProtocol
from .position_store import PositionStoreProtocol
from .scope_resolver import ScopeResolverProtocol
from .sibling_query import SiblingQueryProtocol
from .siblings_resolver import SiblingsResolverProtocol

__all__ = [
    "OrderedRecordProtocol",
    "OrderedRecordRepositoryProtocol",
    "PositionStoreProtocol",
    "ScopeResolverProtocol",
    "SiblingQueryProtocol",
    "SiblingsResolverProtocol",
]
