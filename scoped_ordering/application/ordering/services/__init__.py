"""Application services for ordering."""

from scoped_ordering.application.ordering.services.ordering_lifecycle import OrderingLifecycle
from scoped_ordering.application.ordering.services.position_engine import PositionEngine

__all__ = ["OrderingLifecycle", "PositionEngine"]
