"""
Domain common module.

Contains the domain error hierarchy shared by every bounded context.
"""

from .exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    InvariantViolationError,
    MissingSiblingError,
    ScopeConfigurationError,
    ValidationError,
)

__all__ = [
    "BusinessRuleViolationError",
    "DomainError",
    "EntityNotFoundError",
    "InvariantViolationError",
    "MissingSiblingError",
    "ScopeConfigurationError",
    "ValidationError",
]
