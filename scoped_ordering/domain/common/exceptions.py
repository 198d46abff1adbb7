"""
Domain layer exceptions.

These exceptions represent domain-level errors raised when ordering rules
are violated or the dense-position invariant is found broken. The
infrastructure layer translates them to HTTP responses.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions inherit from this class so they can be caught
    and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when an operation receives input it cannot work with.

    Example: moving a record that was never assigned a position.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    """
    Raised when an entity cannot be found.

    Example: looking up an ordered record type that was never registered.
    """

    def __init__(self, entity_type: str, entity_id: object) -> None:
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, {"entity_type": entity_type, "entity_id": entity_id})
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """
    Raised when a business rule is violated.

    Example: asking to move a record above a record from another scope group.
    """

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, {"rule": rule})
        self.rule = rule


class InvariantViolationError(DomainError):
    """
    Raised when a stored invariant is found to be broken.

    Example: positions within a scope group are not contiguous.
    """

    def __init__(self, aggregate: str, invariant: str) -> None:
        message = f"Invariant violation in {aggregate}: {invariant}"
        super().__init__(message, {"aggregate": aggregate, "invariant": invariant})
        self.aggregate = aggregate
        self.invariant = invariant


class MissingSiblingError(InvariantViolationError):
    """Raised when no sibling holds the position a single-step move expects."""

    def __init__(self, record_type: str, position: int) -> None:
        super().__init__(record_type, f"no sibling found at position {position}")
        self.details["position"] = position
        self.position = position


class ScopeConfigurationError(DomainError):
    """Raised when a scope declaration is invalid or registered twice."""

    def __init__(self, record_type: str, message: str) -> None:
        super().__init__(message, {"record_type": record_type})
        self.record_type = record_type
