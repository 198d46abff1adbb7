"""Custom exception hierarchy for the HTTP-facing layer."""


class ScopedOrderingError(Exception):
    """Base exception for errors surfaced by the API."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(ScopedOrderingError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class RecordNotFoundError(NotFoundError):
    """Ordered record not found error."""

    def __init__(self, record_type: str, record_id: int | None = None) -> None:
        """Initialize with the record type and ID."""
        self.record_type = record_type
        self.record_id = record_id
        if record_id is not None:
            super().__init__(f"{record_type} with id {record_id} not found")
        else:
            super().__init__(f"{record_type} not found")


class ValidationError(ScopedOrderingError):
    """Invalid request."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 400 status code."""
        super().__init__(message, status_code=400)
