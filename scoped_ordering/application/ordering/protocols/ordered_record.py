"""Protocol for records that carry an ordering position."""

from typing import Protocol


class OrderedRecordProtocol(Protocol):
    """Any record participating in scoped ordering."""

    id: object
    position: int | None
