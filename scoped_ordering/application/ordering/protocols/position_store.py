"""Protocol for the store primitives the position engine relies on."""

from typing import Protocol

from scoped_ordering.application.ordering.protocols.ordered_record import OrderedRecordProtocol


class PositionStoreProtocol(Protocol):
    """Per-record position increments and saves."""

    def increment(self, record: OrderedRecordProtocol, delta: int) -> None: ...

    def save(self, record: OrderedRecordProtocol) -> None: ...
