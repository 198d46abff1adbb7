"""Protocol for persisting ordered records."""

from typing import Protocol

from scoped_ordering.application.ordering.protocols.ordered_record import OrderedRecordProtocol


class OrderedRecordRepositoryProtocol(Protocol):
    """Protocol defining the persistence operations used by ordering use cases."""

    def find_by_id(self, record_type: type, record_id: object) -> OrderedRecordProtocol | None: ...

    def scope_group(self, record: OrderedRecordProtocol) -> list[OrderedRecordProtocol]: ...

    def save(self, record: OrderedRecordProtocol) -> OrderedRecordProtocol: ...

    def delete(self, record: OrderedRecordProtocol) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
