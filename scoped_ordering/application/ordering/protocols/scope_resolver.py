"""Protocol for reading scope values off a record."""

from typing import Protocol

from scoped_ordering.application.ordering.protocols.ordered_record import OrderedRecordProtocol


class ScopeResolverProtocol(Protocol):
    """Resolves scope keys, which may be plain fields or relations."""

    def resolve(self, scope_key: str, record: OrderedRecordProtocol) -> object: ...

    def former(self, scope_key: str, record: OrderedRecordProtocol) -> object: ...

    def was_destructive_cascade(
        self, scope_key: str, record: OrderedRecordProtocol
    ) -> bool: ...
