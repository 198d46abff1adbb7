"""Protocol for resolving the scope group of a record."""

from collections.abc import Mapping
from typing import Protocol

from scoped_ordering.application.ordering.protocols.ordered_record import OrderedRecordProtocol
from scoped_ordering.application.ordering.protocols.sibling_query import SiblingQueryProtocol


class SiblingsResolverProtocol(Protocol):
    """Protocol defining how a record's scope-mates are found."""

    def siblings(
        self,
        record: OrderedRecordProtocol,
        scope_override: Mapping[str, object] | None = None,
    ) -> SiblingQueryProtocol: ...

    def siblings_and_self(
        self,
        record: OrderedRecordProtocol,
        scope_override: Mapping[str, object] | None = None,
    ) -> SiblingQueryProtocol: ...

    def is_sibling_of(
        self, record: OrderedRecordProtocol, other: OrderedRecordProtocol
    ) -> bool: ...
