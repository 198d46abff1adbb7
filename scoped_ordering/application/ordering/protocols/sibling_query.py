"""Protocol for an ordered query over a record's scope-mates."""

from collections.abc import Iterator
from typing import Protocol, Self

from scoped_ordering.application.ordering.protocols.ordered_record import OrderedRecordProtocol


class SiblingQueryProtocol(Protocol):
    """
    Lazily evaluated query over one scope group, ascending by position.

    Filters return new handles; nothing hits the store until a terminal
    method (first, last, is_empty, count, max_position, all, iteration,
    shift) is called.
    """

    def positioned_before(self, position: int) -> Self: ...

    def positioned_after(self, position: int) -> Self: ...

    def positioned_at(self, position: int) -> Self: ...

    def first(self) -> OrderedRecordProtocol | None: ...

    def last(self) -> OrderedRecordProtocol | None: ...

    def is_empty(self) -> bool: ...

    def count(self) -> int: ...

    def max_position(self) -> int | None: ...

    def all(self) -> list[OrderedRecordProtocol]: ...

    def __iter__(self) -> Iterator[OrderedRecordProtocol]: ...

    def shift(self, delta: int) -> int: ...
