"""
Position arithmetic for records ordered within a scope group.

Positions in a group of n records are always 0..n-1 at rest. Every move is
expressed as increments of exactly one on the records between the old and
the new position, so the group never needs renumbering.
"""

import structlog

from scoped_ordering.application.ordering.protocols import (
    OrderedRecordProtocol,
    PositionStoreProtocol,
    SiblingQueryProtocol,
    SiblingsResolverProtocol,
)
from scoped_ordering.domain.common.exceptions import MissingSiblingError, ValidationError

logger = structlog.get_logger(__name__)


class PositionEngine:
    """Default positions, boundary checks and moves for ordered records."""

    def __init__(
        self,
        siblings_resolver: SiblingsResolverProtocol,
        position_store: PositionStoreProtocol,
    ) -> None:
        self.siblings_resolver = siblings_resolver
        self.position_store = position_store

    # Queries

    def default_position(self, record: OrderedRecordProtocol) -> int:
        """Position that appends record to the end of its current group."""
        highest = self.siblings_resolver.siblings(record).max_position()
        return 0 if highest is None else highest + 1

    def higher_siblings(self, record: OrderedRecordProtocol) -> SiblingQueryProtocol:
        """Siblings positioned above record (smaller position)."""
        return self.siblings_resolver.siblings(record).positioned_before(
            self._position_of(record)
        )

    def lower_siblings(self, record: OrderedRecordProtocol) -> SiblingQueryProtocol:
        """Siblings positioned below record (greater position)."""
        return self.siblings_resolver.siblings(record).positioned_after(
            self._position_of(record)
        )

    def highest_sibling(self, record: OrderedRecordProtocol) -> OrderedRecordProtocol | None:
        """First record of the group, possibly record itself."""
        return self.siblings_resolver.siblings_and_self(record).first()

    def lowest_sibling(self, record: OrderedRecordProtocol) -> OrderedRecordProtocol | None:
        """Last record of the group, possibly record itself."""
        return self.siblings_resolver.siblings_and_self(record).last()

    def at_top(self, record: OrderedRecordProtocol) -> bool:
        return self.higher_siblings(record).is_empty()

    def at_bottom(self, record: OrderedRecordProtocol) -> bool:
        return self.lower_siblings(record).is_empty()

    # Moves

    def move_to_top(self, record: OrderedRecordProtocol) -> bool:
        """
        Move record above all of its siblings.

        Returns:
            True if the record was moved or already at the top
        """
        if self.at_top(record):
            return True
        highest = self.highest_sibling(record)
        assert highest is not None  # record has higher siblings
        return self.move_above(record, highest)

    def move_to_bottom(self, record: OrderedRecordProtocol) -> bool:
        """
        Move record below all of its siblings.

        Returns:
            True if the record was moved or already at the bottom
        """
        if self.at_bottom(record):
            return True
        lowest = self.lowest_sibling(record)
        assert lowest is not None  # record has lower siblings
        return self.move_below(record, lowest)

    def move_up(self, record: OrderedRecordProtocol) -> None:
        """Swap record with the sibling directly above it."""
        if self.at_top(record):
            return
        position = self._position_of(record)
        neighbour = self._sibling_at(record, position - 1)
        self.position_store.increment(neighbour, 1)
        self.position_store.increment(record, -1)
        self._log_move(record, position, position - 1)

    def move_down(self, record: OrderedRecordProtocol) -> None:
        """Swap record with the sibling directly below it."""
        if self.at_bottom(record):
            return
        position = self._position_of(record)
        neighbour = self._sibling_at(record, position + 1)
        self.position_store.increment(neighbour, -1)
        self.position_store.increment(record, 1)
        self._log_move(record, position, position + 1)

    def move_above(self, record: OrderedRecordProtocol, other: OrderedRecordProtocol) -> bool:
        """
        Move record directly above other.

        Args:
            record: The record to move
            other: A record of the same scope group

        Returns:
            False if other belongs to another scope group, True otherwise

        Raises:
            Whatever the store raises when saving record. Sibling shifts
            issued before the save are not undone.
        """
        if not self.siblings_resolver.is_sibling_of(record, other):
            self._log_rejected(record, other)
            return False

        p = self._position_of(record)
        q = self._position_of(other)
        if p == q:
            return True

        if p > q:
            new_position = q
            self.siblings_resolver.siblings(other).positioned_after(q).positioned_before(
                p
            ).shift(1)
            self.position_store.increment(other, 1)
        else:
            new_position = q - 1
            self.siblings_resolver.siblings(other).positioned_before(q).positioned_after(
                p
            ).shift(-1)

        record.position = new_position
        self.position_store.save(record)
        self._log_move(record, p, new_position)
        return True

    def move_below(self, record: OrderedRecordProtocol, other: OrderedRecordProtocol) -> bool:
        """
        Move record directly below other.

        Mirror of move_above; see its notes on scope mismatch and failures.
        """
        if not self.siblings_resolver.is_sibling_of(record, other):
            self._log_rejected(record, other)
            return False

        p = self._position_of(record)
        q = self._position_of(other)
        if p == q:
            return True

        if p > q:
            new_position = q + 1
            self.siblings_resolver.siblings(other).positioned_after(q).positioned_before(
                p
            ).shift(1)
        else:
            new_position = q
            self.siblings_resolver.siblings(other).positioned_before(q).positioned_after(
                p
            ).shift(-1)
            self.position_store.increment(other, -1)

        record.position = new_position
        self.position_store.save(record)
        self._log_move(record, p, new_position)
        return True

    # Helpers

    def _sibling_at(self, record: OrderedRecordProtocol, position: int) -> OrderedRecordProtocol:
        neighbour = self.siblings_resolver.siblings(record).positioned_at(position).first()
        if neighbour is None:
            logger.error(
                "missing_sibling",
                record_type=type(record).__name__,
                record_id=record.id,
                expected_position=position,
            )
            raise MissingSiblingError(type(record).__name__, position)
        return neighbour

    @staticmethod
    def _position_of(record: OrderedRecordProtocol) -> int:
        if record.position is None:
            raise ValidationError(
                f"{type(record).__name__} {record.id} has no position; save it first",
                field="position",
            )
        return record.position

    @staticmethod
    def _log_move(record: OrderedRecordProtocol, old: int, new: int) -> None:
        logger.info(
            "record_moved",
            record_type=type(record).__name__,
            record_id=record.id,
            old_position=old,
            new_position=new,
        )

    @staticmethod
    def _log_rejected(record: OrderedRecordProtocol, other: OrderedRecordProtocol) -> None:
        logger.info(
            "move_rejected_scope_mismatch",
            record_type=type(record).__name__,
            record_id=record.id,
            other_id=other.id,
        )
