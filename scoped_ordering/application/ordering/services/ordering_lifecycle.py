"""Hooks the persistence host runs around saving and destroying ordered records."""

import structlog

from scoped_ordering.application.ordering.protocols import (
    OrderedRecordProtocol,
    ScopeResolverProtocol,
    SiblingsResolverProtocol,
)
from scoped_ordering.application.ordering.services.position_engine import PositionEngine
from scoped_ordering.domain.ordering.change_set import ChangeSet
from scoped_ordering.domain.ordering.scope import ScopeRegistry

logger = structlog.get_logger(__name__)


class OrderingLifecycle:
    """
    Keeps scope groups dense across saves and deletions.

    The host must call before_save() before persisting a record and
    after_destroy() once the record has been removed, synchronously and in
    the same unit of work.
    """

    def __init__(
        self,
        engine: PositionEngine,
        siblings_resolver: SiblingsResolverProtocol,
        scope_resolver: ScopeResolverProtocol,
        registry: ScopeRegistry,
    ) -> None:
        self.engine = engine
        self.siblings_resolver = siblings_resolver
        self.scope_resolver = scope_resolver
        self.registry = registry

    def before_save(self, record: OrderedRecordProtocol, changes: ChangeSet) -> None:
        # The old group is closed up before record takes a slot in the new one
        if changes.scope_changed and not changes.is_new:
            self.reposition_former_siblings(record, changes)
        self.assign_default_position(record, changes)

    def after_destroy(self, record: OrderedRecordProtocol) -> None:
        self.close_gap_on_destroy(record)

    def assign_default_position(self, record: OrderedRecordProtocol, changes: ChangeSet) -> None:
        """Append record to the end of its (new) group when it has no slot there yet."""
        if record.position is not None and not (changes.scope_changed and not changes.is_new):
            return
        record.position = self.engine.default_position(record)
        logger.debug(
            "assigned_default_position",
            record_type=type(record).__name__,
            record_id=record.id,
            position=record.position,
        )

    def reposition_former_siblings(
        self, record: OrderedRecordProtocol, changes: ChangeSet
    ) -> None:
        """Close the gap record leaves behind in the group it is moving out of."""
        if self.registry.configuration_for(record).is_global:
            return
        if changes.former_position is None:
            # The record held no slot in its former group
            return

        shifted = (
            self.siblings_resolver.siblings(record, scope_override=changes.former_scope_values())
            .positioned_after(changes.former_position)
            .shift(-1)
        )
        logger.info(
            "repositioned_former_siblings",
            record_type=type(record).__name__,
            record_id=record.id,
            changed_keys=list(changes.changed_keys),
            former_position=changes.former_position,
            shifted=shifted,
        )

    def close_gap_on_destroy(self, record: OrderedRecordProtocol) -> None:
        """Move every lower sibling of a destroyed record up by one."""
        if record.position is None:
            return
        if self.is_cascading_destroy(record):
            logger.debug(
                "skipped_gap_closure_for_cascade",
                record_type=type(record).__name__,
                record_id=record.id,
            )
            return

        shifted = self.engine.lower_siblings(record).shift(-1)
        logger.info(
            "closed_gap_on_destroy",
            record_type=type(record).__name__,
            record_id=record.id,
            position=record.position,
            shifted=shifted,
        )

    def is_cascading_destroy(self, record: OrderedRecordProtocol) -> bool:
        """Whether record is going away together with its whole scope group."""
        configuration = self.registry.configuration_for(record)
        return any(
            self.scope_resolver.was_destructive_cascade(key, record) for key in configuration
        )
