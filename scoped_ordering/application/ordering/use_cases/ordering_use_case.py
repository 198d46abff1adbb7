"""
Use case for reading and reordering scope groups.
"""

from typing import Any

import structlog

from scoped_ordering.application.ordering.protocols import OrderedRecordRepositoryProtocol
from scoped_ordering.application.ordering.services.position_engine import PositionEngine
from scoped_ordering.domain.common.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
)
from scoped_ordering.domain.ordering.move import MoveAction
from scoped_ordering.domain.ordering.scope import ScopeRegistry
from scoped_ordering.exceptions import NotFoundError, RecordNotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class OrderingUseCase:
    """Use case for listing, moving and deleting ordered records."""

    def __init__(
        self,
        repository: OrderedRecordRepositoryProtocol,
        engine: PositionEngine,
        registry: ScopeRegistry,
    ) -> None:
        self.repository = repository
        self.engine = engine
        self.registry = registry

    def get_scope_group(self, type_name: str, record_id: int) -> list[Any]:
        """
        Get the scope group a record belongs to.

        Args:
            type_name: Name of the ordered record type
            record_id: ID of the record

        Returns:
            Records of the group, ascending by position

        Raises:
            NotFoundError: If the type or the record does not exist
        """
        record = self._load(type_name, record_id)
        return self.repository.scope_group(record)

    def move(
        self,
        type_name: str,
        record_id: int,
        action: MoveAction,
        target_id: int | None = None,
    ) -> list[Any]:
        """
        Reorder a record within its scope group.

        Args:
            type_name: Name of the ordered record type
            record_id: ID of the record to move
            action: The move to perform
            target_id: ID of the reference record for above/below moves

        Returns:
            Records of the group after the move, ascending by position

        Raises:
            NotFoundError: If the type, the record or the target does not exist
            ValidationError: If an above/below move has no target
            BusinessRuleViolationError: If the target belongs to another scope group
        """
        record = self._load(type_name, record_id)
        old_position = record.position

        try:
            if action.needs_target:
                if target_id is None:
                    raise ValidationError(f"Action '{action}' requires a target_id")
                target = self._load(type_name, target_id)
                move = self.engine.move_above if action is MoveAction.ABOVE else self.engine.move_below
                if not move(record, target):
                    raise BusinessRuleViolationError(
                        "same_scope_group",
                        f"{type_name} {target_id} is not in the same scope group as {record_id}",
                    )
            elif action is MoveAction.UP:
                self.engine.move_up(record)
            elif action is MoveAction.DOWN:
                self.engine.move_down(record)
            elif action is MoveAction.TOP:
                self.engine.move_to_top(record)
            else:
                self.engine.move_to_bottom(record)
            self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise

        logger.info(
            "moved_record",
            record_type=type_name,
            record_id=record_id,
            action=str(action),
            target_id=target_id,
            old_position=old_position,
            new_position=record.position,
        )
        return self.repository.scope_group(record)

    def delete(self, type_name: str, record_id: int) -> None:
        """
        Delete a record, closing the gap it leaves in its scope group.

        Raises:
            NotFoundError: If the type or the record does not exist
        """
        record = self._load(type_name, record_id)
        position = record.position
        self.repository.delete(record)
        logger.info(
            "deleted_ordered_record",
            record_type=type_name,
            record_id=record_id,
            position=position,
        )

    def _load(self, type_name: str, record_id: int) -> Any:  # noqa: ANN401
        try:
            record_type = self.registry.lookup(type_name)
        except EntityNotFoundError as e:
            raise NotFoundError(f"Unknown ordered record type '{type_name}'") from e

        record = self.repository.find_by_id(record_type, record_id)
        if record is None:
            raise RecordNotFoundError(type_name, record_id)
        return record
