import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from scoped_ordering.application.ordering.use_cases.ordering_use_case import OrderingUseCase
from scoped_ordering.core import container
from scoped_ordering.domain.common.exceptions import DomainError
from scoped_ordering.exceptions import ScopedOrderingError
from scoped_ordering.infrastructure.common.di import inject_use_case
from scoped_ordering.infrastructure.ordering.schemas import MoveRequest, ScopeGroupResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ordering", tags=["ordering"])


@router.get(
    "/{record_type}/{record_id}/group",
    response_model=ScopeGroupResponse,
    status_code=status.HTTP_200_OK,
)
def get_scope_group(
    record_type: str,
    record_id: int,
    use_case: OrderingUseCase = Depends(inject_use_case(container.ordering_use_case)),
) -> ScopeGroupResponse:
    """
    Get the scope group of a record.

    Args:
        record_type: Name of the ordered record type
        record_id: ID of the record

    Returns:
        All records sharing the record's scope, ascending by position

    Raises:
        HTTPException: If the type or record is not found, or the query fails
    """
    try:
        records = use_case.get_scope_group(record_type, record_id)
        return ScopeGroupResponse.from_records(record_type, records)
    except (ScopedOrderingError, DomainError):
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except Exception as e:
        logger.error(
            f"Failed to load scope group of {record_type} {record_id}: {e!s}", exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{record_type}/{record_id}/move",
    response_model=ScopeGroupResponse,
    status_code=status.HTTP_200_OK,
)
def move_record(
    record_type: str,
    record_id: int,
    request: MoveRequest,
    use_case: OrderingUseCase = Depends(inject_use_case(container.ordering_use_case)),
) -> ScopeGroupResponse:
    """
    Reorder a record within its scope group.

    Moves to the top or bottom and single-step moves are no-ops at the
    boundary. Moving above or below a record of another group is rejected.

    Args:
        record_type: Name of the ordered record type
        record_id: ID of the record to move
        request: The move to perform and its reference record

    Returns:
        The scope group after the move

    Raises:
        HTTPException: If a record is not found, the target is in another
            group, or the move fails
    """
    try:
        records = use_case.move(record_type, record_id, request.action, request.target_id)
        return ScopeGroupResponse.from_records(record_type, records)
    except (ScopedOrderingError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to move {record_type} {record_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete(
    "/{record_type}/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_record(
    record_type: str,
    record_id: int,
    use_case: OrderingUseCase = Depends(inject_use_case(container.ordering_use_case)),
) -> None:
    """
    Delete a record and close the gap it leaves in its scope group.

    Args:
        record_type: Name of the ordered record type
        record_id: ID of the record to delete

    Raises:
        HTTPException: If the record is not found or deletion fails
    """
    try:
        use_case.delete(record_type, record_id)
    except (ScopedOrderingError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete {record_type} {record_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
