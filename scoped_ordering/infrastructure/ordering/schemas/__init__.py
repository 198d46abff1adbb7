from scoped_ordering.infrastructure.ordering.schemas.ordering_schemas import (
    MoveRequest,
    OrderedRecordItem,
    ScopeGroupResponse,
)

__all__ = ["MoveRequest", "OrderedRecordItem", "ScopeGroupResponse"]
