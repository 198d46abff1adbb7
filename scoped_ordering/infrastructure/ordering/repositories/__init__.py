from scoped_ordering.infrastructure.ordering.repositories.ordered_record_repository import (
    OrderedRecordRepository,
)

__all__ = ["OrderedRecordRepository"]
