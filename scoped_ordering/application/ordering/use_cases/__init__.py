from scoped_ordering.application.ordering.use_cases.ordering_use_case import OrderingUseCase

__all__ = ["OrderingUseCase"]
