from scoped_ordering.infrastructure.ordering.routers.ordering import router

__all__ = ["router"]
