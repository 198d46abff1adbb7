from collections.abc import Callable, Generator
from typing import TypeVar

from dependency_injector.providers import Provider

from scoped_ordering.core import container
from scoped_ordering.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], Generator[T, None, None]]:
    """
    Create a FastAPI dependency for a container provider.

    The container's db is bound to the request-scoped session while the
    object graph is built, and released when the request finishes.
    """

    def dependency(db: DatabaseSession) -> Generator[T, None, None]:
        with container.db.override(db):
            instance = provider()
        yield instance

    return dependency
