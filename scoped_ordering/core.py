from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from scoped_ordering.application.ordering.services.ordering_lifecycle import OrderingLifecycle
from scoped_ordering.application.ordering.services.position_engine import PositionEngine
from scoped_ordering.application.ordering.use_cases.ordering_use_case import OrderingUseCase
from scoped_ordering.domain.ordering.scope import scope_registry
from scoped_ordering.infrastructure.ordering.position_store import SqlAlchemyPositionStore
from scoped_ordering.infrastructure.ordering.repositories import OrderedRecordRepository
from scoped_ordering.infrastructure.ordering.scope_resolver import SqlAlchemyScopeResolver
from scoped_ordering.infrastructure.ordering.siblings_resolver import SqlAlchemySiblingsResolver


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Scope configuration (pure, shared)
    registry = providers.Object(scope_registry)
    scope_resolver = providers.Singleton(SqlAlchemyScopeResolver)

    # Store adapters
    siblings_resolver = providers.Factory(
        SqlAlchemySiblingsResolver,
        db=db,
        scope_resolver=scope_resolver,
        registry=registry,
    )
    position_store = providers.Factory(SqlAlchemyPositionStore, db=db)

    # Ordering services
    position_engine = providers.Factory(
        PositionEngine,
        siblings_resolver=siblings_resolver,
        position_store=position_store,
    )
    ordering_lifecycle = providers.Factory(
        OrderingLifecycle,
        engine=position_engine,
        siblings_resolver=siblings_resolver,
        scope_resolver=scope_resolver,
        registry=registry,
    )

    # Repositories
    ordered_record_repository = providers.Factory(
        OrderedRecordRepository,
        db=db,
        lifecycle=ordering_lifecycle,
        siblings_resolver=siblings_resolver,
        scope_resolver=scope_resolver,
        registry=registry,
    )

    # Use cases
    ordering_use_case = providers.Factory(
        OrderingUseCase,
        repository=ordered_record_repository,
        engine=position_engine,
        registry=registry,
    )


container = Container()
