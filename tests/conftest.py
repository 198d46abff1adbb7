"""Pytest configuration and fixtures."""

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from scoped_ordering.application.ordering.services import PositionEngine
from scoped_ordering.application.ordering.use_cases import OrderingUseCase
from scoped_ordering.config import Settings
from scoped_ordering.core import container
from scoped_ordering.database import Base, get_db
from scoped_ordering.infrastructure.ordering.repositories import OrderedRecordRepository
from scoped_ordering.main import create_app
from tests.models import Board, Card, Task

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def repository(db_session: Session) -> OrderedRecordRepository:
    """Ordered record repository bound to the test session."""
    with container.db.override(db_session):
        return container.ordered_record_repository()


@pytest.fixture
def position_engine(db_session: Session) -> PositionEngine:
    """Position engine bound to the test session."""
    with container.db.override(db_session):
        return container.position_engine()


@pytest.fixture
def ordering_use_case(db_session: Session) -> OrderingUseCase:
    """Ordering use case bound to the test session."""
    with container.db.override(db_session):
        return container.ordering_use_case()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""
    app = create_app(Settings(DATABASE_URL=TEST_DATABASE_URL, ENVIRONMENT="test"))

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def create_test_board(repository: OrderedRecordRepository, name: str = "Board") -> Board:
    """Create and save a board at the end of the global group."""
    return repository.save(Board(name=name))


def create_test_cards(
    repository: OrderedRecordRepository, board: Board | None, count: int
) -> list[Card]:
    """Create count cards on board, appended in order."""
    return [
        repository.save(Card(board=board, title=f"Card {i + 1}")) for i in range(count)
    ]


def create_test_task(
    repository: OrderedRecordRepository, project: str, status: str | None, title: str = ""
) -> Task:
    """Create and save a task in the (project, status) group."""
    return repository.save(Task(project=project, status=status, title=title))
