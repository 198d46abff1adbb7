"""Integration tests for the ordering API endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from scoped_ordering.infrastructure.ordering.repositories import OrderedRecordRepository
from tests.conftest import create_test_board, create_test_cards
from tests.models import Board, Card


@pytest.fixture
def board_with_cards(repository: OrderedRecordRepository) -> tuple[Board, list[Card]]:
    board = create_test_board(repository)
    return board, create_test_cards(repository, board, 3)


def item_ids(response_json: dict) -> list[int]:
    return [item["id"] for item in response_json["items"]]


class TestGetScopeGroup:
    """Test reading a record's scope group."""

    def test_returns_group_in_position_order(
        self, client: TestClient, board_with_cards: tuple[Board, list[Card]]
    ) -> None:
        _, cards = board_with_cards
        response = client.get(f"/api/v1/ordering/Card/{cards[1].id}/group")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["record_type"] == "Card"
        assert data["items"] == [{"id": c.id, "position": i} for i, c in enumerate(cards)]

    def test_excludes_other_groups(
        self,
        client: TestClient,
        repository: OrderedRecordRepository,
        board_with_cards: tuple[Board, list[Card]],
    ) -> None:
        _, cards = board_with_cards
        other = create_test_board(repository, "Other")
        create_test_cards(repository, other, 2)

        response = client.get(f"/api/v1/ordering/Card/{cards[0].id}/group")

        assert item_ids(response.json()) == [c.id for c in cards]

    def test_unknown_type(self, client: TestClient) -> None:
        response = client.get("/api/v1/ordering/Widget/1/group")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Widget" in response.json()["detail"]

    def test_unknown_record(self, client: TestClient) -> None:
        response = client.get("/api/v1/ordering/Card/999/group")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Card with id 999 not found"


class TestMoveRecord:
    """Test reordering through the API."""

    def test_move_to_top(
        self, client: TestClient, board_with_cards: tuple[Board, list[Card]]
    ) -> None:
        _, cards = board_with_cards
        c1, c2, c3 = (c.id for c in cards)

        response = client.post(f"/api/v1/ordering/Card/{c3}/move", json={"action": "top"})

        assert response.status_code == status.HTTP_200_OK
        assert item_ids(response.json()) == [c3, c1, c2]
        assert [i["position"] for i in response.json()["items"]] == [0, 1, 2]

    @pytest.mark.parametrize(
        ("mover", "action", "expected"),
        [
            (0, "down", [1, 0, 2]),
            (2, "up", [0, 2, 1]),
            (0, "bottom", [1, 2, 0]),
            (0, "up", [0, 1, 2]),
        ],
    )
    def test_single_record_moves(
        self,
        client: TestClient,
        board_with_cards: tuple[Board, list[Card]],
        mover: int,
        action: str,
        expected: list[int],
    ) -> None:
        _, cards = board_with_cards
        ids = [c.id for c in cards]

        response = client.post(f"/api/v1/ordering/Card/{ids[mover]}/move", json={"action": action})

        assert response.status_code == status.HTTP_200_OK
        assert item_ids(response.json()) == [ids[i] for i in expected]

    def test_move_above_target(
        self, client: TestClient, board_with_cards: tuple[Board, list[Card]]
    ) -> None:
        _, cards = board_with_cards
        c1, c2, c3 = (c.id for c in cards)

        response = client.post(
            f"/api/v1/ordering/Card/{c1}/move", json={"action": "above", "target_id": c3}
        )

        assert response.status_code == status.HTTP_200_OK
        assert item_ids(response.json()) == [c2, c1, c3]

    def test_move_below_target(
        self, client: TestClient, board_with_cards: tuple[Board, list[Card]]
    ) -> None:
        _, cards = board_with_cards
        c1, c2, c3 = (c.id for c in cards)

        response = client.post(
            f"/api/v1/ordering/Card/{c3}/move", json={"action": "below", "target_id": c1}
        )

        assert response.status_code == status.HTTP_200_OK
        assert item_ids(response.json()) == [c1, c3, c2]

    def test_relative_move_requires_target(
        self, client: TestClient, board_with_cards: tuple[Board, list[Card]]
    ) -> None:
        _, cards = board_with_cards

        response = client.post(f"/api/v1/ordering/Card/{cards[0].id}/move", json={"action": "above"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_unknown_action(
        self, client: TestClient, board_with_cards: tuple[Board, list[Card]]
    ) -> None:
        _, cards = board_with_cards

        response = client.post(
            f"/api/v1/ordering/Card/{cards[0].id}/move", json={"action": "sideways"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_target_in_other_group_conflicts(
        self,
        client: TestClient,
        db_session: Session,
        repository: OrderedRecordRepository,
        board_with_cards: tuple[Board, list[Card]],
    ) -> None:
        _, cards = board_with_cards
        other = create_test_board(repository, "Other")
        stranger = create_test_cards(repository, other, 1)[0]

        response = client.post(
            f"/api/v1/ordering/Card/{cards[2].id}/move",
            json={"action": "above", "target_id": stranger.id},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "not in the same scope group" in response.json()["detail"]
        db_session.expire_all()
        assert [c.position for c in cards] == [0, 1, 2]

    def test_missing_target(
        self, client: TestClient, board_with_cards: tuple[Board, list[Card]]
    ) -> None:
        _, cards = board_with_cards

        response = client.post(
            f"/api/v1/ordering/Card/{cards[0].id}/move",
            json={"action": "below", "target_id": 999},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteRecord:
    """Test deletion through the API."""

    def test_delete_closes_gap(
        self, client: TestClient, board_with_cards: tuple[Board, list[Card]]
    ) -> None:
        _, cards = board_with_cards
        c1, c2, c3 = (c.id for c in cards)

        response = client.delete(f"/api/v1/ordering/Card/{c1}")
        assert response.status_code == status.HTTP_204_NO_CONTENT

        group = client.get(f"/api/v1/ordering/Card/{c3}/group").json()
        assert group["items"] == [{"id": c2, "position": 0}, {"id": c3, "position": 1}]

    def test_delete_board_removes_its_cards(
        self,
        client: TestClient,
        repository: OrderedRecordRepository,
        board_with_cards: tuple[Board, list[Card]],
    ) -> None:
        board, cards = board_with_cards
        board_id, card_id = board.id, cards[0].id
        other = create_test_board(repository, "Other")

        response = client.delete(f"/api/v1/ordering/Board/{board_id}")
        assert response.status_code == status.HTTP_204_NO_CONTENT

        assert client.get(f"/api/v1/ordering/Card/{card_id}/group").status_code == 404
        group = client.get(f"/api/v1/ordering/Board/{other.id}/group").json()
        assert group["items"] == [{"id": other.id, "position": 0}]

    def test_delete_unknown_record(self, client: TestClient) -> None:
        response = client.delete("/api/v1/ordering/Card/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestMainEndpoints:
    """Test root and health endpoints."""

    def test_health_endpoint(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_api_root_endpoint(self, client: TestClient) -> None:
        response = client.get("/api/v1/")
        assert response.status_code == 200
        data = response.json()
        assert data["version"] == "0.1.0"
        assert data["docs"] == "/api/v1/docs"
