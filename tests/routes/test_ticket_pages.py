"""
Tests for the ticket pages.

Tests cover:
- POST /save splitting the form into header and lines
- GET /tickets search, pagination and per-ticket totals
- GET /ticket/{id} detail, not-found and datastore errors
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ticket_scanner.main import app
from ticket_scanner.auth.dependencies import require_login
from ticket_scanner.services import TicketPersistenceError

client = TestClient(app)


async def mock_require_login_dependency():
    """Mock dependency that accepts every request."""
    return {"logged_in": True}


@pytest.fixture
def mock_login():
    """Override require_login dependency."""
    app.dependency_overrides[require_login] = mock_require_login_dependency
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def mock_get_supabase_client():
    """Mock get_supabase_client to return a fake client."""
    with patch("ticket_scanner.routes.tickets.get_supabase_client") as mock:
        mock.return_value = MagicMock()
        yield mock


def _ticket(n: int) -> dict:
    return {
        "id": str(n),
        "establishment": f"Store {n:02d}",
        "purchase_date": f"2025-01-{n:02d}",
        "created_at": "2025-01-31T10:00:00Z",
    }


def _lines_for(ticket_id: str) -> list:
    # Ticket n has one line of n units at 1.50
    return [{"id": 1, "ticket_id": ticket_id, "product": "Item", "units": int(ticket_id), "unit_price": 1.5}]


class TestSaveTicket:
    """Tests for POST /save"""

    @patch("ticket_scanner.routes.tickets.save_ticket", new_callable=AsyncMock)
    def test_save_splits_form_and_redirects(self, mock_save, mock_login, mock_get_supabase_client):
        mock_save.return_value = "ticket-1"

        form = {
            "establishment": "Mercado Central",
            "date": "2025-03-14",
            "description_0": "Tomatoes",
            "units_0": "1,5",
            "unit_price_0": "2,40",
            "description_1": "Bread",
            "units_1": "2",
            "unit_price_1": "",
            # Not read: index 2 is missing
            "description_3": "Orphan",
        }

        response = client.post("/save", data=form, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/tickets"

        kwargs = mock_save.call_args.kwargs
        assert kwargs["establishment"] == "Mercado Central"
        assert kwargs["purchase_date"] == "2025-03-14"
        lines = kwargs["lines"]
        assert [line.description for line in lines] == ["Tomatoes", "Bread"]
        assert lines[0].units == 1.5
        assert lines[0].unit_price == 2.4
        assert lines[1].unit_price == 0.0

    @patch("ticket_scanner.routes.tickets.save_ticket", new_callable=AsyncMock)
    def test_save_failure_renders_error(self, mock_save, mock_login, mock_get_supabase_client):
        mock_save.side_effect = TicketPersistenceError("Failed to create ticket: boom")

        response = client.post("/save", data={"establishment": "X", "date": ""})

        assert response.status_code == 500
        assert "Error saving the ticket." in response.text


class TestListTickets:
    """Tests for GET /tickets"""

    @patch("ticket_scanner.routes.tickets.get_ticket_lines", new_callable=AsyncMock)
    @patch("ticket_scanner.routes.tickets.list_all_tickets", new_callable=AsyncMock)
    def test_first_page_with_totals(self, mock_list, mock_lines, mock_login, mock_get_supabase_client):
        mock_list.return_value = [_ticket(n) for n in range(25, 0, -1)]
        mock_lines.side_effect = lambda client, ticket_id: _lines_for(ticket_id)

        response = client.get("/tickets")

        assert response.status_code == 200
        html = response.text
        assert "Store 25" in html
        assert "Store 16" in html
        assert "Store 15" not in html
        # 25 units x 1.50
        assert "37.50" in html
        assert "Page 1 of 3 (25 tickets)" in html
        assert "page=2" in html

        # Lines are fetched only for the tickets on the page
        assert mock_lines.await_count == 10

    @patch("ticket_scanner.routes.tickets.get_ticket_lines", new_callable=AsyncMock)
    @patch("ticket_scanner.routes.tickets.list_all_tickets", new_callable=AsyncMock)
    def test_page_out_of_range_is_clamped(self, mock_list, mock_lines, mock_login, mock_get_supabase_client):
        mock_list.return_value = [_ticket(n) for n in range(25, 0, -1)]
        mock_lines.side_effect = lambda client, ticket_id: _lines_for(ticket_id)

        response = client.get("/tickets?page=99")

        assert response.status_code == 200
        assert "Page 3 of 3 (25 tickets)" in response.text
        assert "Store 05" in response.text
        assert mock_lines.await_count == 5

    @patch("ticket_scanner.routes.tickets.get_ticket_lines", new_callable=AsyncMock)
    @patch("ticket_scanner.routes.tickets.list_all_tickets", new_callable=AsyncMock)
    def test_search_filters_by_establishment(self, mock_list, mock_lines, mock_login, mock_get_supabase_client):
        mock_list.return_value = [
            {"id": "1", "establishment": "Mercadona", "purchase_date": "2025-02-01"},
            {"id": "2", "establishment": "Lidl", "purchase_date": "2025-02-02"},
            {"id": "3", "establishment": "MERCADO Central", "purchase_date": "2025-02-03"},
        ]
        mock_lines.return_value = []

        response = client.get("/tickets", params={"q": "  merca "})

        assert response.status_code == 200
        html = response.text
        assert "Mercadona" in html
        assert "MERCADO Central" in html
        assert "Lidl" not in html
        assert "Page 1 of 1 (2 tickets)" in html

    @patch("ticket_scanner.routes.tickets.list_all_tickets", new_callable=AsyncMock)
    def test_search_without_matches(self, mock_list, mock_login, mock_get_supabase_client):
        mock_list.return_value = [_ticket(1)]

        response = client.get("/tickets", params={"q": "nothing"})

        assert response.status_code == 200
        assert "No tickets match" in response.text

    @patch("ticket_scanner.routes.tickets.list_all_tickets", new_callable=AsyncMock)
    def test_datastore_error_renders_500(self, mock_list, mock_login, mock_get_supabase_client):
        mock_list.side_effect = TicketPersistenceError("Failed to fetch tickets: timeout")

        response = client.get("/tickets")

        assert response.status_code == 500
        assert "Error fetching the tickets." in response.text

    def test_non_numeric_page_is_rejected(self, mock_login, mock_get_supabase_client):
        response = client.get("/tickets?page=abc")

        assert response.status_code == 400


class TestTicketDetail:
    """Tests for GET /ticket/{ticket_id}"""

    @patch("ticket_scanner.routes.tickets.get_ticket_lines", new_callable=AsyncMock)
    @patch("ticket_scanner.routes.tickets.get_ticket_by_id", new_callable=AsyncMock)
    def test_detail_shows_lines_and_total(self, mock_get, mock_lines, mock_login, mock_get_supabase_client):
        mock_get.return_value = {
            "id": "7",
            "establishment": "Mercado Central",
            "purchase_date": "2025-03-14",
            "created_at": "2025-03-14T12:00:00Z",
        }
        mock_lines.return_value = [
            {"id": 1, "ticket_id": "7", "product": "Tomatoes", "units": 1.5, "unit_price": 2.4},
            {"id": 2, "ticket_id": "7", "product": "Bread", "units": 2, "unit_price": 0.95},
        ]

        response = client.get("/ticket/7")

        assert response.status_code == 200
        html = response.text
        assert "Mercado Central" in html
        assert "Tomatoes" in html
        # 1.5 x 2.40
        assert "3.60" in html
        # 3.60 + 1.90
        assert "5.50" in html
        mock_get.assert_awaited_once()
        assert mock_get.call_args.args[1] == "7"

    @patch("ticket_scanner.routes.tickets.get_ticket_lines", new_callable=AsyncMock)
    @patch("ticket_scanner.routes.tickets.get_ticket_by_id", new_callable=AsyncMock)
    def test_unknown_ticket_returns_404(self, mock_get, mock_lines, mock_login, mock_get_supabase_client):
        mock_get.return_value = None

        response = client.get("/ticket/does-not-exist")

        assert response.status_code == 404
        assert "Ticket not found." in response.text
        mock_lines.assert_not_called()

    @patch("ticket_scanner.routes.tickets.get_ticket_by_id", new_callable=AsyncMock)
    def test_datastore_error_renders_500(self, mock_get, mock_login, mock_get_supabase_client):
        mock_get.side_effect = TicketPersistenceError("Failed to fetch ticket: timeout")

        response = client.get("/ticket/7")

        assert response.status_code == 500
        assert "Error fetching the ticket." in response.text


class TestUnknownRoutes:
    """Framework errors are rendered as HTML."""

    def test_unknown_route_returns_404_page(self):
        response = client.get("/no/such/page")

        assert response.status_code == 404
        assert "Page not found." in response.text
