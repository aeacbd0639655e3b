"""
Tests for in-memory search and pagination.
"""

import pytest

from ticket_scanner.services.listing import Page, filter_tickets, paginate


TICKETS = [
    {"id": "1", "establishment": "Mercadona", "purchase_date": "2025-02-01"},
    {"id": "2", "establishment": "Lidl", "purchase_date": "2025-01-15"},
    {"id": "3", "establishment": None, "purchase_date": "2024-12-24"},
]


class TestFilterTickets:
    """Tests for filter_tickets."""

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_empty_query_keeps_everything(self, query):
        result = filter_tickets(TICKETS, query)

        assert result == TICKETS
        assert result is not TICKETS

    def test_case_insensitive_establishment_match(self):
        assert [t["id"] for t in filter_tickets(TICKETS, "LIDL")] == ["2"]

    def test_matches_date(self):
        assert [t["id"] for t in filter_tickets(TICKETS, "2025-0")] == ["1", "2"]

    def test_missing_fields_do_not_match(self):
        assert [t["id"] for t in filter_tickets(TICKETS, "none")] == []


class TestPaginate:
    """Tests for paginate."""

    def test_middle_page(self):
        page = paginate(list(range(25)), page=2, page_size=10)

        assert page.items == list(range(10, 20))
        assert page.page == 2
        assert page.total_pages == 3
        assert page.has_prev and page.has_next

    def test_last_partial_page(self):
        page = paginate(list(range(25)), page=3, page_size=10)

        assert page.items == [20, 21, 22, 23, 24]
        assert not page.has_next

    @pytest.mark.parametrize("requested,expected", [(0, 1), (-4, 1), (4, 3), (1000, 3)])
    def test_out_of_range_pages_are_clamped(self, requested, expected):
        assert paginate(list(range(25)), page=requested, page_size=10).page == expected

    def test_empty_list_has_one_empty_page(self):
        page = paginate([], page=5, page_size=10)

        assert page.items == []
        assert page.page == 1
        assert page.total_pages == 1
        assert not page.has_prev and not page.has_next

    def test_exact_multiple(self):
        assert paginate(list(range(20)), page=1, page_size=10).total_pages == 2

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            paginate([1, 2, 3], page=1, page_size=0)

    def test_page_defaults(self):
        assert Page().total_pages == 1
