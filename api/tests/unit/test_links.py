"""Tests for pagination Link headers."""

from seekpage.pagination import create_link_header


class TestLinkHeader:
    """RFC 8288 Link header construction."""

    def test_no_cursors(self):
        assert create_link_header("http://api/v1/entries", {"limit": 10}) is None

    def test_next_only(self):
        header = create_link_header("http://api/v1/entries", {"limit": 10, "sort": "score"}, next_cursor="abc")

        assert header == '<http://api/v1/entries?limit=10&sort=score&cursor=abc&direction=next>; rel="next"'

    def test_next_and_prev(self):
        header = create_link_header(
            "http://api/v1/entries",
            {"limit": 10},
            next_cursor="n1",
            prev_cursor="p1"
        )

        assert header == (
            '<http://api/v1/entries?limit=10&cursor=n1&direction=next>; rel="next", '
            '<http://api/v1/entries?limit=10&cursor=p1&direction=prev>; rel="prev"'
        )

    def test_drops_none_and_stale_pagination_params(self):
        header = create_link_header(
            "http://api/v1/entries",
            {"limit": 10, "category": None, "cursor": "old", "direction": "prev"},
            next_cursor="new"
        )

        assert header == '<http://api/v1/entries?limit=10&cursor=new&direction=next>; rel="next"'

    def test_values_are_url_encoded(self):
        header = create_link_header("http://api/v1/entries", {"category": "a&b c"}, next_cursor="x")

        assert "category=a%26b+c" in header
