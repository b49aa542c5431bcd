"""Tests for cursor encoding and decoding."""

import base64
import json
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from seekpage.errors.problem_details import BadRequestError, InvalidCursor
from seekpage.pagination import SortField, SortKey, SortOrder, decode_cursor, encode_cursor


def make_token(payload) -> str:
    """Build a raw token the same way the codec does."""
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


@pytest.fixture
def mixed_key() -> SortKey:
    """Sort key covering every supported scalar type."""
    return SortKey([
        SortField(name="created_at", order=SortOrder.DESC, value_type=datetime),
        SortField(name="day", value_type=date),
        SortField(name="price", value_type=Decimal),
        SortField(name="ratio", order=SortOrder.DESC, value_type=float),
        SortField(name="title", value_type=str),
        SortField(name="active", value_type=bool),
        SortField(name="rank", value_type=int),
        SortField(name="id", value_type=UUID, unique=True),
    ])


class TestRoundTrip:
    """decode(encode(v)) == v."""

    def test_heterogeneous_values(self, mixed_key):
        values = (
            datetime(2024, 3, 1, 8, 30, 15, 123456, tzinfo=timezone.utc),
            date(2024, 3, 1),
            Decimal("19.99"),
            0.125,
            "Zürich ☃ \"quoted\"",
            True,
            -42,
            uuid4(),
        )

        assert decode_cursor(encode_cursor(values, mixed_key), mixed_key) == values

    def test_naive_datetime_stays_naive(self):
        key = SortKey([SortField(name="at", value_type=datetime, unique=True)])
        value = (datetime(2023, 12, 31, 23, 59, 59),)

        decoded = decode_cursor(encode_cursor(value, key), key)

        assert decoded == value
        assert decoded[0].tzinfo is None

    def test_decoded_types_match_field_types(self, score_id_key):
        decoded = decode_cursor(encode_cursor((95, 7), score_id_key), score_id_key)

        assert decoded == (95, 7)
        assert all(isinstance(v, int) for v in decoded)

    def test_token_is_url_safe(self, mixed_key):
        values = (
            datetime(2024, 1, 1, tzinfo=timezone.utc),
            date(2024, 1, 1),
            Decimal("1"),
            1.5,
            "??>>??>>~~~",
            False,
            0,
            UUID("fbfffbff-fbff-4bff-bfff-fbfffbfffbff"),
        )

        token = encode_cursor(values, mixed_key)

        assert "=" not in token
        assert "+" not in token
        assert "/" not in token


class TestEncodeErrors:
    """Encoding rejects values that don't fit the sort key."""

    def test_wrong_arity(self, score_id_key):
        with pytest.raises(ValueError, match="expected 2 values"):
            encode_cursor((95,), score_id_key)

    def test_wrong_type(self, score_id_key):
        with pytest.raises(ValueError, match="Failed to encode cursor"):
            encode_cursor(("high", 3), score_id_key)


class TestDecodeErrors:
    """Every malformed token is rejected with InvalidCursor."""

    def test_not_a_real_token(self, score_id_key):
        with pytest.raises(InvalidCursor):
            decode_cursor("not-a-real-token", score_id_key)

    def test_empty_token(self, score_id_key):
        with pytest.raises(InvalidCursor, match="Empty cursor"):
            decode_cursor("", score_id_key)

    def test_non_base64_characters(self, score_id_key):
        with pytest.raises(InvalidCursor):
            decode_cursor("abc$%^&*", score_id_key)

    def test_non_ascii_token(self, score_id_key):
        with pytest.raises(InvalidCursor):
            decode_cursor("écureuil", score_id_key)

    def test_valid_base64_but_not_json(self, score_id_key):
        token = base64.urlsafe_b64encode(b"hello world").decode("ascii")
        with pytest.raises(InvalidCursor, match="Invalid cursor format"):
            decode_cursor(token, score_id_key)

    def test_json_of_wrong_shape(self, score_id_key):
        with pytest.raises(InvalidCursor, match="unexpected payload"):
            decode_cursor(make_token([95, 7]), score_id_key)

    def test_cursor_from_other_sort_key(self, score_id_key, three_field_key):
        token = encode_cursor(("alpha", 95, 7), three_field_key)

        with pytest.raises(InvalidCursor, match="different sort order"):
            decode_cursor(token, score_id_key)

    def test_same_fields_different_order_is_rejected(self, score_id_key):
        ascending = SortKey([
            SortField(name="score", order=SortOrder.ASC, value_type=int),
            SortField(name="id", order=SortOrder.ASC, value_type=int, unique=True),
        ])
        token = encode_cursor((95, 7), ascending)

        with pytest.raises(InvalidCursor):
            decode_cursor(token, score_id_key)

    def test_arity_mismatch(self, score_id_key):
        token = make_token({"k": score_id_key.fingerprint, "v": [95]})

        with pytest.raises(InvalidCursor, match="holds 1 values"):
            decode_cursor(token, score_id_key)

    def test_value_fails_coercion(self, score_id_key):
        token = make_token({"k": score_id_key.fingerprint, "v": ["high", 7]})

        with pytest.raises(InvalidCursor, match="Invalid cursor value"):
            decode_cursor(token, score_id_key)

    def test_standard_base64_spelling_is_rejected(self, three_field_key):
        # Any aligned "~~~" encodes to "fn5-"
        token = encode_cursor(("~~~~~~", 95, 7), three_field_key)
        assert "-" in token
        assert decode_cursor(token, three_field_key) == ("~~~~~~", 95, 7)

        standard = token.replace("-", "+").replace("_", "/")

        with pytest.raises(InvalidCursor, match="unexpected characters"):
            decode_cursor(standard, three_field_key)

    @pytest.mark.parametrize("token", ["abc=", "abc.def", "abc def", "abc/def"])
    def test_characters_outside_url_safe_alphabet(self, score_id_key, token):
        with pytest.raises(InvalidCursor, match="unexpected characters"):
            decode_cursor(token, score_id_key)

    def test_rejected_cursor_is_logged_as_warning(self, score_id_key, three_field_key, caplog):
        token = encode_cursor(("alpha", 95, 7), three_field_key)

        with caplog.at_level("WARNING", logger="seekpage.pagination.cursor"):
            with pytest.raises(InvalidCursor):
                decode_cursor(token, score_id_key)

        assert [r.levelname for r in caplog.records] == ["WARNING"]

    def test_invalid_cursor_is_a_bad_request(self, score_id_key):
        with pytest.raises(BadRequestError) as exc_info:
            decode_cursor("not-a-real-token", score_id_key)

        assert exc_info.value.status == 400
        assert exc_info.value.title == "Invalid Cursor"
