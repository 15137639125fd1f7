"""Unit tests for the JSON codec.

Tests cover:
- Encoding of flat and nested models, enums and omitted fields
- Best-effort decoding of partial, mismatched and malformed bodies
- Strict decoding raising DecodeError
"""

import json
from enum import Enum

import pytest
from pydantic import BaseModel

from gameapi.client import DecodeError, decode, encode
from gameapi.models import ApiModel, LoginRequest, LoginResponse


class Team(str, Enum):
    RED = "red"
    BLUE = "blue"


class Difficulty(int, Enum):
    EASY = 1
    HARD = 2


class ScoreEntry(ApiModel):
    level: int = 0
    points: list[int] = []


class ScoreSubmission(ApiModel):
    team: Team = Team.RED
    difficulty: Difficulty = Difficulty.EASY
    entries: list[ScoreEntry] = []
    comment: str | None = None


class TestEncode:
    """Tests for encode()."""

    def test_login_request_wire_format(self) -> None:
        """Test login request encodes to the documented body."""
        body = encode(LoginRequest(email="a@b.com", password="pw"))
        assert json.loads(body) == {"email": "a@b.com", "password": "pw"}

    def test_nested_arrays_and_enums(self) -> None:
        """Test enums use their values and nested lists are preserved."""
        submission = ScoreSubmission(
            team=Team.BLUE,
            difficulty=Difficulty.HARD,
            entries=[ScoreEntry(level=1, points=[10, 20]), ScoreEntry(level=2)],
        )
        data = json.loads(encode(submission))
        assert data == {
            "team": "blue",
            "difficulty": 2,
            "entries": [
                {"level": 1, "points": [10, 20]},
                {"level": 2, "points": []},
            ],
        }

    def test_none_fields_are_omitted(self) -> None:
        """Test unset optional fields do not appear in the body."""
        data = json.loads(encode(ScoreSubmission()))
        assert "comment" not in data

    def test_encoding_is_stable(self) -> None:
        """Test re-encoding the same record produces identical text."""
        request = LoginRequest(email="a@b.com", password="pw")
        assert encode(request) == encode(request)

    @pytest.mark.parametrize(
        "submission",
        [
            ScoreSubmission(),
            ScoreSubmission(comment="gut gespielt, ünïcødé ✓ 勝利"),
            ScoreSubmission(
                team=Team.BLUE,
                difficulty=Difficulty.HARD,
                entries=[
                    ScoreEntry(level=1, points=[1, 2, 3]),
                    ScoreEntry(level=2),
                    ScoreEntry(level=3, points=[-5, 0, 2**40]),
                ],
                comment="gg",
            ),
            *[
                ScoreSubmission(team=team, difficulty=difficulty)
                for team in Team
                for difficulty in Difficulty
            ],
        ],
    )
    def test_round_trip(self, submission: ScoreSubmission) -> None:
        """Test fully typed records survive encode then decode unchanged."""
        assert decode(encode(submission), ScoreSubmission) == submission

    def test_login_round_trip(self) -> None:
        request = LoginRequest(email="ü@b.com", password="pässwörd")
        assert decode(encode(request), LoginRequest) == request


class TestDecode:
    """Tests for best-effort decode()."""

    def test_full_login_response(self) -> None:
        """Test all fields decode when present."""
        result = decode('{"id": 1, "name": "Batman", "hash": "abcd-1234"}', LoginResponse)
        assert result == LoginResponse(id=1, name="Batman", hash="abcd-1234")

    def test_missing_field_defaults(self) -> None:
        """Test a missing hash decodes to an empty string without error."""
        result = decode('{"id":1,"name":"Batman"}', LoginResponse)
        assert result.id == 1
        assert result.name == "Batman"
        assert result.hash == ""

    def test_extra_fields_ignored(self) -> None:
        """Test unknown keys are dropped."""
        result = decode('{"id": 7, "level": 99}', LoginResponse)
        assert result == LoginResponse(id=7)
        assert not hasattr(result, "level")

    def test_mismatched_field_left_at_default(self) -> None:
        """Test a wrongly typed field is defaulted and the rest kept."""
        result = decode('{"id": "not-a-number", "name": "Robin", "hash": "h"}', LoginResponse)
        assert result.id == 0
        assert result.name == "Robin"
        assert result.hash == "h"

    def test_several_mismatched_fields(self) -> None:
        """Test every mismatched field is defaulted."""
        result = decode('{"id": [], "name": {}, "hash": "h"}', LoginResponse)
        assert result == LoginResponse(hash="h")

    def test_nested_mismatch_defaults_top_level_field(self) -> None:
        """Test a bad nested element resets the enclosing field."""
        body = '{"team": "blue", "entries": [{"level": "x"}]}'
        result = decode(body, ScoreSubmission)
        assert result.team is Team.BLUE
        assert result.entries == []

    @pytest.mark.parametrize("body", ["", "not json", "{\"id\": 1", "[1, 2]", "42", "null"])
    def test_malformed_or_non_object_returns_defaults(self, body: str) -> None:
        """Test unusable bodies produce a default record."""
        assert decode(body, LoginResponse) == LoginResponse()

    def test_nesting_beyond_parser_limit_returns_defaults(self) -> None:
        """Test bodies too deeply nested to parse produce a default record."""
        body = "[" * 100_000 + "]" * 100_000
        assert decode(body, LoginResponse) == LoginResponse()

    def test_deep_nesting_inside_object_returns_defaults(self) -> None:
        body = '{"id": 1, "name": ' + "[" * 100_000 + "]" * 100_000 + "}"
        assert decode(body, LoginResponse) == LoginResponse()

    def test_accepts_bytes(self) -> None:
        """Test raw bytes bodies decode like text."""
        assert decode(b'{"name": "Batman"}', LoginResponse).name == "Batman"


class TestStrictDecode:
    """Tests for decode(strict=True)."""

    def test_missing_fields_still_default(self) -> None:
        """Test strict mode does not treat absent fields as errors."""
        result = decode('{"id": 1}', LoginResponse, strict=True)
        assert result == LoginResponse(id=1)

    def test_mismatch_raises_with_field_names(self) -> None:
        """Test strict mode reports the mismatched fields."""
        with pytest.raises(DecodeError) as exc_info:
            decode('{"id": "x", "name": "Robin"}', LoginResponse, strict=True)
        assert exc_info.value.fields == ["id"]

    def test_malformed_raises(self) -> None:
        """Test strict mode rejects malformed JSON."""
        with pytest.raises(DecodeError):
            decode("not json", LoginResponse, strict=True)

    def test_nesting_beyond_parser_limit_raises(self) -> None:
        """Test strict mode reports unparseable nesting as a DecodeError."""
        with pytest.raises(DecodeError, match="Malformed JSON"):
            decode("[" * 100_000 + "]" * 100_000, LoginResponse, strict=True)

    def test_non_object_raises(self) -> None:
        """Test strict mode rejects a top-level array."""
        with pytest.raises(DecodeError, match="Expected a JSON object"):
            decode("[]", LoginResponse, strict=True)

    def test_works_with_plain_base_model(self) -> None:
        """Test any pydantic model with defaults can be decoded."""

        class Profile(BaseModel):
            level: int = 0

        assert decode('{"level": 4}', Profile, strict=True).level == 4
