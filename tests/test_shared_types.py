"""Unit tests for domain/shared: Annotated type constraints, UTC helpers and the error hierarchy."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import BaseModel, ValidationError

from discord_jukebox.domain.shared.datetime_utils import UtcDateTime, utcnow
from discord_jukebox.domain.shared.exceptions import (
    DomainError,
    EmptyQueryError,
    PlaylistNotFoundError,
    QueueFullError,
    ResolutionError,
    TransportError,
    UserInputError,
)
from discord_jukebox.domain.shared.types import (
    DiscordSnowflake,
    HttpUrlStr,
    PlaylistNameStr,
    UtcDatetimeField,
)


def _model_for(annotation, field_name: str = "v"):
    """Dynamically create a Pydantic model with a single field of the given type."""
    return type("M", (BaseModel,), {"__annotations__": {field_name: annotation}})


# ── Annotated types ─────────────────────────────────────────────────


class TestDiscordSnowflake:
    M = _model_for(DiscordSnowflake)

    def test_bounds(self):
        assert self.M(v=1).v == 1
        assert self.M(v=2**64 - 1).v == 2**64 - 1

    @pytest.mark.parametrize("value", [0, -1, 2**64])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValidationError):
            self.M(v=value)


class TestStringTypes:
    def test_http_url(self):
        M = _model_for(HttpUrlStr)

        assert M(v="https://x").v == "https://x"
        with pytest.raises(ValidationError):
            M(v="www.example.com")

    def test_playlist_name_length(self):
        M = _model_for(PlaylistNameStr)

        with pytest.raises(ValidationError):
            M(v="")
        with pytest.raises(ValidationError):
            M(v="x" * 101)


class TestUtcDatetimeField:
    M = _model_for(UtcDatetimeField)

    def test_normalised_to_utc(self):
        plus_two = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

        value = self.M(v=plus_two).v

        assert value.tzinfo == UTC
        assert value.hour == 10

    def test_naive_rejected(self):
        with pytest.raises(ValidationError, match="timezone-aware"):
            self.M(v=datetime(2024, 1, 1))


# ── datetime_utils ──────────────────────────────────────────────────


class TestUtcDateTime:
    def test_iso_round_trip_with_z_suffix(self):
        parsed = UtcDateTime.from_iso("2024-05-01T08:30:00Z")

        assert parsed.dt == datetime(2024, 5, 1, 8, 30, tzinfo=UTC)
        assert parsed.iso == "2024-05-01T08:30:00+00:00"

    def test_naive_rejected(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            UtcDateTime(datetime(2024, 1, 1))

    def test_utcnow_is_aware(self):
        assert utcnow().tzinfo is UTC


# ── exceptions ──────────────────────────────────────────────────────


class TestExceptions:
    def test_user_input_errors_share_a_base(self):
        for error in (EmptyQueryError(), PlaylistNotFoundError("x", 1), QueueFullError(3)):
            assert isinstance(error, UserInputError)
            assert isinstance(error, DomainError)

    def test_codes(self):
        assert EmptyQueryError().code == "EMPTY_QUERY"
        assert QueueFullError(3).code == "QUEUE_FULL"
        assert TransportError("leave", 1).code == "TRANSPORT_ERROR"

    def test_resolution_error_message(self):
        assert ResolutionError("abc", "timed out").message == "Could not resolve 'abc': timed out"
        assert ResolutionError("abc").message == "Could not resolve 'abc'"

    def test_resolution_and_transport_are_not_user_errors(self):
        assert not isinstance(ResolutionError("x"), UserInputError)
        assert not isinstance(TransportError("join", 1), UserInputError)
