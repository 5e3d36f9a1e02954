from __future__ import annotations

import logging
import os
import tempfile
from typing import Any

import pytest

# avant tout import de flixmigrate : les logs du module main partent dans un dossier jetable
os.environ["LOG_FILE_PATH"] = tempfile.mkdtemp(prefix="flixmigrate-logs-")

from flixmigrate.utils.logger import LoggerProtocol, ProjectLogger  # noqa: E402

RATINGS: list[dict[str, Any]] = [
    {
        "ratingType": "star",
        "title": "Some movie",
        "movieID": 12345678,
        "yourRating": 5,
        "intRating": 50,
        "date": "01/02/2016",
        "timestamp": 1234567890123,
        "comparableDate": 1234567890,
    },
    {
        "ratingType": "thumb",
        "title": "Amazing Show",
        "movieID": 87654321,
        "yourRating": 2,
        "date": "02/02/2018",
        "timestamp": 2234567890123,
        "comparableDate": 2234567890,
    },
]

VIEWING: list[dict[str, Any]] = [
    {"title": "Amazing Show: Episode 1", "movieID": 1, "date": 1600000000000, "duration": 2600},
    {"title": "Some movie", "movieID": 2, "date": 1600000500000, "bookmark": 120},
]

PROFILES = [
    {"firstName": "Michael", "guid": "guid-michael"},
    {"firstName": "Klaus", "guid": "guid-klaus"},
    {"firstName": "Carsten", "guid": "guid-carsten"},
    {"firstName": "1234567890", "guid": "guid-digits"},
    {"firstName": "What's wrong with you?", "guid": "guid-question"},
]


class FakeService:
    """Service Netflix en mémoire : enregistre chaque appel dans ``calls``."""

    def __init__(
        self,
        profiles: list[dict[str, Any]] | None = None,
        ratings: list[dict[str, Any]] | None = None,
        viewing: list[dict[str, Any]] | None = None,
        fail_on: dict[str, Exception] | None = None,
        fail_movie: int | None = None,
    ) -> None:
        self.profiles = PROFILES if profiles is None else profiles
        self.ratings = RATINGS if ratings is None else ratings
        self.viewing = VIEWING if viewing is None else viewing
        self.fail_on = fail_on or {}
        self.fail_movie = fail_movie
        self.calls: list[tuple[Any, ...]] = []

    def _call(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise self.fail_on[name]

    def login(self, credentials: Any) -> None:
        self._call("login", credentials)

    def list_profiles(self) -> list[Any]:
        self._call("list_profiles")
        return self.profiles

    def switch_profile(self, guid: str) -> None:
        self._call("switch_profile", guid)

    def get_rating_history(self) -> list[Any]:
        self._call("get_rating_history")
        return self.ratings

    def get_viewing_history(self) -> list[Any]:
        self._call("get_viewing_history")
        return self.viewing

    def set_star_rating(self, movie_id: int, rating: int) -> None:
        self._call("set_star_rating", movie_id, rating)
        if movie_id == self.fail_movie:
            raise ConnectionError("HTTP 429")

    def set_thumb_rating(self, movie_id: int, rating: int) -> None:
        self._call("set_thumb_rating", movie_id, rating)
        if movie_id == self.fail_movie:
            raise ConnectionError("HTTP 429")

    @property
    def writes(self) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] in ("set_star_rating", "set_thumb_rating")]


@pytest.fixture
def logger() -> LoggerProtocol:
    return ProjectLogger(logging.getLogger("tests"))


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Remplace la pause entre deux notes ; retourne la liste des pauses demandées."""
    sleeps: list[float] = []
    monkeypatch.setattr("flixmigrate.netflix.replay.time.sleep", sleeps.append)
    return sleeps
