from __future__ import annotations

from typing import Any, Protocol, TypedDict

JsonObj = dict[str, Any]


# --- Identifiants de connexion ------------------------------------------------


class PasswordCredentials(TypedDict):
    email: str
    password: str


class CookieCredentials(TypedDict):
    cookie: str  # cookie de session, sans retours à la ligne


Credentials = PasswordCredentials | CookieCredentials


# --- Payloads Netflix (subset utile) ------------------------------------------


class Profile(TypedDict, total=False):
    firstName: str
    guid: str


class Rating(TypedDict, total=False):
    ratingType: str  # "star" | "thumb"
    title: str
    movieID: int
    yourRating: int
    intRating: int | None
    date: str | None
    timestamp: int | None
    comparableDate: int | None


# Entrée d'historique de visionnage : transportée telle quelle, jamais rejouée
ViewingHistoryEntry = JsonObj


class MigrationBundle(TypedDict):
    version: str | None
    ratingHistory: list[Rating]
    viewingHistory: list[ViewingHistoryEntry] | None


# ---- Client distant : ce que le pipeline utilise vraiment --------------------
class RemoteHistoryService(Protocol):
    def login(self, credentials: Credentials) -> None: ...
    def list_profiles(self) -> list[Profile]: ...
    def switch_profile(self, guid: str) -> None: ...
    def get_rating_history(self) -> list[Rating]: ...
    def get_viewing_history(self) -> list[ViewingHistoryEntry]: ...
    def set_star_rating(self, movie_id: int, rating: int) -> None: ...
    def set_thumb_rating(self, movie_id: int, rating: int) -> None: ...
