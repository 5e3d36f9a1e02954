from __future__ import annotations

import json
import re
from typing import Any, cast

import requests

from flixmigrate.netflix.models import (
    CookieCredentials,
    Credentials,
    JsonObj,
    Profile,
    Rating,
    ViewingHistoryEntry,
)
from flixmigrate.utils.config import HTTP_TIMEOUT, NETFLIX_BASE_URL
from flixmigrate.utils.logger import LoggerProtocol, ensure_logger

REACT_CONTEXT = re.compile(r"netflix\.reactContext\s*=\s*(\{.*?\});\s*</script>", re.DOTALL)


class NetflixClientError(Exception):
    """Réponse Netflix inattendue."""


class NetflixAuthError(NetflixClientError):
    """Session absente ou refusée."""


def parse_cookie_header(cookie: str) -> dict[str, str]:
    """``"a=1; b=2"`` → ``{"a": "1", "b": "2"}`` (les morceaux sans ``=`` sont ignorés)."""
    jar: dict[str, str] = {}
    for part in cookie.split(";"):
        name, sep, value = part.strip().partition("=")
        if sep and name:
            jar[name] = value
    return jar


def parse_react_context(html: str) -> JsonObj:
    """Extrait l'objet ``netflix.reactContext`` embarqué dans la page ``/browse``."""
    match = REACT_CONTEXT.search(html)
    if match is None:
        raise NetflixAuthError("reactContext introuvable : la session n'est pas connectée")
    # la page échappe les caractères non ASCII en \xNN, invalide en JSON
    raw = re.sub(r"\\x([0-9a-fA-F]{2})", lambda m: chr(int(m.group(1), 16)), match.group(1))
    try:
        return cast(JsonObj, json.loads(raw))
    except json.JSONDecodeError as exc:
        raise NetflixClientError(f"reactContext illisible : {exc}") from exc


class NetflixClient:
    """
    Client HTTP minimal pour l'API « shakti » du site Netflix.

    Seule l'authentification par cookie de session est prise en charge : le
    protocole de connexion par mot de passe n'est pas réimplémenté.
    """

    def __init__(
        self,
        base_url: str = NETFLIX_BASE_URL,
        timeout: int = HTTP_TIMEOUT,
        session: requests.Session | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) flixmigrate",
                "Accept": "application/json, text/html;q=0.9",
            }
        )
        self.logger = ensure_logger(logger, __name__)
        self._build_identifier: str | None = None
        self._auth_url: str | None = None

    # --- HTTP ----------------------------------------------------------------

    @property
    def api_url(self) -> str:
        if self._build_identifier is None:
            raise NetflixAuthError("Client non connecté")
        return f"{self.base_url}/api/shakti/{self._build_identifier}"

    def _get(self, url: str, params: dict[str, Any] | None = None) -> JsonObj:
        r = self.session.get(url, params=params, timeout=self.timeout)
        if r.status_code in (401, 403):
            raise NetflixAuthError(f"Accès refusé ({r.status_code}) : {url}")
        r.raise_for_status()
        return cast(JsonObj, r.json())

    def _post(self, url: str, payload: JsonObj) -> JsonObj:
        r = self.session.post(url, json={**payload, "authURL": self._auth_url}, timeout=self.timeout)
        if r.status_code in (401, 403):
            raise NetflixAuthError(f"Accès refusé ({r.status_code}) : {url}")
        r.raise_for_status()
        return cast(JsonObj, r.json()) if r.content else {}

    def _paged(self, endpoint: str, items_key: str, total_key: str) -> list[JsonObj]:
        items: list[JsonObj] = []
        page = 0
        while True:
            data = self._get(f"{self.api_url}/{endpoint}", params={"pg": page})
            batch = cast(list[JsonObj], data.get(items_key) or [])
            items.extend(batch)
            total = int(data.get(total_key) or 0)
            if not batch or len(items) >= total:
                return items
            page += 1

    # --- RemoteHistoryService ------------------------------------------------

    def login(self, credentials: Credentials) -> None:
        if "cookie" not in credentials:
            raise NetflixAuthError("Connexion par mot de passe non prise en charge, utilisez --cookie")

        cookie = cast(CookieCredentials, credentials)["cookie"]
        self.session.cookies.update(parse_cookie_header(cookie))
        r = self.session.get(f"{self.base_url}/browse", timeout=self.timeout)
        r.raise_for_status()

        models = parse_react_context(r.text).get("models", {})
        self._build_identifier = models.get("serverDefs", {}).get("data", {}).get("BUILD_IDENTIFIER")
        self._auth_url = models.get("userInfo", {}).get("data", {}).get("authURL")
        if not self._build_identifier or not self._auth_url:
            raise NetflixAuthError("Cookie refusé par Netflix (session non authentifiée)")
        self.logger.info("✅ Connexion Netflix réussie")

    def list_profiles(self) -> list[Profile]:
        data = self._get(f"{self.api_url}/profiles")
        return cast(list[Profile], data.get("profiles") or [])

    def switch_profile(self, guid: str) -> None:
        self._get(
            f"{self.api_url}/profiles/switch",
            params={"switchProfileGuid": guid, "authURL": self._auth_url},
        )
        self.logger.info("🔀 Profil actif : %s", guid)

    def get_rating_history(self) -> list[Rating]:
        return cast(list[Rating], self._paged("ratinghistory", "ratingItems", "totalRatings"))

    def get_viewing_history(self) -> list[ViewingHistoryEntry]:
        return self._paged("viewingactivity", "viewedItems", "vhSize")

    def set_star_rating(self, movie_id: int, rating: int) -> None:
        self._post(f"{self.api_url}/setVideoRating", {"titleid": movie_id, "rating": rating})

    def set_thumb_rating(self, movie_id: int, rating: int) -> None:
        self._post(f"{self.api_url}/setThumbRating", {"titleid": movie_id, "rating": rating})
