from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from flixmigrate.netflix.codec import build_bundle, decode_bundle, encode_bundle
from flixmigrate.netflix.errors import HistoryFetchFailed, ProfileSwitchFailed, log_and_wrap
from flixmigrate.netflix.models import (
    CookieCredentials,
    Credentials,
    MigrationBundle,
    PasswordCredentials,
    RemoteHistoryService,
)
from flixmigrate.netflix.profiles import resolve_profile_guid
from flixmigrate.netflix.replay import apply_rating_history
from flixmigrate.utils.files import read_input, write_output
from flixmigrate.utils.logger import LoggerProtocol, ensure_logger
from flixmigrate.version import __version__

Reader = Callable[[Path | None], str]
Writer = Callable[[str, Path | None], None]


class Mode(str, Enum):
    EXPORT = "export"
    IMPORT = "import"


class MigrationState(str, Enum):
    START = "start"
    AUTHENTICATED = "authenticated"
    PROFILE_RESOLVED = "profile_resolved"
    PROFILE_ACTIVE = "profile_active"
    EXPORTING = "exporting"
    IMPORTING = "importing"
    DONE = "done"
    FAILED = "failed"


def make_credentials(email: str | None = None, password: str | None = None, cookie: str | None = None) -> Credentials:
    """Construit les identifiants ; un cookie, s'il est fourni, prime et perd ses retours à la ligne."""
    if cookie:
        return CookieCredentials(cookie=cookie.replace("\r", "").replace("\n", ""))
    return PasswordCredentials(email=email or "", password=password or "")


@dataclass(frozen=True)
class MigrationConfig:
    credentials: Credentials = field(repr=False)
    profile: str
    mode: Mode = Mode.EXPORT
    path: Path | None = None  # None → stdin / stdout
    indent: int | None = None


class MigrationOrchestrator:
    """
    Enchaîne login → résolution du profil → bascule → export ou import.

    Le pipeline est linéaire ; la première étape en échec fait passer l'état à
    ``FAILED`` et l'erreur remonte à l'appelant, qui la signale une seule fois.
    Les erreurs de login remontent brutes, sans être journalisées ici.
    """

    def __init__(
        self,
        service: RemoteHistoryService,
        config: MigrationConfig,
        reader: Reader = read_input,
        writer: Writer = write_output,
        version: str = __version__,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.service = service
        self.config = config
        self.reader = reader
        self.writer = writer
        self.version = version
        self.logger = ensure_logger(logger, __name__)
        self.state = MigrationState.START
        self.history: list[MigrationState] = [self.state]
        self.guid: str | None = None

    def _advance(self, state: MigrationState) -> None:
        self.state = state
        self.history.append(state)

    def run(self) -> MigrationBundle:
        """
        Exécute la migration complète.

        Retourne le bundle exporté ou importé.
        """
        if self.state is not MigrationState.START:
            raise RuntimeError(f"Migration déjà exécutée (état {self.state.value})")

        try:
            self.service.login(self.config.credentials)
            self._advance(MigrationState.AUTHENTICATED)

            self.guid = resolve_profile_guid(self.service, self.config.profile, logger=self.logger)
            self._advance(MigrationState.PROFILE_RESOLVED)

            with log_and_wrap(ProfileSwitchFailed(self.guid), self.logger):
                self.service.switch_profile(self.guid)
            self._advance(MigrationState.PROFILE_ACTIVE)

            if self.config.mode is Mode.EXPORT:
                self._advance(MigrationState.EXPORTING)
                bundle = self.export_history()
            else:
                self._advance(MigrationState.IMPORTING)
                bundle = self.import_history()
        except Exception:
            self._advance(MigrationState.FAILED)
            raise

        self._advance(MigrationState.DONE)
        return bundle

    def export_history(self) -> MigrationBundle:
        with log_and_wrap(HistoryFetchFailed("des notes"), self.logger):
            ratings = self.service.get_rating_history()
        with log_and_wrap(HistoryFetchFailed("de visionnage"), self.logger):
            viewing = self.service.get_viewing_history()

        bundle = build_bundle(self.version, ratings, viewing)
        self.writer(encode_bundle(bundle, self.config.indent), self.config.path)
        self.logger.info(
            "📤 Export terminé : %s notes, %s visionnages → %s",
            len(ratings),
            len(viewing),
            self.config.path or "stdout",
        )
        return bundle

    def import_history(self) -> MigrationBundle:
        bundle = decode_bundle(self.reader(self.config.path))
        if bundle["version"] is None:
            self.logger.info("Ancien format d'export détecté (liste de notes seule)")
        # l'historique de visionnage n'est jamais rejoué
        apply_rating_history(self.service, bundle["ratingHistory"], logger=self.logger)
        return bundle
