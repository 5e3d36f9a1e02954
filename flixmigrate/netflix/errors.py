from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from flixmigrate.utils.logger import LoggerProtocol

SEE_LOGS = "Voir les logs précédents pour plus d'informations."


class MigrationError(Exception):
    """Base de toutes les erreurs typées du pipeline de migration."""


class ProfileNotFound(MigrationError):
    def __init__(self, profile_name: str) -> None:
        super().__init__(f'Aucun profil nommé "{profile_name}"')
        self.profile_name = profile_name


class ProfileLookupFailed(MigrationError):
    def __init__(self, profile_name: str) -> None:
        super().__init__(f'Impossible de déterminer le GUID du profil "{profile_name}". {SEE_LOGS}')
        self.profile_name = profile_name


class ProfileSwitchFailed(MigrationError):
    def __init__(self, guid: str) -> None:
        super().__init__(f"Impossible de basculer sur le profil {guid}. {SEE_LOGS}")
        self.guid = guid


class HistoryFetchFailed(MigrationError):
    def __init__(self, history: str) -> None:
        super().__init__(f"Impossible de récupérer l'historique {history}. {SEE_LOGS}")
        self.history = history


class RatingApplyFailed(MigrationError):
    def __init__(self, movie_id: object, title: str | None = None) -> None:
        label = f'"{title}" ({movie_id})' if title else str(movie_id)
        super().__init__(f"Impossible d'appliquer la note de {label}. {SEE_LOGS}")
        self.movie_id = movie_id
        self.title = title


class InvalidBundleSchema(MigrationError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Fichier d'import invalide, champ {field} : {reason}")
        self.field = field
        self.reason = reason


@contextmanager
def log_and_wrap(error: MigrationError, logger: LoggerProtocol) -> Iterator[None]:
    """
    Journalise la cause de tout échec du bloc puis lève ``error`` chaînée à cette cause.

    L'appelant ne voit jamais l'erreur de transport brute, mais elle est passée
    par les logs avant d'être remplacée.
    """
    try:
        yield
    except Exception as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        raise error from exc
