from __future__ import annotations

from typing import cast

from flixmigrate.netflix.errors import ProfileLookupFailed, ProfileNotFound, log_and_wrap
from flixmigrate.netflix.models import Profile, RemoteHistoryService
from flixmigrate.utils.logger import LoggerProtocol, with_child_logger


def find_profile(profiles: list[Profile], profile_name: str) -> Profile | None:
    """Premier profil dont ``firstName`` est exactement ``profile_name`` (sensible à la casse)."""
    return next((p for p in profiles if p.get("firstName") == profile_name), None)


@with_child_logger
def resolve_profile_guid(
    service: RemoteHistoryService,
    profile_name: str,
    logger: LoggerProtocol | None = None,
) -> str:
    """
    Traduit un nom de profil en GUID.

    Lève ``ProfileLookupFailed`` si la liste des profils ne peut pas être lue
    (la cause est journalisée), ``ProfileNotFound`` si aucun profil ne porte ce nom.
    """
    logger = cast(LoggerProtocol, logger)
    with log_and_wrap(ProfileLookupFailed(profile_name), logger):
        profiles = service.list_profiles()

    profile = find_profile(profiles, profile_name)
    if profile is None:
        raise ProfileNotFound(profile_name)

    logger.debug("Profil %s → %s", profile_name, profile.get("guid"))
    return cast(str, profile.get("guid"))
