"""Lecture / écriture du fichier d'export (bundle de migration)."""

from __future__ import annotations

import json
import re
from typing import Any, cast

from flixmigrate.netflix.errors import InvalidBundleSchema
from flixmigrate.netflix.models import MigrationBundle, Rating, ViewingHistoryEntry

VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+(-(alpha|beta)\.\d+)?")


def build_bundle(
    version: str,
    ratings: list[Rating],
    viewing: list[ViewingHistoryEntry],
) -> MigrationBundle:
    return MigrationBundle(version=version, ratingHistory=ratings, viewingHistory=viewing)


def _validate_object(data: dict[str, Any]) -> MigrationBundle:
    for field in ("ratingHistory", "viewingHistory"):
        if field not in data:
            raise InvalidBundleSchema(field, "champ manquant")
        if not isinstance(data[field], list):
            raise InvalidBundleSchema(field, "doit être une liste")

    version = data.get("version")
    if version is None:
        raise InvalidBundleSchema("version", "champ manquant")
    if not isinstance(version, str) or not VERSION_PATTERN.fullmatch(version):
        raise InvalidBundleSchema("version", f"version invalide {version!r}")

    return cast(MigrationBundle, data)


def decode_bundle(raw: str | bytes) -> MigrationBundle:
    """
    Parse un export JSON.

    Deux formes sont acceptées :
      - l'ancien format, une simple liste de notes (``version`` et
        ``viewingHistory`` valent alors ``None``) ;
      - le format versionné ``{"version", "ratingHistory", "viewingHistory"}``.

    Toute autre forme lève ``InvalidBundleSchema``.
    """
    if isinstance(raw, str) and raw.startswith("\ufeff"):
        raw = raw[1:]
    try:
        data: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidBundleSchema("<root>", f"JSON illisible ({exc})") from exc

    if isinstance(data, list):
        return MigrationBundle(version=None, ratingHistory=cast(list[Rating], data), viewingHistory=None)
    if isinstance(data, dict):
        return _validate_object(data)
    raise InvalidBundleSchema("<root>", f"liste ou objet attendu, reçu {type(data).__name__}")


def encode_bundle(bundle: MigrationBundle, indent: int | None = None) -> str:
    """
    Sérialise le bundle. ``indent`` absent, nul ou négatif → JSON compact, sinon ``indent``
    espaces par niveau. Les champs inconnus des notes sont conservés tels quels.
    """
    if not indent or indent < 0:
        return json.dumps(bundle, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(bundle, ensure_ascii=False, indent=indent)
