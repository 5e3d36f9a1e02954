from __future__ import annotations

import argparse
import getpass
import sys
from collections.abc import Sequence
from pathlib import Path

from flixmigrate.netflix.netflix_client import NetflixClient
from flixmigrate.netflix.orchestrator import MigrationConfig, MigrationOrchestrator, Mode, make_credentials
from flixmigrate.utils.config import NETFLIX_COOKIE, NETFLIX_EMAIL, NETFLIX_PASSWORD, NETFLIX_PROFILE
from flixmigrate.utils.logger import get_logger
from flixmigrate.utils.safe_runner import safe_main
from flixmigrate.version import __version__

DEFAULT_SPACES = 4
STD_STREAM = "-"  # --import / --export sans fichier

logger = get_logger("netflix_migrate")


class ConfigError(Exception):
    """Combinaison d'options invalide."""


def parse_spaces(value: str | None) -> int | None:
    """``--spaces`` sans valeur → 4 ; valeur non entière, nulle ou négative → JSON compact."""
    if value is None:
        return None
    try:
        return max(int(value), 0) or None
    except ValueError:
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flixmigrate",
        description="Exporter / importer l'historique de notes d'un profil Netflix",
    )
    parser.add_argument("-e", "--email")
    parser.add_argument("-p", "--password")
    parser.add_argument("-c", "--cookie", help="Cookie de session Netflix (en-tête Cookie complet)")
    parser.add_argument("-r", "--profile")
    parser.add_argument("-i", "--import", dest="import_file", nargs="?", const=STD_STREAM, metavar="FILE")
    parser.add_argument("-x", "--export", dest="export_file", nargs="?", const=STD_STREAM, metavar="FILE")
    parser.add_argument("-s", "--spaces", nargs="?", const=str(DEFAULT_SPACES), metavar="N")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _ask(value: str | None, label: str, option: str, hidden: bool = False, interactive: bool = True) -> str:
    if value:
        return value
    if not interactive:
        raise ConfigError(f"Option {option} manquante : stdin est réservé au fichier importé.")
    return getpass.getpass(f"{label}: ") if hidden else input(f"{label}: ")


def build_config(args: argparse.Namespace) -> MigrationConfig:
    """Options de ligne de commande > variables d'environnement > saisie interactive."""
    if args.import_file and args.export_file:
        raise ConfigError("Les options --import et --export ne peuvent pas être utilisées ensemble.")

    mode = Mode.IMPORT if args.import_file else Mode.EXPORT
    target = args.import_file if mode is Mode.IMPORT else args.export_file
    path = Path(target) if target and target != STD_STREAM else None

    # un import lu sur stdin ne doit pas être consommé par les invites
    interactive = not (mode is Mode.IMPORT and path is None and not sys.stdin.isatty())

    cookie = args.cookie or NETFLIX_COOKIE
    if cookie:
        credentials = make_credentials(cookie=cookie)
    else:
        credentials = make_credentials(
            email=_ask(args.email or NETFLIX_EMAIL, "Email", "--email", interactive=interactive),
            password=_ask(args.password or NETFLIX_PASSWORD, "Password", "--password", hidden=True, interactive=interactive),
        )
    profile = _ask(args.profile or NETFLIX_PROFILE, "Profile", "--profile", interactive=interactive)

    return MigrationConfig(
        credentials=credentials,
        profile=profile,
        mode=mode,
        path=path,
        indent=parse_spaces(args.spaces),
    )


@safe_main
def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    config = build_config(args)
    logger.info("▶️ flixmigrate %s : %s du profil %s", __version__, config.mode.value, config.profile)

    client = NetflixClient(logger=logger)
    MigrationOrchestrator(client, config, logger=logger).run()


if __name__ == "__main__":
    main()
