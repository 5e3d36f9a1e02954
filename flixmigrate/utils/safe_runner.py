from __future__ import annotations

import functools
import sys
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from flixmigrate.utils.logger import GLOBAL_LOG_NAME, LoggerProtocol, get_logger

P = ParamSpec("P")
R = TypeVar("R")

EXIT_FAILURE = 1
EXIT_CANCELLED = 130


def safe_main(func: Callable[P, R]) -> Callable[P, R]:
    """
    Point d'arrêt unique d'un script.

    Toute exception non gérée est journalisée une seule fois puis le processus
    s'arrête avec un code non nul. Une saisie interactive annulée (Ctrl-C, EOF)
    sort proprement avec le code 130.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except (KeyboardInterrupt, EOFError):
            print(file=sys.stderr)
            sys.exit(EXIT_CANCELLED)
        except Exception as exc:  # pylint: disable=broad-except
            logger: LoggerProtocol = get_logger(GLOBAL_LOG_NAME)
            logger.error("❌ %s", exc)
            sys.exit(EXIT_FAILURE)

    return wrapper
