"""Logger du projet flixmigrate."""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, ParamSpec, Protocol, TypeVar, cast

from flixmigrate.utils.config import LOG_FILE_PATH, LOG_LEVEL, LOG_ROTATION_DAYS
from flixmigrate.utils.log_rotation import rotate_logs

GLOBAL_LOG_NAME = "flixmigrate"


# ---------- Protocole (contrat) ----------
class LoggerProtocol(Protocol):
    """
    Interface minimale attendue par les fonctions du projet.

    Tout objet exposant ``debug``/``info``/``warning``/``error``/``exception`` et
    ``get_child`` peut être passé via le paramètre ``logger``.
    """

    def debug(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def exception(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def get_child(self, suffix: str) -> LoggerProtocol:
        """
        Get child logger.
        """
        ...


# ---------- Classe concrète (instanciable) ----------


@dataclass(frozen=True)
class ProjectLogger:
    """
    Enveloppe immuable autour d'un ``logging.Logger``.

    Les handlers (console + fichiers journaliers) sont posés une seule fois par
    ``get_logger``; les loggers enfants héritent de ces handlers par propagation.

    Attributes:
        _base: The wrapped standard library logger.
    """

    _base: logging.Logger

    @property
    def name(self) -> str:
        return self._base.name

    # expose la même API que le Protocol
    def debug(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: Any) -> None:
        """
        Logs at ERROR level. Used for the cause of every wrapped migration error.
        """
        self._base.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.exception(msg, *args, **kwargs)

    def get_child(self, suffix: str) -> LoggerProtocol:
        """
        Creates a child logger named ``<parent>.<suffix>``.

        Args:
        - suffix (str): The suffix to append to the current logger name.

        Returns:
        A new ProjectLogger wrapping the child.
        """
        return ProjectLogger(self._base.getChild(suffix))


def _ensure_handlers(base: logging.Logger, global_log_file: str, script_log_file: str) -> None:
    if getattr(base, "_flixmigrate_configured", False):
        return

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - [%(name)s] %(message)s")

    # stderr: stdout peut porter l'export JSON
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    base.addHandler(stream)

    fh_global = logging.FileHandler(global_log_file, encoding="utf-8")
    fh_global.setFormatter(formatter)
    base.addHandler(fh_global)

    if script_log_file != global_log_file:
        fh_script = logging.FileHandler(script_log_file, encoding="utf-8")
        fh_script.setFormatter(formatter)
        base.addHandler(fh_script)

    setattr(base, "_flixmigrate_configured", True)


def get_logger(script_name: str) -> LoggerProtocol:
    """
    Constructeur de logger.

    Crée le dossier de logs si besoin, applique la rotation, puis attache un
    handler console et deux fichiers du jour (global + script).

    :param script_name: Nom du script.
    :return: Logger prêt à l'emploi.
    """
    os.makedirs(LOG_FILE_PATH, exist_ok=True)
    date_str = datetime.now().strftime("%Y-%m-%d")
    global_log_file = os.path.join(LOG_FILE_PATH, f"{date_str}_{GLOBAL_LOG_NAME}.log")
    script_log_file = os.path.join(LOG_FILE_PATH, f"{date_str}_{script_name}.log")

    base = logging.getLogger(script_name)
    base.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    _ensure_handlers(base, global_log_file, script_log_file)
    logger = ProjectLogger(base)

    try:
        rotate_logs(LOG_FILE_PATH, LOG_ROTATION_DAYS, logf=script_log_file)
    except OSError as exc:
        logger.warning("Rotation des logs échouée: %s", exc)

    return logger


# ---------- Utilities ----------
def ensure_logger(logger: LoggerProtocol | None, module: str) -> LoggerProtocol:
    """
    Return a logger usable by ``module``.

    With no logger, a fresh project logger is built; otherwise a child of the
    given logger named after the module is returned.
    """
    if logger is None:
        return get_logger(module)
    return logger.get_child(module)


# ---------- Décorateur type-safe ----------
P = ParamSpec("P")
R = TypeVar("R")


def with_child_logger(func: Callable[P, R]) -> Callable[P, R]:
    """
    Injecte dans ``kwargs["logger"]`` un logger enfant nommé d'après le module décoré.

    :param func: La fonction à décorer
    :return: La fonction décorée
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        current = cast(Optional[LoggerProtocol], kwargs.get("logger"))
        kwargs["logger"] = ensure_logger(current, func.__module__)
        return func(*args, **kwargs)

    return wrapper
