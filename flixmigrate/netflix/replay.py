from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from typing import cast

from flixmigrate.netflix.errors import RatingApplyFailed, log_and_wrap
from flixmigrate.netflix.models import Rating, RemoteHistoryService
from flixmigrate.utils.logger import LoggerProtocol, with_child_logger

# pause après chaque note écrite, pour ne pas se faire limiter par Netflix
RATING_DELAY_SECONDS = 0.1

Operation = Callable[[], object]


def replay(operations: Iterable[Operation]) -> None:
    """
    Exécute les opérations une par une, dans l'ordre.

    L'opération suivante ne démarre qu'une fois la précédente terminée. La
    première exception interrompt la chaîne et remonte telle quelle.
    """
    for operation in operations:
        operation()


def _rating_operation(service: RemoteHistoryService, rating: Rating, logger: LoggerProtocol) -> Operation:
    def apply() -> None:
        entry = rating if isinstance(rating, dict) else {}
        title = entry.get("title")
        movie_id = entry.get("movieID")
        logger.info("Importing %s", title if title is not None else movie_id)
        with log_and_wrap(RatingApplyFailed(movie_id, title), logger):
            if not isinstance(rating, dict):
                raise TypeError(f"note invalide : {rating!r}")
            if rating.get("ratingType") == "thumb":
                service.set_thumb_rating(rating["movieID"], rating["yourRating"])
            else:
                service.set_star_rating(rating["movieID"], rating["yourRating"])
        time.sleep(RATING_DELAY_SECONDS)

    return apply


@with_child_logger
def apply_rating_history(
    service: RemoteHistoryService,
    ratings: Sequence[Rating],
    logger: LoggerProtocol | None = None,
) -> None:
    """
    Réécrit chaque note sur le profil actif, dans l'ordre du fichier.

    Chaque écriture est suivie d'une pause de ``RATING_DELAY_SECONDS`` : N notes
    prennent donc au moins N × 100 ms. La première écriture en échec arrête
    l'import avec ``RatingApplyFailed``.
    """
    logger = cast(LoggerProtocol, logger)
    replay([_rating_operation(service, rating, logger) for rating in ratings])
    logger.info("Import complete (%s notes)", len(ratings))
