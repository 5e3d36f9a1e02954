from __future__ import annotations

import time
from pathlib import Path


def rotate_logs(log_dir: str | Path, keep_days: int, logf: str | None = None) -> list[Path]:
    """
    Supprime les fichiers ``*.log`` de ``log_dir`` plus vieux que ``keep_days`` jours.

    Le fichier ``logf`` (log du script en cours) n'est jamais supprimé.
    Retourne la liste des fichiers supprimés.
    """
    directory = Path(log_dir)
    if keep_days <= 0 or not directory.is_dir():
        return []

    limit = time.time() - keep_days * 86400
    current = Path(logf).resolve() if logf else None
    removed: list[Path] = []
    for log_file in directory.glob("*.log"):
        if current is not None and log_file.resolve() == current:
            continue
        if log_file.stat().st_mtime < limit:
            log_file.unlink()
            removed.append(log_file)
    return removed
