from __future__ import annotations

import sys
from pathlib import Path


def read_input(path: str | Path | None = None) -> str:
    """Lit le texte à importer depuis ``path``, ou depuis stdin si ``path`` est absent."""
    if path is None:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8-sig")


def write_output(text: str, path: str | Path | None = None) -> None:
    """Écrit ``text`` dans ``path``, ou sur stdout si ``path`` est absent."""
    if path is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    Path(path).write_text(text, encoding="utf-8")
