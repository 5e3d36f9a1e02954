# config.py
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Chargement du .env à la racine du projet
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path, override=True)

# --- Fonctions utilitaires ---


def get_str(key: str, default: str = "") -> str:
    return os.getenv(key, default)


def get_int(key: str, default: int = 0) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        print(f"[CONFIG ERROR] La variable {key} doit être un entier.", file=sys.stderr)
        sys.exit(1)


# --- Variables d'environnement accessibles globalement ---

LOG_FILE_PATH = get_str("LOG_FILE_PATH", "logs")
LOG_ROTATION_DAYS = get_int("LOG_ROTATION_DAYS", 30)
LOG_LEVEL = get_str("LOG_LEVEL", "INFO").upper()

# Netflix (valeurs par défaut de la ligne de commande)
NETFLIX_EMAIL = get_str("NETFLIX_EMAIL")
NETFLIX_PASSWORD = get_str("NETFLIX_PASSWORD")
NETFLIX_PROFILE = get_str("NETFLIX_PROFILE")
NETFLIX_COOKIE = get_str("NETFLIX_COOKIE")

NETFLIX_BASE_URL = get_str("NETFLIX_BASE_URL", "https://www.netflix.com")
HTTP_TIMEOUT = get_int("HTTP_TIMEOUT", 20)
