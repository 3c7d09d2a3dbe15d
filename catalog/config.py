# catalog/config.py
from __future__ import annotations
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# .env im Projekt-Root einlesen (bestehende Umgebungsvariablen haben Vorrang)
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_DB_PATH = BASE_DIR / "data" / "catalog.db"


def _env_bool(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    try:
        return int(raw) if raw is not None and raw.strip() else default
    except ValueError:
        return default


class Config:
    """Konfiguration aus Umgebung / .env"""

    DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DEFAULT_DB_PATH}")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    SQL_ECHO: bool = _env_bool("SQL_ECHO")

    # Anzahl paralleler Worker beim CSV-Import
    IMPORT_WORKERS: int = max(1, _env_int("IMPORT_WORKERS", 1))

    @classmethod
    def as_dict(cls) -> dict:
        return {
            "DATABASE_URL": cls.DATABASE_URL,
            "LOG_LEVEL": cls.LOG_LEVEL,
            "SQL_ECHO": cls.SQL_ECHO,
            "IMPORT_WORKERS": cls.IMPORT_WORKERS,
        }


def setup_logging(level: str | None = None) -> None:
    """Logging einmalig konfigurieren."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    logging.basicConfig(
        level=getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO),
        format=log_format,
        handlers=[logging.StreamHandler()],
    )
