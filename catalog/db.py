# catalog/db.py
from __future__ import annotations
import logging
from pathlib import Path
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

# WICHTIG: die gemeinsame Base der Modelle verwenden, nicht neu definieren!
from catalog.models import Base

logger = logging.getLogger(__name__)


def _make_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite:") else {}
    engine = create_engine(url, echo=echo, future=True, connect_args=connect_args)

    if engine.dialect.name == "sqlite":
        # Fremdschlüssel sind in SQLite pro Verbindung aus -> immer einschalten
        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    return engine


def _ensure_sqlite_dir(url: str) -> None:
    # sqlite:///relativ/oder/absolut.db -> Ordner anlegen
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)


class Database:
    """
    Kapselt Engine + Session-Factory.
    Wird einmal beim Start erzeugt (create_app / CLI) und explizit per close() freigegeben.
    """

    def __init__(self, url: str, echo: bool = False):
        _ensure_sqlite_dir(url)
        self.url = url
        self.engine = _make_engine(url, echo=echo)
        # expire_on_commit=False: Objekte bleiben nach commit()/close() lesbar
        self._sessions = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False,
            expire_on_commit=False, future=True,
        )

    # --------------------------------------------------------------------
    # Sessions
    # --------------------------------------------------------------------
    def get_session(self) -> Session:
        """
        Liefert eine *neue* Session-Instanz zurück.
        Aufrufer ist für commit()/rollback()/close() verantwortlich.
        """
        return self._sessions()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        with database.session_scope() as db:
            ...
        """
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # --------------------------------------------------------------------
    # Schema / Lebenszyklus
    # --------------------------------------------------------------------
    def init_schema(self) -> None:
        """Legt fehlende Tabellen an (idempotent)."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Schema bereit (%s)", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Datenbankverbindungen geschlossen")
