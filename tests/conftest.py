from pathlib import Path

import pytest

from catalog import create_app
from catalog.db import Database
from catalog.services.category_store import CategoryStore


@pytest.fixture
def database(tmp_path: Path):
    db = Database(f"sqlite:///{tmp_path / 'catalog.db'}")
    db.init_schema()
    yield db
    db.close()


@pytest.fixture
def store(database):
    return CategoryStore(database)


@pytest.fixture
def app(tmp_path: Path):
    app = create_app({
        "TESTING": True,
        "DATABASE_URL": f"sqlite:///{tmp_path / 'app.db'}",
        "LOG_LEVEL": "WARNING",
    })
    yield app
    app.extensions["catalog_db"].close()


@pytest.fixture
def client(app):
    return app.test_client()
