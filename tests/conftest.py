# tests/conftest.py
import os

# models.base builds its engine at import time; point it at SQLite first
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from models.base import Base, engine
from models import member, scheduling  # noqa: F401 (register models)


@pytest.fixture()
def session():
    # SQLite in-memory DB just for tests
    test_engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(
        bind=test_engine,
        autoflush=False,
        autocommit=False,
        future=True,
        expire_on_commit=False,
    )

    Base.metadata.create_all(bind=test_engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()


@pytest.fixture()
def client():
    from app.web_app import app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
