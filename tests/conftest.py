import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="promotion-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["LLM_BASE_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from promotion.core.database import Base, SessionLocal, engine, import_models
from promotion.main import app


@pytest.fixture(scope="session", autouse=True)
def _create_tables():
    import_models()
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_wrestler(db):
    from promotion.wrestlers.services.wrestler_service import WrestlerService

    def _make(name, **attributes):
        return WrestlerService(db).create_wrestler(name, **attributes)

    return _make
