import os
import random
import tempfile
from pathlib import Path

# Point the app at a throwaway database before any api module is imported
_TEST_DATA_DIR = tempfile.mkdtemp(prefix="ssbprep-tests-")
os.environ["DB_DIR"] = _TEST_DATA_DIR
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TEST_DATA_DIR) / 'api.db'}"
os.environ["STORAGE_BASE_URL"] = ""

import pytest
from sqlalchemy.orm import sessionmaker

from api.database import init_db, make_engine
from api.models.db.user import User
from api.services.store_client import StoreClient


@pytest.fixture
def session_factory(tmp_path: Path):
    engine = make_engine(f"sqlite:///{tmp_path / 'store.db'}")
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    client = StoreClient(session_factory, app_id="test-app", timeout=5, max_workers=4)
    yield client
    client.close()


@pytest.fixture
def make_user(session_factory):
    def _make_user(username: str = "cadet") -> int:
        db = session_factory()
        try:
            user = User(
                username=username,
                email=f"{username}@example.com",
                hashed_password="not-a-real-hash",
            )
            db.add(user)
            db.commit()
            return user.id
        finally:
            db.close()

    return _make_user


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
