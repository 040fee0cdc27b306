import os
import tempfile

import pytest

# Point the service at a throwaway SQLite file before herdbook is imported.
_DB_DIR = tempfile.mkdtemp(prefix="herdbook-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'herdbook.db')}"

from fastapi.testclient import TestClient  # noqa: E402

from herdbook.database import Base, engine  # noqa: E402
from herdbook.main import app  # noqa: E402


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def rabbit_type(client):
    r = client.post(
        "/animal-types/",
        json={
            "title": "Rabbit",
            "icon": "rabbit",
            "lifecycle": {
                "reproduction_type": "birth",
                "maturity": {"male": 120, "female": 120},
                "gestation_days": 30,
                "weaning_days": 42,
            },
        },
    )
    assert r.status_code == 200, r.text
    return r.json()
