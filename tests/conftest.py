import os

# przed importem aplikacji: baza w pamieci, celery bez brokera
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from freshmarket.data.database import Base, SessionLocal, engine
from freshmarket.main import app


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def catalog(client):
    """Seeds the sample catalog and returns ``{product name: product}``."""
    assert client.post("/api/init-data").status_code == 200
    return {p["name"]: p for p in client.get("/api/products").json()}


def _create_user(client, user_id, email):
    response = client.post(
        "/api/users",
        json={"id": user_id, "email": email, "first_name": "Test", "last_name": user_id},
    )
    assert response.status_code == 200
    return {"X-User-Id": user_id}


@pytest.fixture()
def auth(client):
    return _create_user(client, "user-1", "ana@example.com")


@pytest.fixture()
def other_auth(client):
    return _create_user(client, "user-2", "luis@example.com")


def _count_rows(model, **filters) -> int:
    with SessionLocal() as session:
        stmt = select(func.count()).select_from(model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        return session.execute(stmt).scalar_one()


@pytest.fixture()
def count_rows():
    return _count_rows
