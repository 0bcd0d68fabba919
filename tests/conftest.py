# tests/conftest.py
from __future__ import annotations

import os

# In-memory SQLite, set before anything imports the settings/engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_INITIALIZE_PAGES"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import storebuilder.models  # noqa: F401  (populate metadata)
from storebuilder.db.base import Base
from storebuilder.db.session import SessionLocal, engine, get_db
from storebuilder.models.content import Page
from storebuilder.models.store import MemberRole, Store, StoreMember
from storebuilder.schemas.page import PageCreate
from storebuilder.schemas.store import StoreCreate
from storebuilder.security.jwt import create_access_token
from storebuilder.seeds.page_templates import upsert_page_templates
from storebuilder.services.page_service import create_page
from storebuilder.services.store_service import create_store

OWNER_ID = 101
EDITOR_ID = 202
STRANGER_ID = 999


@pytest.fixture()
def db() -> Session:
    """
    Fresh schema per test. Endpoints commit for real, so the tables are
    dropped afterwards instead of rolling back.
    """
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture()
def client(db: Session):
    """TestClient whose endpoints share the test's session."""
    from storebuilder.main import app  # late import: builds the app with the test settings

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def templates(db: Session) -> None:
    upsert_page_templates(db)
    db.commit()


@pytest.fixture()
def store(db: Session, templates) -> Store:
    """E-commerce store seeded from the default templates, owned by OWNER_ID, with EDITOR_ID as editor."""
    s = create_store(db, owner_id=OWNER_ID, payload=StoreCreate(slug="acme", name="Acme Shop"))
    db.add(StoreMember(store_id=s.id, user_id=EDITOR_ID, role=MemberRole.editor))
    db.commit()
    return s


@pytest.fixture()
def bare_store(db: Session) -> Store:
    """Store without any template in the catalog, hence without pages."""
    s = create_store(db, owner_id=OWNER_ID, payload=StoreCreate(slug="bare", name="Bare Shop"))
    db.commit()
    return s


@pytest.fixture()
def blank_page(db: Session, bare_store: Store) -> Page:
    page = create_page(db, store_id=bare_store.id, payload=PageCreate(title="Landing", is_published=True))
    db.commit()
    return page


def _headers(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def owner_headers() -> dict:
    return _headers(OWNER_ID)


@pytest.fixture()
def editor_headers() -> dict:
    return _headers(EDITOR_ID)


@pytest.fixture()
def stranger_headers() -> dict:
    return _headers(STRANGER_ID)
