"""
Global pytest configuration and fixtures for the event planner tests
"""

import logging

import pytest
from fastapi.testclient import TestClient

from eventplanner.api.app import create_application
from eventplanner.config.auth import AuthConfig
from eventplanner.config.storage import StorageConfig
from eventplanner.db import Database, DatabaseConfig, EventStore, InMemorySessionStore
from eventplanner.storage.blob_store import FilesystemBlobStore

TEST_PASSWORD = "correct horse battery staple"
TEST_BUCKET = "test-event-images"

# Suppress noisy logs during testing
logging.getLogger('sqlalchemy').setLevel(logging.WARNING)


@pytest.fixture
def database():
    """Fresh in-memory SQLite database per test"""
    db = Database(DatabaseConfig(url="sqlite://"))
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def event_store(database):
    return EventStore(database)


@pytest.fixture
def blob_store(tmp_path):
    return FilesystemBlobStore(tmp_path / "uploads", TEST_BUCKET, "/uploads")


@pytest.fixture
def auth_config():
    return AuthConfig(
        app_password=TEST_PASSWORD,
        session_secret="test-signing-secret",
        session_ttl_seconds=3600,
        auth_required=True,
        secure_cookie=False,
    )


@pytest.fixture
def storage_config(tmp_path):
    return StorageConfig(
        bucket_name=TEST_BUCKET,
        upload_dir=tmp_path / "uploads",
        public_base_url="/uploads",
    )


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def app(database, auth_config, storage_config, session_store, blob_store):
    return create_application(
        database=database,
        auth_config=auth_config,
        storage_config=storage_config,
        session_store=session_store,
        blob_store=blob_store,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def logged_in_client(client):
    response = client.post("/api/login", json={"password": TEST_PASSWORD})
    assert response.status_code == 200
    return client
