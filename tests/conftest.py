import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tagcloud.config import settings

# Override settings for testing, before the app mounts the static directory
settings.database_url = "sqlite:///:memory:"
settings.auto_migrate = False
STATIC_BUILD = Path(tempfile.mkdtemp(prefix="tagcloud-build-"))
settings.static_dir = str(STATIC_BUILD)

from tagcloud.database import Store, create_db_engine, get_store, init_db  # noqa: E402
from tagcloud.main import app  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def remove_static_build():
    yield
    shutil.rmtree(STATIC_BUILD, ignore_errors=True)


@pytest.fixture(scope="function")
def static_dir():
    """A pre-built front-end with a root document and one asset."""
    shutil.rmtree(STATIC_BUILD, ignore_errors=True)
    (STATIC_BUILD / "static" / "js").mkdir(parents=True)
    (STATIC_BUILD / "index.html").write_text("<!doctype html><title>Tag Cloud</title>")
    (STATIC_BUILD / "static" / "js" / "main.js").write_text("console.log('tag cloud');")
    return STATIC_BUILD


@pytest.fixture(scope="function")
def client(static_dir):
    """
    Create a new FastAPI TestClient.

    Entering the client runs the lifespan, which builds a fresh in-memory
    database for every test.
    """
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture(scope="function")
def store(client) -> Store:
    """The store the running application uses."""
    return client.app.state.store


@pytest.fixture(scope="function")
def memory_store():
    """A standalone store over its own in-memory database."""
    store = Store(create_db_engine("sqlite:///:memory:"))
    init_db(store)
    yield store
    store.dispose()


@pytest.fixture(scope="function")
def create_tag(store: Store):
    """Fixture for creating tags directly in the database."""
    def _create_tag(tag: str, count: int = 1):
        store.execute("INSERT INTO tags (tag, count) VALUES (:tag, :count)", {"tag": tag, "count": count})
        return store.query("SELECT id, tag, count FROM tags WHERE tag = :tag", {"tag": tag})[0]

    return _create_tag
