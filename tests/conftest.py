"""
Shared pytest fixtures.
"""
import hashlib

import pytest

from itemdb.catalog import ItemCatalog
from itemdb.config import ENV_VARS
from itemdb.storage.database import SQLiteItemStore
from itemdb.storage.document import JSONItemStore
from itemdb.storage.images import ImageStore

JACKET_BYTES = b"\xff\xd8\xff\xe0 jacket photo"
SHIRT_BYTES = b"\xff\xd8\xff\xe0 shirt photo"
DEFAULT_BYTES = b"\xff\xd8\xff\xe0 default placeholder"


def canonical_name(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest() + ".jpg"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's ITEMDB_* settings out of the tests."""
    monkeypatch.delenv("ITEMDB_CONFIG", raising=False)
    for env in ENV_VARS.values():
        monkeypatch.delenv(env, raising=False)


@pytest.fixture
def write_image(tmp_path):
    """Write bytes to a file outside the image directory and return its path."""
    uploads = tmp_path / "uploads"
    uploads.mkdir()

    def _write(content: bytes, name: str = "upload.jpg"):
        path = uploads / name
        path.write_bytes(content)
        return path

    return _write


@pytest.fixture(params=["sqlite", "json"])
def store(request, tmp_path):
    """Each test using this runs once per backend."""
    if request.param == "sqlite":
        item_store = SQLiteItemStore(tmp_path / "db" / "items.sqlite3")
    else:
        item_store = JSONItemStore(tmp_path / "db" / "items.json")
    yield item_store
    item_store.close()


@pytest.fixture
def image_store(tmp_path) -> ImageStore:
    return ImageStore(tmp_path / "images")


@pytest.fixture
def catalog(store, image_store) -> ItemCatalog:
    return ItemCatalog(store, image_store)
