import pytest

from itemdb.catalog import ItemCatalog
from itemdb.core.errors import NotFoundError, StorageError, ValidationError
from itemdb.storage.database import SQLiteItemStore
from itemdb.storage.document import JSONItemStore

from .conftest import JACKET_BYTES, SHIRT_BYTES, canonical_name


def test_jacket_scenario(catalog, write_image):
    jacket = catalog.add_item("jacket", "fashion", write_image(JACKET_BYTES, "jacket.jpg"))

    assert [i.to_dict() for i in catalog.list_all()] == [
        {"name": "jacket", "category": "fashion", "image": canonical_name(JACKET_BYTES)}
    ]

    shirt = catalog.add_item("shirt", "fashion", write_image(SHIRT_BYTES, "shirt.jpg"))

    assert shirt.category_id == jacket.category_id
    assert [i.category for i in catalog.list_all()] == ["fashion", "fashion"]
    assert [c.name for c in catalog.categories()] == ["fashion"]


def test_add_returns_canonical_filename_and_stores_blob(catalog, write_image):
    item = catalog.add_item("jacket", "fashion", write_image(JACKET_BYTES))

    assert item.image_filename == canonical_name(JACKET_BYTES)
    assert catalog.images.exists(item.image_filename)


def test_reuploading_same_bytes_adds_item_but_not_blob(catalog, write_image):
    catalog.add_item("jacket", "fashion", write_image(JACKET_BYTES, "one.jpg"))
    catalog.add_item("jacket again", "fashion", write_image(JACKET_BYTES, "two.jpg"))

    stored = [p for p in catalog.images.image_dir.iterdir() if p.is_file()]
    assert [p.name for p in stored] == [canonical_name(JACKET_BYTES)]
    assert catalog.count() == 2


def test_empty_name_is_accepted(catalog, write_image):
    item = catalog.add_item("", "fashion", write_image(JACKET_BYTES))

    assert item.name == ""


@pytest.mark.parametrize("image_path", [None, ""])
def test_missing_image_is_rejected_without_side_effects(catalog, image_path):
    with pytest.raises(ValidationError):
        catalog.add_item("jacket", "fashion", image_path)

    assert catalog.count() == 0
    assert catalog.categories() == []


def test_nonexistent_image_path_is_rejected(catalog, tmp_path):
    with pytest.raises(ValidationError):
        catalog.add_item("jacket", "fashion", tmp_path / "nope.jpg")

    assert catalog.count() == 0


def test_get_by_position_matches_list(catalog, write_image):
    catalog.add_item("jacket", "fashion", write_image(JACKET_BYTES, "a.jpg"))
    catalog.add_item("shirt", "fashion", write_image(SHIRT_BYTES, "b.jpg"))
    catalog.add_item("ball", "toys", write_image(b"ball", "c.jpg"))

    items = catalog.list_all()

    for i, item in enumerate(items):
        assert catalog.get_by_position(i) == item
        assert catalog.get_by_position(str(i)) == item


@pytest.mark.parametrize("position", [1, "1", -1, "-1", "abc", "", "1.0", " ", "99999999999999999999"])
def test_get_by_position_not_found(catalog, write_image, position):
    catalog.add_item("jacket", "fashion", write_image(JACKET_BYTES))

    with pytest.raises(NotFoundError):
        catalog.get_by_position(position)


@pytest.fixture
def stocked(catalog, write_image):
    catalog.add_item("jacket", "fashion", write_image(JACKET_BYTES, "a.jpg"))
    catalog.add_item("ball", "toys", write_image(SHIRT_BYTES, "b.jpg"))
    catalog.add_item("fashion", "books", write_image(b"magazine", "c.jpg"))
    return catalog


def test_search_matches_name_or_category(stocked):
    hits = stocked.search("fashion")

    # "fashion" is the first item's category and the third item's name
    assert [i.name for i in hits] == ["jacket", "fashion"]


def test_search_matches_image_filename(stocked):
    hits = stocked.search(canonical_name(SHIRT_BYTES))

    assert [i.name for i in hits] == ["ball"]


@pytest.mark.parametrize("keyword", ["fash", "Fashion", "jacket ", "toy", canonical_name(SHIRT_BYTES)[:10]])
def test_search_has_no_partial_matches(stocked, keyword):
    assert stocked.search(keyword) == []


def test_search_preserves_list_order(stocked):
    listed = stocked.list_all()
    hits = stocked.search("fashion")

    assert hits == [i for i in listed if i in hits]


def test_search_by_id_on_sqlite(tmp_path, image_store, write_image):
    catalog = ItemCatalog(SQLiteItemStore(tmp_path / "items.sqlite3"), image_store)
    catalog.add_item("jacket", "fashion", write_image(JACKET_BYTES, "a.jpg"))
    catalog.add_item("ball", "toys", write_image(SHIRT_BYTES, "b.jpg"))

    assert [i.name for i in catalog.search("2")] == ["ball"]
    assert catalog.search("02") == []
    catalog.close()


def test_unreadable_store_surfaces_storage_error(tmp_path, image_store, write_image):
    path = tmp_path / "items.json"
    path.write_text("{broken")
    catalog = ItemCatalog(JSONItemStore(path), image_store)

    with pytest.raises(StorageError):
        catalog.list_all()
    with pytest.raises(StorageError):
        catalog.search("jacket")
