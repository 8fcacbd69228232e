import time

import pytest

from itemdb.core.deadline import Deadline, ensure_deadline
from itemdb.core.errors import DeadlineExceeded, StorageError
from itemdb.core.models import Item


def test_item_json_shape():
    item = Item(name="jacket", category="fashion", image_filename="ab.jpg", category_id=1, id=7)

    assert item.to_dict() == {"name": "jacket", "category": "fashion", "image": "ab.jpg"}
    assert Item.from_dict(item.to_dict(), category_id=1, item_id=7) == item


@pytest.mark.parametrize("keyword, expected", [
    ("jacket", True),
    ("fashion", True),
    ("ab.jpg", True),
    ("7", True),
    ("07", False),
    ("jack", False),
    ("JACKET", False),
    ("", False),
])
def test_item_matches_whole_fields(keyword, expected):
    item = Item(name="jacket", category="fashion", image_filename="ab.jpg", id=7)

    assert item.matches(keyword) is expected


def test_item_without_id_never_matches_on_id():
    item = Item(name="jacket", category="fashion", image_filename="ab.jpg")

    assert not item.matches("None")
    assert not item.matches("1")


def test_unbounded_deadline():
    deadline = ensure_deadline(None)

    assert deadline.remaining() is None
    assert deadline.lock_timeout() == -1
    assert not deadline.expired
    deadline.check()


@pytest.mark.parametrize("timeout", [0, -3])
def test_non_positive_timeout_means_unbounded(timeout):
    assert Deadline(timeout).remaining() is None


def test_expired_deadline_raises_storage_error():
    deadline = Deadline(0.001)
    time.sleep(0.01)

    assert deadline.expired
    assert deadline.remaining() == 0.0
    with pytest.raises(DeadlineExceeded):
        deadline.check("test")
    assert issubclass(DeadlineExceeded, StorageError)
