import pytest

from catalog.errors import ConstraintViolation, StoreUnavailable
from catalog.models import Base


def test_create_and_find_root(store):
    c = store.create("Electronics")
    assert c.id is not None
    assert c.parent_id is None

    found = store.find_by_name_and_parent("Electronics", None)
    assert found is not None
    assert found.id == c.id


def test_find_is_scoped_to_parent(store):
    root = store.create("Phones")
    child = store.create("Accessories", root.id)

    assert store.find_by_name_and_parent("Accessories", None) is None
    assert store.find_by_name_and_parent("Accessories", root.id).id == child.id


def test_find_miss_returns_none(store):
    assert store.find_by_name_and_parent("Nope", None) is None
    assert store.get(12345) is None


def test_duplicate_root_is_rejected(store):
    store.create("Electronics")
    with pytest.raises(ConstraintViolation):
        store.create("Electronics")


def test_duplicate_child_is_rejected(store):
    root = store.create("Laptops")
    store.create("Accessories", root.id)
    with pytest.raises(ConstraintViolation) as exc:
        store.create("Accessories", root.id)
    assert exc.value.parent_id == root.id


def test_same_name_under_different_parents_is_allowed(store):
    phones = store.create("Phones")
    laptops = store.create("Laptops")
    a = store.create("Accessories", phones.id)
    b = store.create("Accessories", laptops.id)
    assert a.id != b.id


def test_list_all_returns_every_row(store):
    root = store.create("A")
    store.create("B", root.id)
    store.create("C")
    names = sorted(c.name for c in store.list_all())
    assert names == ["A", "B", "C"]


def test_broken_database_raises_store_unavailable(store, database):
    Base.metadata.drop_all(database.engine)
    with pytest.raises(StoreUnavailable):
        store.list_all()
    with pytest.raises(StoreUnavailable):
        store.find_by_name_and_parent("A", None)
    with pytest.raises(StoreUnavailable):
        store.create("A")
