import pytest

from territory_editor.core.errors import InsufficientPoints
from territory_editor.core.models.point import Point
from territory_editor.core.models.territory import Territory
from territory_editor.core.territory_store import TerritoryStore


def make(name, color="#3B82F6", offset=0.0):
    pts = [Point(offset, 0), Point(offset + 10, 0), Point(offset + 10, 10)]
    return Territory.create(name, pts, color)


def test_territory_requires_three_points():
    with pytest.raises(InsufficientPoints):
        Territory.create("Line", [Point(0, 0), Point(1, 1)], "#FF0000")


def test_territory_ids_are_unique():
    ids = {make("A").id for _ in range(50)}
    assert len(ids) == 50


def test_territory_queries(square_points):
    t = Territory.create("Base", square_points, "#3B82F6")
    assert t.centroid() == Point(50.0, 50.0)
    assert t.area() == pytest.approx(10000.0)
    assert t.contains(Point(10, 90))
    assert not t.contains(Point(-10, 90))


def test_add_and_list_keep_insertion_order():
    store = TerritoryStore()
    a, b, c = make("A"), make("B"), make("C")
    for t in (a, b, c):
        store.add(t)
    assert [t.name for t in store.list()] == ["A", "B", "C"]
    assert len(store) == 3


def test_duplicate_names_are_allowed():
    store = TerritoryStore([make("Camp"), make("Camp")])
    assert len(store) == 2


def test_remove():
    a, b = make("A"), make("B")
    store = TerritoryStore([a, b])
    assert store.remove(a.id) is True
    assert [t.id for t in store.list()] == [b.id]


def test_remove_absent_id_is_not_an_error():
    store = TerritoryStore([make("A")])
    assert store.remove("missing") is False
    assert len(store) == 1


def test_get():
    a = make("A")
    store = TerritoryStore([a])
    assert store.get(a.id) is a
    assert store.get("missing") is None


def test_list_is_a_snapshot():
    a, b = make("A"), make("B")
    store = TerritoryStore([a])
    it = store.list()
    store.add(b)
    store.remove(a.id)
    assert [t.name for t in it] == ["A"]


def test_replace_all_and_clear():
    store = TerritoryStore([make("A")])
    store.replace_all([make("X"), make("Y")])
    assert [t.name for t in store.list()] == ["X", "Y"]
    store.clear()
    assert len(store) == 0


def test_export_all_omits_id(square_points):
    store = TerritoryStore([Territory.create("Base", square_points, "#3B82F6")])
    exported = store.export_all()
    assert exported == [{
        "name": "Base",
        "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 100, "y": 100}, {"x": 0, "y": 100}],
        "color": "#3B82F6",
    }]
    assert "id" not in exported[0]


def test_new_store_is_unmodified():
    assert TerritoryStore([make("A")]).modified is False


@pytest.mark.parametrize("change", [
    lambda s, t: s.add(make("B")),
    lambda s, t: s.remove(t.id),
    lambda s, t: s.clear(),
    lambda s, t: s.replace_all([make("X")]),
])
def test_changes_mark_store_modified(change):
    a = make("A")
    store = TerritoryStore([a])
    change(store, a)
    assert store.modified is True


def test_removing_absent_id_keeps_store_unmodified():
    store = TerritoryStore([make("A")])
    store.remove("missing")
    assert store.modified is False


def test_edit_after_save_marks_modified_again():
    store = TerritoryStore()
    store.add(make("A"))
    store.mark_saved()
    assert store.modified is False
    store.add(make("B"))
    assert store.modified is True
