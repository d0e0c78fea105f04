from reactome_indexer.utils.mapset import MapSet


def test_mapset_groups_and_deduplicates():
    grouped: MapSet[str, str] = MapSet()
    grouped.add("title", "b")
    grouped.add("title", "a")
    grouped.add("title", "b")
    grouped.add_all("author", ["x", "y", "x"])

    assert grouped.elements("title") == ["a", "b"]
    assert grouped.elements("author") == ["x", "y"]
    assert grouped.elements("missing") == []
    assert set(grouped.keys()) == {"title", "author"}
    assert grouped.values() == ["a", "b", "x", "y"]


def test_mapset_remove_and_clear():
    grouped: MapSet[str, int] = MapSet()
    grouped.add_all("k", [2, 1, 3])
    grouped.add("other", 9)

    assert grouped.remove("other") == {9}
    assert grouped.remove("other") == set()
    assert grouped.keys() == ["k"]

    grouped.clear()
    assert grouped.keys() == []
    assert grouped.values() == []
