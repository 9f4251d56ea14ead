"""
Unit tests for the mapping helpers.
"""

from cbac.maps import fill, key_set


class TestKeySet:
    """Tests for key_set."""

    def test_every_item_maps_to_true(self) -> None:
        """Each item becomes a True key."""
        assert key_set(["a", "b"]) == {"a": True, "b": True}

    def test_duplicates_collapse(self) -> None:
        """Repeated items produce one key, first-seen order kept."""
        assert list(key_set(["b", "a", "b"])) == ["b", "a"]

    def test_empty(self) -> None:
        """No items gives an empty map."""
        assert key_set([]) == {}


class TestFill:
    """Tests for fill."""

    def test_sets_every_key(self) -> None:
        """All listed keys get the value."""
        assert fill({}, ["x", "y"], False) == {"x": False, "y": False}

    def test_updates_in_place(self) -> None:
        """The given mapping is updated and returned."""
        mapping = {"x": True, "z": True}
        result = fill(mapping, ["x"], False)
        assert result is mapping
        assert mapping == {"x": False, "z": True}
