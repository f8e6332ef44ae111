"""Unit tests for drive/index.py — id allocation and load tracking."""

import pytest

from photo_shell.drive.index import FOLDER_MIME_TYPE, EntryIndex, EntryNotFoundError
from photo_shell.graph.models import DriveItem


def _photo(remote_id: str, name: str = "img.jpg") -> DriveItem:
    return DriveItem(id=remote_id, name=name, is_folder=False, mime_type="image/jpeg")


def _folder(remote_id: str, name: str = "Album") -> DriveItem:
    return DriveItem(id=remote_id, name=name, is_folder=True)


class TestRoot:
    def test_root_uses_home_id(self) -> None:
        index = EntryIndex(home_id=1)
        root = index.get(1)
        assert root.remote_id == "root"
        assert root.is_directory is True
        assert root.mime_type == FOLDER_MIME_TYPE

    def test_root_is_its_own_parent(self) -> None:
        index = EntryIndex(home_id=0)
        assert index.get(0).parent == 0

    def test_root_starts_unloaded(self) -> None:
        index = EntryIndex()
        assert index.is_fully_loaded(1) is False
        assert len(index) == 1


class TestSetChildren:
    def test_allocates_ids_after_home_in_listing_order(self) -> None:
        index = EntryIndex(home_id=1)

        ids = index.set_children(1, [_folder("a"), _photo("b"), _photo("c")])

        assert ids == [2, 3, 4]
        assert index.get(2).is_directory is True
        assert index.get(3).mime_type == "image/jpeg"
        assert index.get(4).parent == 1
        assert index.is_fully_loaded(1) is True

    def test_known_remote_id_keeps_its_entry_id(self) -> None:
        index = EntryIndex()
        index.set_children(1, [_photo("a"), _photo("b")])

        ids = index.set_children(1, [_photo("b"), _photo("new"), _photo("a")])

        assert ids == [3, 4, 2]

    def test_rename_is_picked_up_on_relisting(self) -> None:
        index = EntryIndex()
        index.set_children(1, [_photo("a", name="old.jpg")])

        index.set_children(1, [_photo("a", name="new.jpg")])

        assert index.get(2).name == "new.jpg"

    def test_returned_list_is_a_copy(self) -> None:
        index = EntryIndex()
        ids = index.set_children(1, [_photo("a")])
        ids.append(99)
        assert index.get(1).children == [2]

    def test_empty_folder_counts_as_loaded(self) -> None:
        index = EntryIndex()
        index.set_children(1, [])
        assert index.is_fully_loaded(1) is True


class TestLoadState:
    def test_clear_children_marks_folder_unloaded(self) -> None:
        index = EntryIndex()
        index.set_children(1, [_photo("a")])

        index.clear_children(1)

        assert index.is_fully_loaded(1) is False
        assert 2 in index

    def test_clear_children_on_photo_is_ignored(self) -> None:
        index = EntryIndex()
        index.set_children(1, [_photo("a")])
        index.set_photo_path(2, "cache/2.jpg")

        index.clear_children(2)

        assert index.is_fully_loaded(2) is True

    def test_photo_loaded_once_path_is_set(self) -> None:
        index = EntryIndex()
        index.set_children(1, [_photo("a")])
        assert index.is_fully_loaded(2) is False

        index.set_photo_path(2, "cache/2.jpg")

        assert index.is_fully_loaded(2) is True
        assert index.get(2).photo_path == "cache/2.jpg"


class TestEntryNotFound:
    def test_unknown_id_raises(self) -> None:
        index = EntryIndex()
        with pytest.raises(EntryNotFoundError) as exc_info:
            index.get(42)
        assert exc_info.value.entry_id == 42
        assert "42" in str(exc_info.value)

    def test_is_a_key_error(self) -> None:
        index = EntryIndex()
        with pytest.raises(KeyError):
            index.is_fully_loaded(42)
