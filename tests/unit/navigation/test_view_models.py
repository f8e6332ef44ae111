"""Unit tests for navigation/models.py — view model shapes."""

import dataclasses

import pytest

from photo_shell.navigation.models import DirectoryEntryView, DirectoryView, PhotoView


class TestDirectoryView:
    def test_iterates_entries_in_order(self) -> None:
        view = DirectoryView(
            directory_id=1,
            entries=(
                DirectoryEntryView(id=3, name="b", loaded=False),
                DirectoryEntryView(id=2, name="a", loaded=True),
            ),
        )
        assert [e.id for e in view] == [3, 2]
        assert len(view) == 2

    def test_empty_by_default(self) -> None:
        assert len(DirectoryView(directory_id=5)) == 0

    def test_is_immutable(self) -> None:
        view = DirectoryView(directory_id=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            view.directory_id = 2  # type: ignore[misc]


class TestPhotoView:
    def test_equality(self) -> None:
        assert PhotoView(4, "cache/4.jpg") == PhotoView(photo_id=4, path="cache/4.jpg")
