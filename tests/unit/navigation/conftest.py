"""Shared fixtures for navigation tests — an in-memory drive."""

import threading
import time

import pytest


class FakeDrive:
    """In-memory drive collaborator.

    Layout (home = 1):
        1 (root)
        ├── 2 Vacation/
        │   ├── 4 beach.jpg
        │   └── 5 Day Two/
        └── 3 cat.png
    """

    def __init__(self) -> None:
        self.names = {1: "root", 2: "Vacation", 3: "cat.png", 4: "beach.jpg", 5: "Day Two"}
        self.parents = {1: 1, 2: 1, 3: 1, 4: 2, 5: 2}
        self.directories = {1, 2, 5}
        self.children = {1: [2, 3], 2: [4, 5], 5: []}
        self.loaded: set[int] = set()
        self.failing: set[int] = set()
        self.delays: dict[int, float] = {}
        self.calls: list[tuple[str, int]] = []
        self.refreshed: list[int] = []
        self._lock = threading.Lock()

    def _record(self, name: str, entry_id: int) -> None:
        with self._lock:
            self.calls.append((name, entry_id))
        delay = self.delays.get(entry_id)
        if delay:
            time.sleep(delay)
        if entry_id in self.failing:
            raise LookupError(f"entry {entry_id} is gone")
        if entry_id not in self.names:
            raise KeyError(entry_id)

    def get_children(self, entry_id: int) -> list[int]:
        self._record("get_children", entry_id)
        self.loaded.add(entry_id)
        return list(self.children[entry_id])

    def get_name(self, entry_id: int) -> str:
        self._record("get_name", entry_id)
        return self.names[entry_id]

    def get_parent(self, entry_id: int) -> int:
        self._record("get_parent", entry_id)
        return self.parents[entry_id]

    def is_directory(self, entry_id: int) -> bool:
        self._record("is_directory", entry_id)
        return entry_id in self.directories

    def is_fully_loaded(self, entry_id: int) -> bool:
        self._record("is_fully_loaded", entry_id)
        return entry_id in self.loaded

    def refresh(self, entry_id: int) -> None:
        self._record("refresh", entry_id)
        self.refreshed.append(entry_id)
        self.loaded.discard(entry_id)

    def get_photo_path(self, entry_id: int) -> str:
        self._record("get_photo_path", entry_id)
        self.loaded.add(entry_id)
        return f"cache/{entry_id}{self.names[entry_id][self.names[entry_id].rfind('.'):]}"

    def call_names(self, name: str) -> list[int]:
        return [entry_id for call, entry_id in self.calls if call == name]


class RecordingPresenter:
    """Presenter that records every event in arrival order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def show_directory(self, view) -> None:  # type: ignore[no-untyped-def]
        self.events.append(("directory", view))

    def show_photo(self, view) -> None:  # type: ignore[no-untyped-def]
        self.events.append(("photo", view))

    def show_error(self, error) -> None:  # type: ignore[no-untyped-def]
        self.events.append(("error", error))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


@pytest.fixture
def drive() -> FakeDrive:
    return FakeDrive()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()
