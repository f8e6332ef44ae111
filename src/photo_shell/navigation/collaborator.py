"""Interface the navigation controller expects from a drive."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from photo_shell.navigation.models import EntryId


@runtime_checkable
class DriveCollaborator(Protocol):
    """Synchronous, possibly slow, lookups keyed by EntryId.

    Every method may raise; the controller converts failures into
    ResolutionError. Implementations are called from a worker thread, one
    call at a time per session.
    """

    def get_children(self, entry_id: EntryId) -> Sequence[EntryId]: ...

    def get_name(self, entry_id: EntryId) -> str: ...

    def get_parent(self, entry_id: EntryId) -> EntryId: ...

    def is_directory(self, entry_id: EntryId) -> bool: ...

    def is_fully_loaded(self, entry_id: EntryId) -> bool: ...

    def refresh(self, entry_id: EntryId) -> None: ...

    def get_photo_path(self, entry_id: EntryId) -> str: ...
