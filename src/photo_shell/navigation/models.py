"""View models emitted by the navigation controller."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

# Opaque identifier for a folder or photo. Meaning is owned by the drive.
EntryId = int


@dataclass(frozen=True)
class DirectoryEntryView:
    """One row of a directory listing.

    Attributes:
        id: Entry id of the child.
        name: Human-readable label.
        loaded: Whether the child's own contents have already been fetched.
    """

    id: EntryId
    name: str
    loaded: bool


@dataclass(frozen=True)
class DirectoryView:
    """Listing of a folder's immediate children, in drive order."""

    directory_id: EntryId
    entries: tuple[DirectoryEntryView, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DirectoryEntryView]:
        return iter(self.entries)


@dataclass(frozen=True)
class PhotoView:
    """Resolved location of a single photo, ready for display."""

    photo_id: EntryId
    path: str


ViewEvent = DirectoryView | PhotoView
