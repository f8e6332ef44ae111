"""Compact integer index over remote drive items."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from photo_shell.graph.models import ROOT_REMOTE_ID, DriveItem
from photo_shell.navigation.models import EntryId

logger = logging.getLogger(__name__)

FOLDER_MIME_TYPE = "inode/directory"


class EntryNotFoundError(KeyError):
    """Raised when an entry id is not known to the index."""

    def __init__(self, entry_id: EntryId) -> None:
        super().__init__(entry_id)
        self.entry_id = entry_id

    def __str__(self) -> str:
        return f"Unknown entry id {self.entry_id}"


@dataclass
class Entry:
    """A folder or photo the index has seen.

    Attributes:
        name: Display name of the item.
        remote_id: Graph item id (``root`` for the drive root).
        mime_type: MIME type reported by Graph; folders use FOLDER_MIME_TYPE.
        parent: EntryId of the containing folder. The root is its own parent.
        is_directory: Whether the item is a folder.
        children: Ordered child ids, or None until the folder has been listed.
        photo_path: Local path of the downloaded photo, or None until fetched.
    """

    name: str
    remote_id: str
    mime_type: str
    parent: EntryId
    is_directory: bool
    children: list[EntryId] | None = None
    photo_path: str | None = None


class EntryIndex:
    """Maps remote item ids to small integer EntryIds and tracks load state.

    The root gets ``home_id``; every other item is numbered from
    ``home_id + 1`` upward in the order it is first seen. A remote id keeps
    its EntryId for the lifetime of the index, so ids shown in an earlier
    listing stay valid after a refresh.
    """

    def __init__(self, home_id: EntryId = 1) -> None:
        self.home_id = home_id
        self._ids: dict[str, EntryId] = {ROOT_REMOTE_ID: home_id}
        self._entries: dict[EntryId, Entry] = {
            home_id: Entry(
                name=ROOT_REMOTE_ID,
                remote_id=ROOT_REMOTE_ID,
                mime_type=FOLDER_MIME_TYPE,
                parent=home_id,
                is_directory=True,
            )
        }
        self._next_id = home_id + 1

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: EntryId) -> Entry:
        """Return the entry for ``entry_id``.

        Raises:
            EntryNotFoundError: If the id has never been allocated.
        """
        try:
            return self._entries[entry_id]
        except KeyError:
            raise EntryNotFoundError(entry_id) from None

    def is_fully_loaded(self, entry_id: EntryId) -> bool:
        """A folder is loaded once listed; a photo once downloaded."""
        entry = self.get(entry_id)
        if entry.is_directory:
            return entry.children is not None
        return entry.photo_path is not None

    def set_children(self, entry_id: EntryId, items: list[DriveItem]) -> list[EntryId]:
        """Record the listed children of a folder, allocating ids for new items.

        Args:
            entry_id: Folder whose children were listed.
            items: Children in the order Graph returned them.

        Returns:
            The ordered child ids now cached for the folder.
        """
        entry = self.get(entry_id)
        children = [self._intern(item, entry_id) for item in items]
        entry.children = children
        return list(children)

    def clear_children(self, entry_id: EntryId) -> None:
        """Forget a folder's cached listing so it is fetched again."""
        entry = self.get(entry_id)
        if entry.is_directory:
            entry.children = None

    def set_photo_path(self, entry_id: EntryId, path: str) -> None:
        self.get(entry_id).photo_path = path

    def _intern(self, item: DriveItem, parent: EntryId) -> EntryId:
        existing = self._ids.get(item.id)
        if existing is not None:
            entry = self._entries[existing]
            # Items can be renamed or moved between listings.
            entry.name = item.name
            entry.parent = parent
            return existing

        new_id = self._next_id
        self._next_id += 1
        self._ids[item.id] = new_id
        self._entries[new_id] = Entry(
            name=item.name,
            remote_id=item.id,
            mime_type=FOLDER_MIME_TYPE if item.is_folder else item.mime_type,
            parent=parent,
            is_directory=item.is_folder,
        )
        logger.debug(
            "[_intern] allocated entry id; entry_id:%d;parent:%d;name:%s",
            new_id,
            parent,
            item.name,
        )
        return new_id
