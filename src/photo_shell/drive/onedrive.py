"""OneDrive-backed drive collaborator built on the Graph client."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from photo_shell.drive.index import EntryIndex
from photo_shell.graph.client import GraphClient, graph_client_from_config
from photo_shell.graph.models import (
    FIELD_DELETED,
    FIELD_FILE,
    FIELD_FOLDER,
    FIELD_ID,
    FIELD_MIME_TYPE,
    FIELD_NAME,
    ODATA_NEXT_LINK,
    ODATA_VALUE,
    ROOT_REMOTE_ID,
    DriveItem,
)
from photo_shell.navigation.models import EntryId

if TYPE_CHECKING:
    from photo_shell.config import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 200


class OneDriveCollaborator:
    """Lazily loads a user's OneDrive into an EntryIndex.

    Folder listings and photo downloads are fetched on first use and cached
    until ``refresh`` is called for the folder. Safe to share between
    sessions: index reads and updates are guarded by a lock, while remote
    requests and cache writes run outside it.
    """

    def __init__(
        self,
        graph_client: GraphClient,
        drive_user: str,
        photo_cache_dir: str | Path,
        home_id: EntryId = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialise the collaborator.

        Args:
            graph_client: Authenticated GraphClient instance.
            drive_user: UPN or object ID of the OneDrive user to browse.
            photo_cache_dir: Directory downloaded photos are written to.
            home_id: EntryId assigned to the drive root.
            page_size: ``$top`` value used when listing children.
        """
        self._graph = graph_client
        self._drive_user = drive_user
        self._photo_cache_dir = Path(photo_cache_dir)
        self._page_size = page_size
        self._index = EntryIndex(home_id=home_id)
        self._lock = threading.RLock()

    @property
    def home_id(self) -> EntryId:
        return self._index.home_id

    def get_children(self, entry_id: EntryId) -> list[EntryId]:
        """Return the ordered child ids of a folder, listing it if needed.

        Raises:
            EntryNotFoundError: If the id is unknown.
            NotADirectoryError: If the entry is a photo.
            GraphApiError: If the listing request fails.
        """
        with self._lock:
            entry = self._index.get(entry_id)
            if not entry.is_directory:
                raise NotADirectoryError(f"Entry {entry_id} is not a folder")
            if entry.children is not None:
                return list(entry.children)
            remote_id = entry.remote_id
        # Listing runs outside the lock.
        items = self._list_remote_children(remote_id)
        with self._lock:
            children = self._index.set_children(entry_id, items)
        logger.info(
            "[get_children] loaded folder; entry_id:%d;child_count:%d",
            entry_id,
            len(children),
        )
        return children

    def get_name(self, entry_id: EntryId) -> str:
        return self._index.get(entry_id).name

    def get_parent(self, entry_id: EntryId) -> EntryId:
        return self._index.get(entry_id).parent

    def is_directory(self, entry_id: EntryId) -> bool:
        return self._index.get(entry_id).is_directory

    def is_fully_loaded(self, entry_id: EntryId) -> bool:
        return self._index.is_fully_loaded(entry_id)

    def refresh(self, entry_id: EntryId) -> None:
        """Drop the cached listing of a folder. Photos are left untouched."""
        with self._lock:
            self._index.clear_children(entry_id)
        logger.info("[refresh] cleared folder listing; entry_id:%d", entry_id)

    def get_photo_path(self, entry_id: EntryId) -> str:
        """Return the local path of a photo, downloading it on first use.

        Raises:
            EntryNotFoundError: If the id is unknown.
            IsADirectoryError: If the entry is a folder.
            GraphApiError: If the download fails.
            OSError: If the photo cannot be written to the cache directory.
        """
        with self._lock:
            entry = self._index.get(entry_id)
            if entry.is_directory:
                raise IsADirectoryError(f"Entry {entry_id} is not a photo")
            if entry.photo_path is not None:
                return entry.photo_path
            remote_id = entry.remote_id
            path = self._photo_cache_dir / f"{entry_id}{Path(entry.name).suffix.lower()}"

        content = self._graph.get_content(
            f"/users/{self._drive_user}/drive/items/{remote_id}/content"
        )
        self._photo_cache_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        with self._lock:
            self._index.set_photo_path(entry_id, str(path))
        logger.info(
            "[get_photo_path] downloaded photo; entry_id:%d;bytes:%d;path:%s",
            entry_id,
            len(content),
            path,
        )
        return str(path)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _children_path(self, remote_id: str) -> str:
        base = f"/users/{self._drive_user}/drive"
        item = "root" if remote_id == ROOT_REMOTE_ID else f"items/{remote_id}"
        return f"{base}/{item}/children?$top={self._page_size}"

    def _list_remote_children(self, remote_id: str) -> list[DriveItem]:
        """Fetch every page of a folder's children, in Graph order."""
        items: list[DriveItem] = []
        next_path: str | None = self._children_path(remote_id)
        while next_path is not None:
            response = self._graph.get(next_path)
            for raw in response.get(ODATA_VALUE, []):
                item = self._parse_drive_item(raw)
                if item.is_deleted:
                    continue
                items.append(item)
            next_path = response.get(ODATA_NEXT_LINK)
        return items

    @staticmethod
    def _parse_drive_item(raw: dict[str, Any]) -> DriveItem:
        """Map a raw Graph API item dict to a DriveItem dataclass."""
        file_facet = raw.get(FIELD_FILE) or {}
        return DriveItem(
            id=raw.get(FIELD_ID, ""),
            name=raw.get(FIELD_NAME, ""),
            is_folder=FIELD_FOLDER in raw,
            mime_type=file_facet.get(FIELD_MIME_TYPE, ""),
            is_deleted=FIELD_DELETED in raw,
        )


def onedrive_from_config(config: AppConfig) -> OneDriveCollaborator:
    """Construct a OneDriveCollaborator from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured OneDriveCollaborator instance.
    """
    return OneDriveCollaborator(
        graph_client=graph_client_from_config(config),
        drive_user=config.drive_user,
        photo_cache_dir=config.photo_cache_dir,
        home_id=config.home_id,
        page_size=config.page_size,
    )
