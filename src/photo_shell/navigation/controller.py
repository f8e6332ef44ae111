"""Navigation controller — owns the current entry of one browsing session."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from photo_shell.navigation.models import (
    DirectoryEntryView,
    DirectoryView,
    EntryId,
    PhotoView,
    ViewEvent,
)

if TYPE_CHECKING:
    from photo_shell.navigation.collaborator import DriveCollaborator

logger = logging.getLogger(__name__)

DEFAULT_HOME_ID: EntryId = 1

T = TypeVar("T")


class ResolutionError(Exception):
    """Raised when the drive fails to look up or update an entry."""

    def __init__(self, entry_id: EntryId, cause: BaseException) -> None:
        super().__init__(f"Could not resolve entry {entry_id}: {cause}")
        self.entry_id = entry_id
        self.cause = cause


class NavigationController:
    """Turns navigation intents into drive calls and view events.

    The controller holds a single piece of state, ``current``. Drive calls are
    blocking, so each one runs in a worker thread via ``asyncio.to_thread``;
    callers must not start a second operation before the first completes
    (NavigationSession enforces this).
    """

    def __init__(self, drive: DriveCollaborator, home_id: EntryId = DEFAULT_HOME_ID) -> None:
        """Initialise the controller at the home entry.

        Args:
            drive: Drive collaborator to query.
            home_id: Well-known id of the home folder.
        """
        self._drive = drive
        self._home_id = home_id
        self._current = home_id

    @property
    def current(self) -> EntryId:
        return self._current

    @property
    def home_id(self) -> EntryId:
        return self._home_id

    async def enter(self, target_id: EntryId) -> ViewEvent:
        """Make ``target_id`` current and show it as a listing or a photo.

        ``current`` is updated before the drive is consulted and is not rolled
        back if the lookup fails.

        Raises:
            ResolutionError: If the drive cannot classify or resolve the target.
        """
        self._current = target_id
        if await self._call(self._drive.is_directory, target_id):
            return await self.list_current()
        path = await self._call(self._drive.get_photo_path, target_id)
        logger.info("[enter] resolved photo; entry_id:%d", target_id)
        return PhotoView(photo_id=target_id, path=path)

    async def go_back(self) -> DirectoryView:
        """Move to the parent of ``current`` and list it.

        Raises:
            ResolutionError: If the parent lookup or the listing fails.
        """
        self._current = await self._call(self._drive.get_parent, self._current)
        return await self.list_current()

    async def go_home(self) -> DirectoryView:
        """Move to the home folder and list it.

        Raises:
            ResolutionError: If the home folder cannot be listed.
        """
        self._current = self._home_id
        return await self.list_current()

    async def refresh_current(self) -> DirectoryView | None:
        """Re-fetch the listing of ``current``.

        Returns:
            A fresh DirectoryView, or None when ``current`` is a photo.

        Raises:
            ResolutionError: If the drive fails to refresh or list the folder.
        """
        entry_id = self._current
        if not await self._call(self._drive.is_directory, entry_id):
            logger.debug("[refresh_current] current entry is a photo; entry_id:%d", entry_id)
            return None
        await self._call(self._drive.refresh, entry_id)
        logger.info("[refresh_current] refreshed folder; entry_id:%d", entry_id)
        return await self.list_current()

    async def list_current(self) -> DirectoryView:
        """Pair each child of ``current`` with its name and loaded flag.

        Children keep the order the drive returned them in.

        Raises:
            ResolutionError: If any lookup fails.
        """
        entry_id = self._current
        child_ids = await self._call(self._drive.get_children, entry_id)
        entries: list[DirectoryEntryView] = []
        for child_id in child_ids:
            name = await self._call(self._drive.get_name, child_id)
            loaded = await self._call(self._drive.is_fully_loaded, child_id)
            entries.append(DirectoryEntryView(id=child_id, name=name, loaded=loaded))
        logger.info(
            "[list_current] listed folder; entry_id:%d;child_count:%d",
            entry_id,
            len(entries),
        )
        return DirectoryView(directory_id=entry_id, entries=tuple(entries))

    async def _call(self, func: Callable[[EntryId], T], entry_id: EntryId) -> T:
        """Run a blocking drive call off the event loop.

        Raises:
            ResolutionError: Wrapping whatever the drive raised.
        """
        try:
            return await asyncio.to_thread(func, entry_id)
        except Exception as exc:
            logger.warning(
                "[_call] drive call failed; call:%s;entry_id:%s;error:%s",
                getattr(func, "__name__", func),
                entry_id,
                exc,
            )
            raise ResolutionError(entry_id, exc) from exc
