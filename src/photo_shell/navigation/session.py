"""Per-window navigation session — serializes intents and emits view events."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from photo_shell.navigation.controller import NavigationController, ResolutionError
from photo_shell.navigation.models import DirectoryView, EntryId, PhotoView, ViewEvent

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    """Receives view events for one window."""

    def show_directory(self, view: DirectoryView) -> None: ...

    def show_photo(self, view: PhotoView) -> None: ...

    def show_error(self, error: ResolutionError) -> None: ...


class SessionClosedError(RuntimeError):
    """Raised when an intent is submitted to a session that is not running."""


class IntentKind(Enum):
    ENTER = "enter"
    GO_BACK = "go_back"
    GO_HOME = "go_home"
    REFRESH = "refresh_current"


@dataclass(frozen=True)
class Intent:
    """A single navigation request from the presentation layer."""

    kind: IntentKind
    target_id: EntryId | None = None


class NavigationSession:
    """Runs one window's intents strictly one at a time, in arrival order.

    Intents are queued and return immediately; a single worker task pulls
    them off the queue, awaits the controller, and hands the result to the
    presenter before taking the next one. Events therefore arrive in intent
    order and never for a stale ``current``.
    """

    def __init__(self, controller: NavigationController, presenter: Presenter) -> None:
        self._controller = controller
        self._presenter = presenter
        self._queue: asyncio.Queue[Intent] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None

    @property
    def current(self) -> EntryId:
        return self._controller.current

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        """Start the worker and queue the initial home listing.

        Must be called from inside a running event loop.
        """
        if self.running:
            return
        self._worker = asyncio.get_running_loop().create_task(self._run())
        logger.info("[start] session started; home_id:%d", self._controller.home_id)
        self.go_home()

    async def close(self) -> None:
        """Stop the worker. Queued intents that have not started are dropped."""
        if self._worker is None:
            return
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        dropped = 0
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
            dropped += 1
        logger.info(
            "[close] session closed; current:%d;dropped:%d", self._controller.current, dropped
        )

    async def join(self) -> None:
        """Wait until every queued intent has been handled."""
        await self._queue.join()

    def enter(self, target_id: EntryId) -> None:
        self._submit(Intent(IntentKind.ENTER, target_id))

    def go_back(self) -> None:
        self._submit(Intent(IntentKind.GO_BACK))

    def go_home(self) -> None:
        self._submit(Intent(IntentKind.GO_HOME))

    def refresh_current(self) -> None:
        self._submit(Intent(IntentKind.REFRESH))

    def _submit(self, intent: Intent) -> None:
        if not self.running:
            raise SessionClosedError(f"Session is not running; cannot {intent.kind.value}")
        logger.debug(
            "[_submit] queued intent; kind:%s;target_id:%s;pending:%d",
            intent.kind.value,
            intent.target_id,
            self._queue.qsize(),
        )
        self._queue.put_nowait(intent)

    async def _run(self) -> None:
        while True:
            intent = await self._queue.get()
            try:
                await self._handle(intent)
            except Exception:
                # A broken presenter must not stop later intents from running.
                logger.exception("[_run] presenter failed; kind:%s", intent.kind.value)
            finally:
                self._queue.task_done()

    async def _handle(self, intent: Intent) -> None:
        try:
            event = await self._execute(intent)
        except ResolutionError as exc:
            logger.warning(
                "[_handle] navigation failed; kind:%s;entry_id:%s",
                intent.kind.value,
                exc.entry_id,
            )
            self._presenter.show_error(exc)
            return
        if event is not None:
            self._emit(event)

    async def _execute(self, intent: Intent) -> ViewEvent | None:
        if intent.kind is IntentKind.ENTER:
            assert intent.target_id is not None
            return await self._controller.enter(intent.target_id)
        if intent.kind is IntentKind.GO_BACK:
            return await self._controller.go_back()
        if intent.kind is IntentKind.GO_HOME:
            return await self._controller.go_home()
        return await self._controller.refresh_current()

    def _emit(self, event: ViewEvent) -> None:
        if isinstance(event, DirectoryView):
            self._presenter.show_directory(event)
        else:
            self._presenter.show_photo(event)
