"""Text-mode presentation layer — reads commands, prints view events."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TextIO

from photo_shell import __version__
from photo_shell.config import load_config
from photo_shell.drive.onedrive import onedrive_from_config
from photo_shell.navigation.controller import NavigationController, ResolutionError
from photo_shell.navigation.models import DirectoryView, PhotoView
from photo_shell.navigation.session import NavigationSession

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  <n> | open <n>   open row n of the current listing
  id <entry-id>    open an entry by id
  back             go to the parent folder
  home             go to the home folder
  refresh          re-fetch the current folder
  help             show this text
  quit             exit"""


class CommandError(ValueError):
    """Raised for input the console cannot turn into an intent."""


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class ConsolePresenter:
    """Prints listings and photo paths to a text stream."""

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out or sys.stdout
        self.listing: DirectoryView | None = None

    def show_directory(self, view: DirectoryView) -> None:
        self.listing = view
        if not view.entries:
            print("  (empty folder)", file=self.out)
        for row, entry in enumerate(view.entries, start=1):
            marker = " " if entry.loaded else "*"
            print(f"{row:>4}{marker} {entry.name}  [{entry.id}]", file=self.out)

    def show_photo(self, view: PhotoView) -> None:
        # Rows of the previous listing are no longer on screen.
        self.listing = None
        print(f"photo {view.photo_id}: {view.path}", file=self.out)

    def show_error(self, error: ResolutionError) -> None:
        self.listing = None
        print(f"error: {error}", file=self.out)

    def row_id(self, row: int) -> int:
        """Translate a 1-based row of the current listing into an entry id."""
        if self.listing is None:
            raise CommandError("no listing on screen; use 'home' or 'back'")
        if not 1 <= row <= len(self.listing.entries):
            raise CommandError(f"row {row} is out of range")
        return self.listing.entries[row - 1].id


def dispatch(command: str, session: NavigationSession, presenter: ConsolePresenter) -> bool:
    """Turn one line of input into an intent.

    Returns:
        False when the user asked to quit, True otherwise.

    Raises:
        CommandError: If the line is not a valid command.
    """
    parts = command.split()
    if not parts:
        return True
    verb, args = parts[0].lower(), parts[1:]

    if verb in {"quit", "exit", "q"}:
        return False
    if verb == "help":
        print(HELP_TEXT, file=presenter.out)
    elif verb == "back":
        session.go_back()
    elif verb == "home":
        session.go_home()
    elif verb == "refresh":
        session.refresh_current()
    elif verb == "id":
        session.enter(_parse_int(args))
    elif verb == "open":
        session.enter(presenter.row_id(_parse_int(args)))
    elif verb.isdecimal():
        session.enter(presenter.row_id(int(verb)))
    else:
        raise CommandError(f"unknown command {verb!r}; type 'help'")
    return True


def _parse_int(args: list[str]) -> int:
    if len(args) != 1 or not args[0].isdecimal():
        raise CommandError("expected a single number")
    return int(args[0])


async def run_console(session: NavigationSession, presenter: ConsolePresenter) -> None:
    """Start the session and feed it commands from stdin until quit or EOF."""
    session.start()
    try:
        while True:
            await session.join()
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line:
                break
            try:
                if not dispatch(line, session, presenter):
                    break
            except CommandError as exc:
                print(f"error: {exc}", file=presenter.out)
    finally:
        await session.close()


def main() -> None:
    """Entry point for the ``photo-shell`` console script."""
    parser = argparse.ArgumentParser(
        prog="photo-shell",
        description="Browse photos stored in OneDrive like a local folder tree.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        config = load_config()
    except KeyError as exc:
        parser.error(f"missing environment variable {exc}")

    drive = onedrive_from_config(config)
    presenter = ConsolePresenter()
    session = NavigationSession(NavigationController(drive, home_id=config.home_id), presenter)
    print(HELP_TEXT)

    try:
        asyncio.run(run_console(session, presenter))
    except KeyboardInterrupt:
        logger.info("[main] interrupted")


if __name__ == "__main__":
    main()
