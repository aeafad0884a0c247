"""Keyboard input: cbreak terminal mode and quit-key detection."""

import asyncio
import contextlib
import logging
import os
import sys
import termios
import tty
from collections.abc import Callable, Generator

from barping.ui.constants import EXIT_KEYS

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 32


@contextlib.contextmanager
def terminal_cbreak_mode(fd: int | None = None) -> Generator[None, None, None]:
    """Put a terminal into cbreak mode and restore it on exit.

    Keys arrive one at a time without echo, while output processing stays
    on so newlines still return the carriage.

    Args:
        fd: Terminal file descriptor. Defaults to ``sys.stdin.fileno()``.
    """
    if fd is None:
        fd = sys.stdin.fileno()
    try:
        old_settings = termios.tcgetattr(fd)
    except termios.error:
        # Not a real terminal (pipe or test double)
        yield
        return
    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


class InputController:
    """Watches stdin and calls on_quit when a quit key arrives."""

    def __init__(self, on_quit: Callable[[], None], fd: int | None = None):
        """Initialize controller.

        Args:
            on_quit: Called once per chunk containing a quit key
            fd: File descriptor to read keys from (defaults to stdin)
        """
        self.on_quit = on_quit
        self.fd = fd
        self._attached_loop: asyncio.AbstractEventLoop | None = None

    def feed(self, data: str) -> bool:
        """Handle a chunk of key input.

        Returns:
            True if the chunk contained a quit key
        """
        if any(key in data for key in EXIT_KEYS):
            logger.info("Quit key received")
            self.on_quit()
            return True
        return False

    def attach(self, loop: asyncio.AbstractEventLoop) -> None:
        """Start reading keys on the event loop."""
        if self.fd is None:
            self.fd = sys.stdin.fileno()
        loop.add_reader(self.fd, self._on_readable)
        self._attached_loop = loop

    def detach(self) -> None:
        if self._attached_loop is not None:
            self._attached_loop.remove_reader(self.fd)
            self._attached_loop = None

    def _on_readable(self) -> None:
        data = os.read(self.fd, READ_CHUNK_SIZE)
        if not data:
            # EOF on stdin; nothing more will arrive
            self.detach()
            return
        self.feed(data.decode("utf-8", errors="ignore"))
