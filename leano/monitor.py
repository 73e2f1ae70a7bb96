#!/usr/bin/env python3
"""
Live dashboard polling

PollingLoop queries the router on a fixed interval and hands every reply
to a presentation callback. CancellationWatch listens for the quit key on
a background thread. The two share nothing but a threading.Event.
"""

import io
import logging
import select
import sys
import threading
from typing import Callable, Optional, TextIO

from .pages import Navigation, PageView, PaginationState, parse_navigation
from .router_api import INDEX_COMMAND, LeanoResponse, RouterAPI

log = logging.getLogger("leano.monitor")

QUIT_TOKEN = "q"

FrameCallback = Callable[[LeanoResponse, PageView], None]


class CancellationWatch:
    """
    Watches an input stream for the quit token on a daemon thread

    When a line equal to the quit token (case-insensitive) arrives, the
    event is set and the thread ends. With a PaginationState attached,
    "n" and "p" lines switch the page shown by the next frame. The thread
    is never joined.
    """

    def __init__(self, stream: Optional[TextIO] = None, quit_token: str = QUIT_TOKEN,
                 event: Optional[threading.Event] = None,
                 select_timeout: float = 0.25,
                 pages: Optional[PaginationState] = None):
        """
        Initialize watch

        Args:
            stream: Input stream (default: sys.stdin)
            quit_token: Line that requests cancellation
            event: Event to set on cancellation (a new one by default)
            select_timeout: Slice length when waiting on a file descriptor
            pages: Pagination state moved by n/p lines
        """
        self.stream = stream if stream is not None else sys.stdin
        self.quit_token = quit_token.lower()
        self.event = event or threading.Event()
        self.select_timeout = select_timeout
        self.pages = pages
        self._stopped = threading.Event()
        self._thread = None

    @property
    def cancelled(self) -> bool:
        return self.event.is_set()

    def start(self) -> 'CancellationWatch':
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name="leano-cancel-watch",
                                            daemon=True)
            self._thread.start()
        return self

    def cancel(self) -> None:
        """Request cancellation; repeated calls have no further effect"""
        self.event.set()

    def stop(self) -> None:
        """Stop listening without requesting cancellation"""
        self._stopped.set()

    def _run(self) -> None:
        while not self._stopped.is_set() and not self.event.is_set():
            line = self._readline()
            if line is None:
                continue
            if line == "":
                log.debug("Input closed, cancellation watch ending")
                return
            text = line.strip().lower()
            if text == self.quit_token:
                log.debug("Quit requested")
                self.event.set()
                return
            self._navigate(text)

    def _navigate(self, text: str) -> None:
        if self.pages is None:
            return
        navigation = parse_navigation(text)
        if navigation in (Navigation.NEXT, Navigation.PREVIOUS):
            view = self.pages.apply(navigation)
            log.debug("Switched to page %s", view.title)

    def _readline(self) -> Optional[str]:
        """
        Read one line, or return None if nothing arrived within a slice

        Streams without a usable file descriptor block in readline().
        A closed stream reads as EOF.
        """
        if getattr(self.stream, "closed", False):
            return ""

        try:
            fd = self.stream.fileno()
            ready, _, _ = select.select([fd], [], [], self.select_timeout)
        except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
            return self.stream.readline()

        if not ready or self._stopped.is_set():
            return None
        return self.stream.readline()


class PollingLoop:
    """Repeatedly executes a command and presents each reply"""

    def __init__(self, api: RouterAPI, on_frame: FrameCallback, interval: float = 3.0,
                 pages: Optional[PaginationState] = None,
                 cancel: Optional[threading.Event] = None,
                 command: str = INDEX_COMMAND):
        """
        Initialize loop

        Args:
            api: Authenticated API client
            on_frame: Called with (response, current page) for every reply
            interval: Seconds between polls
            pages: Pagination state (page shown in each frame)
            cancel: Event that stops the loop when set
            command: Command to poll
        """
        self.api = api
        self.on_frame = on_frame
        self.interval = interval
        self.pages = pages or PaginationState()
        self.cancel = cancel or threading.Event()
        self.command = command

    def stop(self) -> None:
        self.cancel.set()

    def run(self) -> int:
        """
        Poll until cancelled

        Any error raised by execute() or on_frame ends the loop and
        propagates to the caller.

        Returns:
            Number of frames presented
        """
        frames = 0
        log.info("Polling %r every %ss", self.command, self.interval)

        while not self.cancel.is_set():
            response = self.api.execute(self.command)
            self.on_frame(response, self.pages.current)
            frames += 1

            # Sleep, waking early on cancellation
            if self.cancel.wait(self.interval):
                break

        log.info("Polling stopped after %d frame(s)", frames)
        return frames


def watch_and_poll(api: RouterAPI, on_frame: FrameCallback, interval: float = 3.0,
                   pages: Optional[PaginationState] = None,
                   stream: Optional[TextIO] = None) -> int:
    """
    Run a polling loop until the user types the quit token

    Returns:
        Number of frames presented
    """
    pages = pages or PaginationState()
    watch = CancellationWatch(stream, pages=pages)
    loop = PollingLoop(api, on_frame, interval=interval, pages=pages, cancel=watch.event)

    watch.start()
    try:
        return loop.run()
    finally:
        watch.stop()
