#!/usr/bin/env python3
"""
Dashboard pagination

The dashboard is split into a fixed, cyclic sequence of pages. Moving past
the last page wraps to the first and vice versa.
"""

from enum import Enum
from typing import Optional


class PageView(Enum):
    """Dashboard pages, in display order"""

    DATA_USAGE = "Data Usage"
    CONNECTION = "Connection"
    NETWORK = "Network"
    CELL_INFO = "Cell Info"
    IP_CONFIG = "IP Config"
    SYSTEM = "System"

    @property
    def title(self) -> str:
        return self.value


PAGES = list(PageView)


class Navigation(Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    QUIT = "quit"


_ALIASES = {
    "n": Navigation.NEXT,
    "next": Navigation.NEXT,
    "p": Navigation.PREVIOUS,
    "prev": Navigation.PREVIOUS,
    "previous": Navigation.PREVIOUS,
    "q": Navigation.QUIT,
    "quit": Navigation.QUIT,
}


def parse_navigation(text: str) -> Optional[Navigation]:
    """Map user input to a Navigation, or None if it is not one"""
    return _ALIASES.get(text.strip().lower())


class PaginationState:
    """Current dashboard page, advanced by Next/Previous/Quit"""

    def __init__(self, current: PageView = PageView.DATA_USAGE):
        self.current = current
        self.finished = False

    @property
    def position(self) -> int:
        """1-based page number"""
        return PAGES.index(self.current) + 1

    @property
    def total(self) -> int:
        return len(PAGES)

    def next(self) -> PageView:
        self.current = PAGES[self.position % self.total]
        return self.current

    def previous(self) -> PageView:
        self.current = PAGES[(self.position - 2) % self.total]
        return self.current

    def apply(self, navigation: Navigation) -> PageView:
        if navigation is Navigation.NEXT:
            self.next()
        elif navigation is Navigation.PREVIOUS:
            self.previous()
        else:
            self.finished = True
        return self.current

    def handle(self, text: str) -> Optional[Navigation]:
        """
        Apply a typed command

        Returns:
            The Navigation applied, or None for an invalid command
            (state is left unchanged)
        """
        navigation = parse_navigation(text)
        if navigation is not None:
            self.apply(navigation)
        return navigation
