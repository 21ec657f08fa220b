from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from models import UserRole

logger = logging.getLogger(__name__)


class Screen(Enum):
    LANDING = "landing"
    MAIN_MENU = "main_menu"
    LOGIN = "login"
    REGISTER = "register"
    ADMIN_PANEL = "admin_panel"
    CUSTOMER_PANEL = "customer_panel"


class CustomerPage(Enum):
    HOME = "Home"
    BROWSE = "Browse"
    PURCHASES = "My Purchases"
    CART = "Cart"


TRANSITIONS: Dict[Screen, FrozenSet[Screen]] = {
    Screen.LANDING: frozenset({Screen.MAIN_MENU}),
    Screen.MAIN_MENU: frozenset({Screen.LOGIN, Screen.REGISTER}),
    Screen.LOGIN: frozenset({Screen.MAIN_MENU, Screen.ADMIN_PANEL, Screen.CUSTOMER_PANEL}),
    Screen.REGISTER: frozenset({Screen.MAIN_MENU}),
    Screen.ADMIN_PANEL: frozenset({Screen.MAIN_MENU}),
    Screen.CUSTOMER_PANEL: frozenset({Screen.MAIN_MENU}),
}


class Navigator:
    """
    Current screen plus the logged-in session. Listeners are called with the
    new screen after every transition so the window can redraw.
    """

    def __init__(self, start: Screen = Screen.LANDING):
        self.screen = start
        self.username = ""
        self.role: Optional[UserRole] = None
        self._listeners: List[Callable[[Screen], None]] = []

    @property
    def logged_in(self) -> bool:
        return self.role is not None

    def subscribe(self, callback: Callable[[Screen], None]) -> None:
        self._listeners.append(callback)

    def go(self, screen: Screen) -> None:
        if screen not in TRANSITIONS[self.screen]:
            raise ValueError(f"cannot go from {self.screen.name} to {screen.name}")
        if screen in (Screen.ADMIN_PANEL, Screen.CUSTOMER_PANEL) and not self.logged_in:
            raise ValueError("login required")
        logger.debug("screen %s -> %s", self.screen.name, screen.name)
        self.screen = screen
        for cb in list(self._listeners):
            cb(screen)

    def login_succeeded(self, username: str, role: UserRole) -> None:
        self.username = username
        self.role = UserRole(role)
        self.go(Screen.ADMIN_PANEL if self.role is UserRole.ADMIN else Screen.CUSTOMER_PANEL)

    def logout(self) -> None:
        logger.info("logout %r", self.username)
        self.username = ""
        self.role = None
        self.go(Screen.MAIN_MENU)
