import pytest

from models import UserRole
from navigation import Navigator, Screen


def test_starts_on_landing():
    assert Navigator().screen is Screen.LANDING


def test_admin_flow_and_logout():
    seen = []
    nav = Navigator()
    nav.subscribe(seen.append)

    nav.go(Screen.MAIN_MENU)
    nav.go(Screen.LOGIN)
    nav.login_succeeded("root", UserRole.ADMIN)
    assert nav.screen is Screen.ADMIN_PANEL
    assert nav.username == "root"

    nav.logout()
    assert nav.screen is Screen.MAIN_MENU
    assert nav.username == ""
    assert nav.role is None
    assert seen == [Screen.MAIN_MENU, Screen.LOGIN, Screen.ADMIN_PANEL, Screen.MAIN_MENU]


def test_customer_login_routes_to_customer_panel():
    nav = Navigator(start=Screen.LOGIN)
    nav.login_succeeded("alice", UserRole.CUSTOMER)
    assert nav.screen is Screen.CUSTOMER_PANEL
    assert nav.logged_in


def test_register_returns_to_menu():
    nav = Navigator(start=Screen.MAIN_MENU)
    nav.go(Screen.REGISTER)
    nav.go(Screen.MAIN_MENU)
    assert nav.screen is Screen.MAIN_MENU


def test_illegal_transition():
    nav = Navigator()
    with pytest.raises(ValueError):
        nav.go(Screen.LOGIN)
    assert nav.screen is Screen.LANDING


def test_panels_require_login():
    nav = Navigator(start=Screen.LOGIN)
    with pytest.raises(ValueError):
        nav.go(Screen.ADMIN_PANEL)
