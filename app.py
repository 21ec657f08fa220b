# app.py
import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from config import Config, get_data_file_path
from navigation import Navigator, Screen
from store import PetShopStore
from ui.admin_panel import AdminPanel
from ui.auth_screens import LandingFrame, LoginFrame, MainMenuFrame, RegisterFrame
from ui.common import apply_theme
from ui.customer_panel import CustomerPanel

logger = logging.getLogger(__name__)

DATA_FILE = get_data_file_path()


class PetShopApp:
    """Swaps the single visible screen whenever the navigator changes state."""

    def __init__(self, root: tk.Tk, store: PetShopStore, navigator: Optional[Navigator] = None):
        self.root = root
        self.store = store
        self.navigator = navigator or Navigator()
        self.current: Optional[ttk.Frame] = None

        self.container = ttk.Frame(root)
        self.container.pack(fill="both", expand=True)

        self.navigator.subscribe(self.render)
        self.render(self.navigator.screen)

    def _build(self, screen: Screen) -> ttk.Frame:
        nav = self.navigator
        if screen is Screen.LANDING:
            return LandingFrame(self.container, nav)
        if screen is Screen.MAIN_MENU:
            return MainMenuFrame(self.container, nav)
        if screen is Screen.LOGIN:
            return LoginFrame(self.container, self.store, nav)
        if screen is Screen.REGISTER:
            return RegisterFrame(self.container, self.store, nav)
        if screen is Screen.ADMIN_PANEL:
            return AdminPanel(self.container, self.store, username=nav.username, on_logout=nav.logout)
        return CustomerPanel(self.container, self.store, username=nav.username, on_logout=nav.logout)

    def render(self, screen: Screen) -> None:
        if self.current is not None:
            self.current.destroy()
        self.current = self._build(screen)
        self.current.pack(fill="both", expand=True)


def main():
    logging.basicConfig(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT)

    root = tk.Tk()
    root.title(Config.APP_TITLE)
    root.geometry(Config.WINDOW_GEOMETRY)

    try:
        store = PetShopStore(DATA_FILE)
    except SQLAlchemyError as e:
        logger.exception("could not open database %s", DATA_FILE)
        messagebox.showerror("Startup error", f"Could not open the database.\n\n{e}")
        root.destroy()
        return

    style = ttk.Style(root)
    apply_theme(style, Config.THEME)

    PetShopApp(root, store)

    def on_close():
        store.close()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)
    root.mainloop()


if __name__ == "__main__":
    main()
