# ui/customer_panel.py
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from browse import ALL_SPECIES, filter_animals, species_options
from cart import Cart, buy_now, checkout
from models import Animal, Transaction
from navigation import CustomerPage
from store import AnimalUnavailableError
from ui.common import animal_values, make_animal_tree, selected_id
from utils import price_str, species_emoji

logger = logging.getLogger(__name__)

SIDEBAR_BG = "#E0F2F1"
SIDEBAR_SELECTED = "#80CBC4"
ACCENT = "#00695C"

PAGE_ICONS = {
    CustomerPage.HOME: "\U0001F3E0",
    CustomerPage.BROWSE: "\U0001F431",
    CustomerPage.PURCHASES: "\U0001F4B0",
    CustomerPage.CART: "\U0001F4B3",
}

BROWSE_COLUMNS = [
    ("emoji", 40, ""),
    ("name", 180, "Name"),
    ("species", 130, "Species"),
    ("age", 60, "Age"),
    ("price", 110, "Price"),
    ("status", 100, "Status"),
]


class CustomerPanel(ttk.Frame):
    """
    Sidebar navigation over Home / Browse / Cart / My Purchases. The cart and
    the session's transactions live here so they survive page switches; each
    page re-fetches its own snapshot when shown.
    """

    def __init__(self, parent, store, *, username: str, on_logout):
        super().__init__(parent)
        self.store = store
        self.username = username
        self.cart = Cart()
        self.transactions: List[Transaction] = []
        self.page = CustomerPage.HOME
        self.page_frame: Optional[ttk.Frame] = None

        self.sidebar = tk.Frame(self, bg=SIDEBAR_BG, width=220, padx=12, pady=12)
        self.sidebar.pack(side="left", fill="y")
        self.sidebar.pack_propagate(False)

        tk.Label(self.sidebar, text="\U0001F436 Pet Shop", bg=SIDEBAR_BG, fg=ACCENT, font=("", 18, "bold")).pack(pady=(8, 2))
        tk.Label(self.sidebar, text=f"Hello, {username}!", bg=SIDEBAR_BG, fg="#00897B", font=("", 11)).pack(pady=(0, 16))
        tk.Label(self.sidebar, text="Navigation", bg=SIDEBAR_BG, fg=ACCENT, font=("", 11, "bold")).pack(anchor="w", pady=(0, 4))

        self.menu_items = {}
        for page in CustomerPage:
            lbl = tk.Label(self.sidebar, bg=SIDEBAR_BG, fg=ACCENT, anchor="w", padx=8, pady=6, cursor="hand2", font=("", 12))
            lbl.pack(fill="x", pady=2)
            lbl.bind("<Button-1>", lambda e, p=page: self.show_page(p))
            self.menu_items[page] = lbl

        ttk.Button(self.sidebar, text="Logout", command=on_logout).pack(side="bottom", fill="x", pady=8)

        self.content = ttk.Frame(self)
        self.content.pack(side="left", fill="both", expand=True, padx=12, pady=12)

        self.show_page(CustomerPage.HOME)

    def _menu_text(self, page: CustomerPage) -> str:
        text = f"{PAGE_ICONS[page]} {page.value}"
        if page is CustomerPage.CART and len(self.cart):
            text += f" ({len(self.cart)})"
        return text

    def refresh_sidebar(self):
        for page, lbl in self.menu_items.items():
            selected = page is self.page
            lbl.configure(
                text=self._menu_text(page),
                bg=SIDEBAR_SELECTED if selected else SIDEBAR_BG,
                fg="#004D40" if selected else ACCENT,
            )

    def show_page(self, page: CustomerPage):
        if self.page_frame is not None:
            self.page_frame.destroy()
        self.page = page
        if page is CustomerPage.HOME:
            frame = HomePage(self.content, panel=self)
        elif page is CustomerPage.BROWSE:
            frame = BrowsePage(self.content, self.store, panel=self)
        elif page is CustomerPage.CART:
            frame = CartPage(self.content, self.store, panel=self)
        else:
            frame = PurchasesPage(self.content, self.store, panel=self)
        frame.pack(fill="both", expand=True)
        self.page_frame = frame
        self.refresh_sidebar()


class HomePage(ttk.Frame):
    def __init__(self, parent, panel: CustomerPanel):
        super().__init__(parent)
        box = ttk.Frame(self)
        box.place(relx=0.5, rely=0.4, anchor="center")
        ttk.Label(box, text="\U0001F436 Welcome to Pet Shop \U0001F431", font=("", 22, "bold"), foreground="#00897B").pack(pady=8)
        ttk.Label(box, text="Find your new best friend today!", font=("", 13), foreground=ACCENT).pack(pady=(0, 20))
        ttk.Button(box, text="Start Browsing", command=lambda: panel.show_page(CustomerPage.BROWSE)).pack()


class BrowsePage(ttk.Frame):
    def __init__(self, parent, store, panel: CustomerPanel):
        super().__init__(parent)
        self.store = store
        self.panel = panel
        self.all_animals: List[Animal] = []
        self.filtered_animals: List[Animal] = []

        ttk.Label(self, text="\U0001F431 Browse Animals", font=("", 18, "bold"), foreground="#00897B").pack(anchor="w", pady=(0, 8))

        top = ttk.Frame(self)
        top.pack(fill="x", pady=4)

        self.var_query = tk.StringVar(value="")
        self.var_species = tk.StringVar(value=ALL_SPECIES)

        ttk.Label(top, text="\U0001F50D Search by name or species").grid(row=0, column=0, sticky="w", padx=4, pady=2)
        ttk.Entry(top, textvariable=self.var_query, width=34).grid(row=0, column=1, sticky="w", padx=4, pady=2)
        ttk.Label(top, text="Category").grid(row=0, column=2, sticky="w", padx=(16, 4), pady=2)
        self.cb_species = ttk.Combobox(top, textvariable=self.var_species, state="readonly", width=18)
        self.cb_species.grid(row=0, column=3, sticky="w", padx=4, pady=2)

        self.var_query.trace_add("write", lambda *_: self.apply_filter())
        self.cb_species.bind("<<ComboboxSelected>>", lambda e: self.apply_filter())

        table = ttk.Frame(self)
        table.pack(fill="both", expand=True, pady=6)
        self.tree = make_animal_tree(table, columns=BROWSE_COLUMNS, height=16)
        self.tree.bind("<<TreeviewSelect>>", lambda e: self._sync_buttons())
        self.tree.bind("<Double-1>", lambda e: self.on_details())

        bot = ttk.Frame(self)
        bot.pack(fill="x", pady=4)
        self.btn_add = ttk.Button(bot, text="Add to Cart", command=self.on_add_to_cart)
        self.btn_add.pack(side="left", padx=4)
        ttk.Button(bot, text="Details / Buy Now", command=self.on_details).pack(side="left", padx=4)
        self.btn_cart = ttk.Button(bot, text="", command=lambda: panel.show_page(CustomerPage.CART))
        self.btn_cart.pack(side="right", padx=4)

        self.refresh()

    def _selected(self) -> Optional[Animal]:
        aid = selected_id(self.tree)
        for a in self.filtered_animals:
            if a.id == aid:
                return a
        return None

    def _sync_buttons(self):
        animal = self._selected()
        if animal is not None and animal.id in self.panel.cart:
            self.btn_add.configure(text="In Cart", state="disabled")
        else:
            ok = animal is not None and animal.is_available
            self.btn_add.configure(text="Add to Cart", state="normal" if ok else "disabled")
        self.btn_cart.configure(text=f"Go to Cart ({len(self.panel.cart)})")

    def refresh(self):
        try:
            self.all_animals = self.store.list_available_animals()
        except SQLAlchemyError as e:
            logger.warning("could not load animals: %s", e)
            messagebox.showerror("Error", f"Could not load animals.\n\n{e}", parent=self)
            self.all_animals = []
        options = species_options(self.all_animals)
        self.cb_species["values"] = options
        if self.var_species.get() not in options:
            self.var_species.set(ALL_SPECIES)
        self.apply_filter()

    def apply_filter(self):
        self.filtered_animals = filter_animals(self.all_animals, self.var_query.get(), self.var_species.get())
        self.tree.delete(*self.tree.get_children())
        for a in self.filtered_animals:
            self.tree.insert("", "end", iid=str(a.id), values=animal_values(a, BROWSE_COLUMNS))
        self._sync_buttons()

    def on_add_to_cart(self):
        animal = self._selected()
        if animal is None or not animal.is_available:
            return
        self.panel.cart.add(animal)
        self._sync_buttons()
        self.panel.refresh_sidebar()

    def on_details(self):
        animal = self._selected()
        if animal is None:
            return
        AnimalDetailsDialog(self, animal, on_buy=self.on_buy_now)

    def on_buy_now(self, animal: Animal):
        try:
            tx = buy_now(self.store, animal, self.panel.username)
        except (AnimalUnavailableError, SQLAlchemyError) as e:
            logger.warning("buy now of #%s failed: %s", animal.id, e)
            messagebox.showerror("Purchase failed", str(e), parent=self)
            self.refresh()
            return
        self.panel.transactions.append(tx)
        self.panel.cart.discard([animal.id])
        self.refresh()
        self.panel.refresh_sidebar()
        messagebox.showinfo(
            "Purchase Successful",
            f"You bought {tx.animal.name} ({tx.animal.species}).\n\n"
            f"Total: {price_str(tx.total)}\n{tx.date:%Y-%m-%d %H:%M:%S}",
            parent=self,
        )


class AnimalDetailsDialog(tk.Toplevel):
    def __init__(self, parent, animal: Animal, on_buy):
        super().__init__(parent)
        self.title("Animal Details")
        self.resizable(False, False)
        self.transient(parent.winfo_toplevel())
        self.configure(bg=SIDEBAR_BG)

        frm = tk.Frame(self, bg=SIDEBAR_BG, padx=20, pady=16)
        frm.pack(fill="both", expand=True)
        tk.Label(frm, text=species_emoji(animal.species), bg=SIDEBAR_BG, font=("", 36)).pack()
        for text in (
            f"Name: {animal.name}",
            f"Species: {animal.species}",
            f"Age: {animal.age}",
            f"Price: {price_str(animal.price)}",
            f"Status: {animal.status}",
        ):
            tk.Label(frm, text=text, bg=SIDEBAR_BG, anchor="w").pack(fill="x")

        btns = tk.Frame(frm, bg=SIDEBAR_BG)
        btns.pack(fill="x", pady=(12, 0))
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side="right", padx=4)
        buy = ttk.Button(btns, text="Buy Now", command=lambda: self._buy(on_buy, animal))
        buy.pack(side="right", padx=4)
        if not animal.is_available:
            buy.configure(state="disabled")
        self.grab_set()

    def _buy(self, on_buy, animal: Animal):
        self.destroy()
        on_buy(animal)


class CartPage(ttk.Frame):
    COLUMNS = [
        ("check", 40, ""),
        ("emoji", 40, ""),
        ("name", 180, "Name"),
        ("species", 130, "Species"),
        ("age", 60, "Age"),
        ("price", 110, "Price"),
    ]

    def __init__(self, parent, store, panel: CustomerPanel):
        super().__init__(parent)
        self.store = store
        self.panel = panel
        self.cart = panel.cart

        ttk.Label(self, text="\U0001F4B3 Cart", font=("", 18, "bold"), foreground="#00897B").pack(anchor="w", pady=(0, 8))

        self.var_empty = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.var_empty, foreground="gray").pack(anchor="w")

        table = ttk.Frame(self)
        table.pack(fill="both", expand=True, pady=6)
        self.tree = make_animal_tree(table, columns=self.COLUMNS, height=14)
        self.tree.bind("<ButtonRelease-1>", self.on_click)
        self.tree.bind("<space>", lambda e: self.on_toggle_selected_row())

        bot = ttk.Frame(self)
        bot.pack(fill="x", pady=4)
        self.var_total = tk.StringVar(value="")
        ttk.Label(bot, textvariable=self.var_total, font=("", 13, "bold"), foreground="#388E3C").pack(side="left", padx=4)
        self.btn_buy = ttk.Button(bot, text="Buy Selected", command=self.on_buy_selected)
        self.btn_buy.pack(side="right", padx=4)
        ttk.Button(bot, text="Remove Unchecked", command=self.on_remove_unchecked).pack(side="right", padx=4)

        self.refresh()

    def on_click(self, event):
        if self.tree.identify_region(event.x, event.y) != "cell":
            return
        row = self.tree.identify_row(event.y)
        if row:
            self.cart.toggle(int(row))
            self.refresh()

    def on_toggle_selected_row(self):
        aid = selected_id(self.tree)
        if aid is not None:
            self.cart.toggle(aid)
            self.refresh()

    def on_remove_unchecked(self):
        self.cart.remove_unchecked()
        self.refresh()
        self.panel.refresh_sidebar()

    def on_buy_selected(self):
        try:
            txs = checkout(self.store, self.cart, self.panel.username)
        except AnimalUnavailableError as e:
            logger.warning("checkout for %s rejected: %s", self.panel.username, e)
            messagebox.showerror("Purchase failed", f"{e}.\n\nNothing was bought. Remove it from the cart and try again.", parent=self)
            self.refresh()
            return
        except (ValueError, SQLAlchemyError) as e:
            messagebox.showerror("Purchase failed", str(e), parent=self)
            return

        self.panel.transactions.extend(txs)
        total = sum(tx.total for tx in txs)
        messagebox.showinfo(
            "Purchase Successful",
            f"You have bought the selected animals!\n\nTotal: {price_str(total)}",
            parent=self,
        )
        self.panel.show_page(CustomerPage.PURCHASES)

    def refresh(self):
        self.tree.delete(*self.tree.get_children())
        for ln in self.cart:
            a = ln.animal
            self.tree.insert("", "end", iid=str(a.id), values=(
                "☑" if ln.selected else "☐",
                species_emoji(a.species),
                a.name,
                a.species,
                a.age,
                price_str(a.price),
            ))
        self.var_empty.set("" if len(self.cart) else "Your cart is empty.")
        self.var_total.set(f"Total: {price_str(self.cart.total())}")
        self.btn_buy.configure(state="normal" if self.cart.selected_animals() else "disabled")


class PurchasesPage(ttk.Frame):
    COLUMNS = [
        ("emoji", 40, ""),
        ("name", 180, "Name"),
        ("species", 130, "Species"),
        ("age", 60, "Age"),
        ("price", 110, "Price"),
        ("status", 100, "Status"),
    ]

    def __init__(self, parent, store, panel: CustomerPanel):
        super().__init__(parent)
        self.store = store
        self.panel = panel

        ttk.Label(self, text="\U0001F4B0 My Purchases", font=("", 18, "bold"), foreground="#00897B").pack(anchor="w", pady=(0, 8))

        table = ttk.Frame(self)
        table.pack(fill="both", expand=True, pady=6)
        self.tree = make_animal_tree(table, columns=self.COLUMNS, height=16)

        self.var_summary = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.var_summary, font=("", 12, "bold")).pack(anchor="w", pady=4)

        self.refresh()

    def refresh(self):
        try:
            owned = self.store.list_animals_by_owner(self.panel.username)
        except SQLAlchemyError as e:
            logger.warning("could not load purchases: %s", e)
            messagebox.showerror("Error", f"Could not load purchases.\n\n{e}", parent=self)
            owned = []

        self.tree.delete(*self.tree.get_children())
        for a in owned:
            self.tree.insert("", "end", iid=str(a.id), values=animal_values(a, self.COLUMNS))

        if not owned:
            self.var_summary.set("You have not bought any animals yet.")
            return
        spent = sum(a.price for a in owned)
        summary = f"{len(owned)} animal(s), total spent {price_str(spent)}"
        if self.panel.transactions:
            summary += f"  |  this session: {len(self.panel.transactions)} purchase(s), {price_str(sum(t.total for t in self.panel.transactions))}"
        self.var_summary.set(summary)
