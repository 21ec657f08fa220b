# ui/common.py
from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
from typing import Callable, Optional

from forms import AnimalForm, validate_animal_form
from models import Animal, AnimalStatus, UserRole
from utils import price_str, species_emoji

ROLE_VALUES = [r.display for r in UserRole]
STATUS_VALUES = [s.value for s in AnimalStatus]

ANIMAL_COLUMNS = [
    ("id", 50, "ID"),
    ("name", 180, "Name"),
    ("species", 130, "Species"),
    ("age", 60, "Age"),
    ("price", 110, "Price"),
    ("status", 100, "Status"),
    ("owner", 140, "Owner"),
]


def apply_theme(style: ttk.Style, theme_name: str) -> None:
    names = style.theme_names()
    if theme_name and theme_name in names:
        style.theme_use(theme_name)


def confirm_delete(parent, animal: Animal) -> bool:
    return messagebox.askyesno(
        "Delete Animal",
        f"Delete {animal.name} ({animal.species})?\n\nThis cannot be undone.",
        parent=parent,
    )


def animal_values(animal: Animal, columns=None) -> tuple:
    cols = [c for c, _, _ in (columns or ANIMAL_COLUMNS)]
    row = {
        "id": animal.id,
        "emoji": species_emoji(animal.species),
        "name": animal.name,
        "species": animal.species,
        "age": animal.age,
        "price": price_str(animal.price),
        "status": animal.status,
        "owner": animal.owner or "",
    }
    return tuple(row[c] for c in cols)


def make_animal_tree(parent, columns=None, height: int = 16) -> ttk.Treeview:
    columns = columns or ANIMAL_COLUMNS
    tree = ttk.Treeview(parent, columns=[c for c, _, _ in columns], show="headings", height=height, selectmode="browse")
    for c, w, t in columns:
        tree.heading(c, text=t)
        tree.column(c, width=w, anchor="w")
    sb = ttk.Scrollbar(parent, orient="vertical", command=tree.yview)
    tree.configure(yscrollcommand=sb.set)
    tree.pack(side="left", fill="both", expand=True, padx=(4, 0), pady=4)
    sb.pack(side="right", fill="y", padx=(0, 4), pady=4)
    return tree


def selected_id(tree: ttk.Treeview) -> Optional[int]:
    sel = tree.selection()
    if not sel:
        return None
    return int(sel[0])


class MessageLabel(ttk.Label):
    """Inline status text: green for success, red for errors."""

    def show(self, text: str, ok: bool = False) -> None:
        self.configure(text=text, foreground="#388E3C" if ok else "red")

    def clear(self) -> None:
        self.configure(text="")


class AnimalDialog(tk.Toplevel):
    """
    Add / Edit dialog. `on_confirm` receives a validated AnimalForm; the dialog
    stays open while the input is invalid.
    """

    def __init__(self, parent, title: str, on_confirm: Callable[[AnimalForm], None], animal: Optional[Animal] = None):
        super().__init__(parent)
        self.title(title)
        self.resizable(False, False)
        self.transient(parent.winfo_toplevel())
        self.on_confirm = on_confirm

        self.var_name = tk.StringVar(value=animal.name if animal else "")
        self.var_species = tk.StringVar(value=animal.species if animal else "")
        self.var_age = tk.StringVar(value=str(animal.age) if animal else "")
        self.var_price = tk.StringVar(value=str(animal.price) if animal else "")
        self.var_status = tk.StringVar(value=animal.status if animal else AnimalStatus.AVAILABLE.value)

        frm = ttk.Frame(self, padding=12)
        frm.pack(fill="both", expand=True)

        for i, (label, var) in enumerate([
            ("Name", self.var_name),
            ("Species", self.var_species),
            ("Age", self.var_age),
            ("Price", self.var_price),
        ]):
            ttk.Label(frm, text=label).grid(row=i, column=0, sticky="w", padx=4, pady=3)
            ttk.Entry(frm, textvariable=var, width=30).grid(row=i, column=1, sticky="w", padx=4, pady=3)

        ttk.Label(frm, text="Status").grid(row=4, column=0, sticky="w", padx=4, pady=3)
        ttk.Combobox(frm, textvariable=self.var_status, values=STATUS_VALUES, state="readonly", width=14)\
            .grid(row=4, column=1, sticky="w", padx=4, pady=3)

        self.msg = MessageLabel(frm, text="")
        self.msg.grid(row=5, column=0, columnspan=2, sticky="w", padx=4, pady=3)

        btns = ttk.Frame(frm)
        btns.grid(row=6, column=0, columnspan=2, sticky="e", pady=(6, 0))
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side="right", padx=4)
        ttk.Button(btns, text="Save", command=self.on_save).pack(side="right", padx=4)

        self.bind("<Return>", lambda e: self.on_save())
        self.bind("<Escape>", lambda e: self.destroy())
        self.grab_set()

    def on_save(self):
        form, error = validate_animal_form(
            self.var_name.get(),
            self.var_species.get(),
            self.var_age.get(),
            self.var_price.get(),
            self.var_status.get(),
        )
        if error:
            self.msg.show(error)
            return
        self.on_confirm(form)
        self.destroy()
