# ui/admin_panel.py
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Dict, List, Optional

import matplotlib
matplotlib.use("TkAgg")
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure
from sqlalchemy.exc import SQLAlchemyError

from forms import AnimalForm
from models import Animal, AnimalStatus
from store import owner_after_edit
from ui.common import (
    AnimalDialog,
    animal_values,
    confirm_delete,
    make_animal_tree,
    selected_id,
)

logger = logging.getLogger(__name__)


class AdminPanel(ttk.Frame):
    def __init__(self, parent, store, *, username: str, on_logout):
        super().__init__(parent)
        self.store = store
        self.username = username

        header = ttk.Frame(self)
        header.pack(fill="x", padx=12, pady=(12, 4))
        ttk.Label(header, text="Admin Panel", font=("", 20, "bold")).pack(side="left")
        ttk.Button(header, text="Logout", command=on_logout).pack(side="right", padx=4)
        ttk.Label(header, text=f"Welcome, {username}", font=("", 11, "bold")).pack(side="right", padx=12)

        nb = ttk.Notebook(self)
        nb.pack(fill="both", expand=True, padx=8, pady=8)

        self.tab_animals = AnimalListFrame(nb, store, panel=self)
        self.tab_stats = AnimalStatsFrame(nb, store)

        nb.add(self.tab_animals, text="Animals")
        nb.add(self.tab_stats, text="Statistics")

        self.nb = nb
        self.refresh_all()

    def refresh_all(self):
        self.tab_animals.refresh()
        self.tab_stats.refresh()


class AnimalListFrame(ttk.Frame):
    def __init__(self, parent, store, panel: AdminPanel):
        super().__init__(parent)
        self.store = store
        self.panel = panel
        self.animals: List[Animal] = []

        ops = ttk.Frame(self)
        ops.pack(fill="x", padx=4, pady=6)
        ttk.Button(ops, text="+ Add Animal", command=self.on_add).pack(side="left", padx=4)
        self.btn_edit = ttk.Button(ops, text="Modify", command=self.on_edit)
        self.btn_edit.pack(side="left", padx=4)
        self.btn_delete = ttk.Button(ops, text="Delete", command=self.on_delete)
        self.btn_delete.pack(side="left", padx=4)
        self.btn_bought = ttk.Button(ops, text="Mark as Bought", command=self.on_mark_bought)
        self.btn_bought.pack(side="left", padx=4)
        ttk.Button(ops, text="Refresh", command=self.panel.refresh_all).pack(side="right", padx=4)

        self.var_count = tk.StringVar(value="")
        ttk.Label(ops, textvariable=self.var_count).pack(side="right", padx=12)

        table = ttk.LabelFrame(self, text="Animals (select a row)")
        table.pack(fill="both", expand=True, padx=4, pady=4)
        self.tree = make_animal_tree(table, height=18)
        self.tree.bind("<<TreeviewSelect>>", lambda e: self._sync_buttons())
        self.tree.bind("<Double-1>", lambda e: self.on_edit())

    def _selected(self) -> Optional[Animal]:
        aid = selected_id(self.tree)
        for a in self.animals:
            if a.id == aid:
                return a
        return None

    def _sync_buttons(self):
        animal = self._selected()
        state = "normal" if animal else "disabled"
        self.btn_edit.configure(state=state)
        self.btn_delete.configure(state=state)
        self.btn_bought.configure(state="normal" if animal and animal.is_available else "disabled")

    def _after_change(self):
        self.panel.refresh_all()

    def on_add(self):
        def save(form: AnimalForm):
            try:
                self.store.insert_animal(form.name, form.species, form.age, form.price, form.status)
            except SQLAlchemyError as e:
                logger.warning("insert failed: %s", e)
                messagebox.showerror("Error", f"Could not add animal.\n\n{e}", parent=self)
            self._after_change()

        AnimalDialog(self, "Add Animal", save)

    def on_edit(self):
        animal = self._selected()
        if animal is None:
            messagebox.showwarning("Modify", "Please select an animal", parent=self)
            return

        def save(form: AnimalForm):
            owner = owner_after_edit(form.status, animal.owner, self.panel.username)
            try:
                self.store.update_animal(animal.id, form.name, form.species, form.age, form.price, form.status, owner)
            except SQLAlchemyError as e:
                logger.warning("update of #%s failed: %s", animal.id, e)
                messagebox.showerror("Error", f"Could not update animal.\n\n{e}", parent=self)
            self._after_change()

        AnimalDialog(self, "Edit Animal", save, animal=animal)

    def on_delete(self):
        animal = self._selected()
        if animal is None:
            messagebox.showwarning("Delete", "Please select an animal", parent=self)
            return
        if not confirm_delete(self, animal):
            return
        try:
            self.store.delete_animal(animal.id)
        except SQLAlchemyError as e:
            logger.warning("delete of #%s failed: %s", animal.id, e)
            messagebox.showerror("Error", f"Could not delete animal.\n\n{e}", parent=self)
        self._after_change()

    def on_mark_bought(self):
        animal = self._selected()
        if animal is None or not animal.is_available:
            return
        try:
            self.store.mark_bought(animal.id, self.panel.username)
        except SQLAlchemyError as e:
            logger.warning("mark bought of #%s failed: %s", animal.id, e)
            messagebox.showerror("Error", f"Could not update animal.\n\n{e}", parent=self)
        self._after_change()

    def refresh(self):
        try:
            self.animals = self.store.list_animals()
        except SQLAlchemyError as e:
            logger.warning("could not load animals: %s", e)
            messagebox.showerror("Error", f"Could not load animals.\n\n{e}", parent=self)
            self.animals = []

        self.tree.delete(*self.tree.get_children())
        for a in self.animals:
            self.tree.insert("", "end", iid=str(a.id), values=animal_values(a))
        available = sum(1 for a in self.animals if a.is_available)
        self.var_count.set(f"{len(self.animals)} animals, {available} available")
        self._sync_buttons()


class AnimalStatsFrame(ttk.Frame):
    def __init__(self, parent, store):
        super().__init__(parent)
        self.store = store

        top = ttk.Frame(self)
        top.pack(fill="x", padx=8, pady=6)
        ttk.Label(top, text="Animals per species").pack(side="left", padx=4)
        ttk.Button(top, text="Refresh", command=self.refresh).pack(side="right", padx=4)

        fig = Figure(figsize=(9, 5), dpi=100)
        self.ax = fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(fig, master=self)
        self.canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=8)
        self.fig = fig

    def refresh(self):
        try:
            rows = self.store.count_by_species_and_status()
        except SQLAlchemyError as e:
            logger.warning("could not load statistics: %s", e)
            rows = []
        self.plot(rows)

    def plot(self, rows):
        self.ax.clear()
        if not rows:
            self.ax.set_title("No animals yet")
            self.canvas.draw()
            return

        species: List[str] = []
        counts: Dict[str, Dict[str, int]] = {s.value: {} for s in AnimalStatus}
        for sp, st, n in rows:
            if sp not in species:
                species.append(sp)
            counts.setdefault(st, {})[sp] = n

        xs = range(len(species))
        available = [counts[AnimalStatus.AVAILABLE.value].get(sp, 0) for sp in species]
        bought = [counts[AnimalStatus.BOUGHT.value].get(sp, 0) for sp in species]
        self.ax.bar(xs, available, label=AnimalStatus.AVAILABLE.value, color="#4A7C59")
        self.ax.bar(xs, bought, bottom=available, label=AnimalStatus.BOUGHT.value, color="#0275D8")
        self.ax.set_xticks(list(xs))
        self.ax.set_xticklabels(species)
        self.ax.set_ylabel("Animals")
        self.ax.set_title("Inventory by species")
        self.ax.legend()
        self.canvas.draw()
