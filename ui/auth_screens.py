# ui/auth_screens.py
from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

import auth
from forms import validate_login_form, validate_register_form
from models import UserRole
from navigation import Navigator, Screen
from ui.common import ROLE_VALUES, MessageLabel


def _card(parent, title: str) -> ttk.Frame:
    outer = ttk.Frame(parent)
    outer.pack(fill="both", expand=True)
    card = ttk.LabelFrame(outer, text=title, padding=16)
    card.place(relx=0.5, rely=0.45, anchor="center")
    return card


class LandingFrame(ttk.Frame):
    def __init__(self, parent, navigator: Navigator):
        super().__init__(parent)
        card = _card(self, "Petshop")
        ttk.Label(card, text="\U0001F436 Welcome to Petshop App \U0001F431", font=("", 18, "bold")).pack(padx=12, pady=(4, 8))
        ttk.Label(card, text="Find your new best friend today!").pack(padx=12, pady=(0, 16))
        ttk.Button(card, text="Get Started", width=24, command=lambda: navigator.go(Screen.MAIN_MENU)).pack(pady=4)


class MainMenuFrame(ttk.Frame):
    def __init__(self, parent, navigator: Navigator):
        super().__init__(parent)
        card = _card(self, "Main Menu")
        ttk.Label(card, text="Welcome to Petshop App", font=("", 16, "bold")).pack(padx=12, pady=(4, 16))
        ttk.Button(card, text="Login", width=24, command=lambda: navigator.go(Screen.LOGIN)).pack(pady=4)
        ttk.Button(card, text="Register", width=24, command=lambda: navigator.go(Screen.REGISTER)).pack(pady=4)


class LoginFrame(ttk.Frame):
    def __init__(self, parent, store, navigator: Navigator):
        super().__init__(parent)
        self.store = store
        self.navigator = navigator

        card = _card(self, "Login")

        self.var_role = tk.StringVar(value=UserRole.CUSTOMER.display)
        self.var_username = tk.StringVar()
        self.var_password = tk.StringVar()

        ttk.Label(card, text="Login as").grid(row=0, column=0, sticky="w", padx=4, pady=4)
        ttk.Combobox(card, textvariable=self.var_role, values=ROLE_VALUES, state="readonly", width=14)\
            .grid(row=0, column=1, sticky="w", padx=4, pady=4)

        ttk.Label(card, text="Username").grid(row=1, column=0, sticky="w", padx=4, pady=4)
        user_entry = ttk.Entry(card, textvariable=self.var_username, width=28)
        user_entry.grid(row=1, column=1, sticky="w", padx=4, pady=4)
        ttk.Label(card, text="Password").grid(row=2, column=0, sticky="w", padx=4, pady=4)
        ttk.Entry(card, textvariable=self.var_password, show="*", width=28).grid(row=2, column=1, sticky="w", padx=4, pady=4)

        ttk.Button(card, text="Login", command=self.on_login).grid(row=3, column=0, columnspan=2, sticky="ew", padx=4, pady=(10, 4))
        ttk.Button(card, text="Back to Menu", command=lambda: navigator.go(Screen.MAIN_MENU))\
            .grid(row=4, column=0, columnspan=2, sticky="ew", padx=4, pady=4)

        self.msg = MessageLabel(card, text="")
        self.msg.grid(row=5, column=0, columnspan=2, sticky="w", padx=4, pady=4)

        self.bind_all("<Return>", lambda e: self.on_login())
        user_entry.focus_set()

    def destroy(self):
        self.unbind_all("<Return>")
        super().destroy()

    def on_login(self):
        username = self.var_username.get()
        password = self.var_password.get()
        error = validate_login_form(username, password)
        if error:
            self.msg.show(error)
            return
        role = UserRole(self.var_role.get())
        if not auth.login(self.store, username, password, role):
            self.msg.show("Invalid username or password")
            return
        self.navigator.login_succeeded(username, role)


class RegisterFrame(ttk.Frame):
    def __init__(self, parent, store, navigator: Navigator):
        super().__init__(parent)
        self.store = store
        self.navigator = navigator

        card = _card(self, "Register")

        self.var_role = tk.StringVar(value=UserRole.CUSTOMER.display)
        self.var_username = tk.StringVar()
        self.var_password = tk.StringVar()
        self.var_confirm = tk.StringVar()

        ttk.Label(card, text="Register as").grid(row=0, column=0, sticky="w", padx=4, pady=4)
        ttk.Combobox(card, textvariable=self.var_role, values=ROLE_VALUES, state="readonly", width=14)\
            .grid(row=0, column=1, sticky="w", padx=4, pady=4)

        for i, (label, var, show) in enumerate([
            ("Username", self.var_username, ""),
            ("Password", self.var_password, "*"),
            ("Confirm Password", self.var_confirm, "*"),
        ], start=1):
            ttk.Label(card, text=label).grid(row=i, column=0, sticky="w", padx=4, pady=4)
            ttk.Entry(card, textvariable=var, show=show, width=28).grid(row=i, column=1, sticky="w", padx=4, pady=4)

        ttk.Button(card, text="Register", command=self.on_register).grid(row=4, column=0, columnspan=2, sticky="ew", padx=4, pady=(10, 4))
        ttk.Button(card, text="Back to Menu", command=lambda: navigator.go(Screen.MAIN_MENU))\
            .grid(row=5, column=0, columnspan=2, sticky="ew", padx=4, pady=4)

        self.msg = MessageLabel(card, text="")
        self.msg.grid(row=6, column=0, columnspan=2, sticky="w", padx=4, pady=4)

    def on_register(self):
        username = self.var_username.get()
        password = self.var_password.get()
        error = validate_register_form(username, password, self.var_confirm.get())
        if error:
            self.msg.show(error)
            return
        ok, message = auth.register(self.store, username, password, UserRole(self.var_role.get()))
        if not ok:
            self.msg.show(message)
            return
        messagebox.showinfo("Register", message, parent=self)
        self.navigator.go(Screen.MAIN_MENU)
