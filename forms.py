from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from models import AnimalStatus
from utils import safe_decimal, safe_int

ANIMAL_FORM_ERROR = "Please fill all fields correctly."
LOGIN_FORM_ERROR = "Please enter username and password"
REGISTER_BLANK_ERROR = "All fields are required"
REGISTER_MISMATCH_ERROR = "Passwords do not match"

MAX_AGE = 200
MAX_PRICE = Decimal("1000000")


@dataclass
class AnimalForm:
    name: str
    species: str
    age: int
    price: Decimal
    status: AnimalStatus


def _blank(s: Optional[str]) -> bool:
    return not (s or "").strip()


def validate_login_form(username: str, password: str) -> Optional[str]:
    if _blank(username) or _blank(password):
        return LOGIN_FORM_ERROR
    return None


def validate_register_form(username: str, password: str, confirm: str) -> Optional[str]:
    if _blank(username) or _blank(password) or _blank(confirm):
        return REGISTER_BLANK_ERROR
    if password != confirm:
        return REGISTER_MISMATCH_ERROR
    return None


def validate_animal_form(name: str, species: str, age: str, price: str, status: str) -> Tuple[Optional[AnimalForm], Optional[str]]:
    """
    Check the add/edit dialog input. Returns (form, None) when every field is
    usable, otherwise (None, message); nothing is submitted on failure.
    """
    age_val = safe_int(age, None)
    price_val = safe_decimal(price, None)
    if _blank(name) or _blank(species) or _blank(status) or age_val is None or price_val is None:
        return (None, ANIMAL_FORM_ERROR)
    if not 0 <= age_val <= MAX_AGE or not 0 <= price_val <= MAX_PRICE:
        return (None, ANIMAL_FORM_ERROR)
    try:
        status_val = AnimalStatus(status.strip())
    except ValueError:
        return (None, ANIMAL_FORM_ERROR)
    return (AnimalForm(name.strip(), species.strip(), age_val, price_val, status_val), None)
