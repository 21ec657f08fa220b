from decimal import Decimal

import pytest

from forms import (
    ANIMAL_FORM_ERROR,
    LOGIN_FORM_ERROR,
    MAX_AGE,
    MAX_PRICE,
    REGISTER_BLANK_ERROR,
    REGISTER_MISMATCH_ERROR,
    validate_animal_form,
    validate_login_form,
    validate_register_form,
)
from models import AnimalStatus


def test_valid_animal_form():
    form, error = validate_animal_form(" Rex ", "Dog", "3", "120.5", "Available")
    assert error is None
    assert form.name == "Rex"
    assert form.age == 3
    assert form.price == Decimal("120.5")
    assert form.status is AnimalStatus.AVAILABLE


@pytest.mark.parametrize("name,species,age,price,status", [
    ("", "Dog", "3", "10", "Available"),
    ("Rex", "   ", "3", "10", "Available"),
    ("Rex", "Dog", "three", "10", "Available"),
    ("Rex", "Dog", "3.5", "10", "Available"),
    ("Rex", "Dog", "3", "ten", "Available"),
    ("Rex", "Dog", "3", "", "Available"),
    ("Rex", "Dog", "3", "nan", "Available"),
    ("Rex", "Dog", "3", "1e400", "Available"),
    ("Rex", "Dog", "3", "1000000000000000000000000000", "Available"),
    ("Rex", "Dog", "3", "1000000.01", "Available"),
    ("Rex", "Dog", "3", "-1", "Available"),
    ("Rex", "Dog", "99999999999999999999", "10", "Available"),
    ("Rex", "Dog", "201", "10", "Available"),
    ("Rex", "Dog", "-1", "10", "Available"),
    ("Rex", "Dog", "3", "10", ""),
    ("Rex", "Dog", "3", "10", "Sold"),
])
def test_invalid_animal_form(name, species, age, price, status):
    form, error = validate_animal_form(name, species, age, price, status)
    assert form is None
    assert error == ANIMAL_FORM_ERROR


def test_login_form():
    assert validate_login_form("alice", "pw") is None
    assert validate_login_form("", "pw") == LOGIN_FORM_ERROR
    assert validate_login_form("alice", "  ") == LOGIN_FORM_ERROR


def test_register_form():
    assert validate_register_form("alice", "pw", "pw") is None
    assert validate_register_form("alice", "pw", "") == REGISTER_BLANK_ERROR
    assert validate_register_form("alice", "pw", "px") == REGISTER_MISMATCH_ERROR


def test_animal_form_bounds_are_inclusive():
    form, error = validate_animal_form("Old Tom", "Tortoise", str(MAX_AGE), str(MAX_PRICE), "Available")
    assert error is None
    assert (form.age, form.price) == (MAX_AGE, MAX_PRICE)

    form, error = validate_animal_form("Freebie", "Cat", "0", "0", "Bought")
    assert error is None
    assert form.status is AnimalStatus.BOUGHT
