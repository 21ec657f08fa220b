from decimal import Decimal

import pytest

from cart import Cart, buy_now, checkout
from models import Animal
from store import AnimalUnavailableError


def _animal(aid, price, name="Pet"):
    return Animal(id=aid, name=name, species="Dog", age=1, price=Decimal(price))


def test_total_of_selected_lines():
    cart = Cart()
    cart.add(_animal(1, "10.00"))
    cart.add(_animal(2, "25.50"))
    assert cart.total() == Decimal("35.50")
    assert cart.total_str() == "35.50"


def test_unselected_lines_do_not_count():
    cart = Cart()
    cart.add(_animal(1, "10.00"))
    cart.add(_animal(2, "25.50"))
    cart.set_selected(2, False)
    assert cart.total_str() == "10.00"
    assert [a.id for a in cart.selected_animals()] == [1]


def test_add_is_idempotent_and_selected_by_default():
    cart = Cart()
    assert cart.add(_animal(1, "10"))
    assert not cart.add(_animal(1, "10"))
    assert len(cart) == 1
    assert 1 in cart
    assert cart.is_selected(1)


def test_toggle_and_remove_unchecked():
    cart = Cart()
    for i in (1, 2, 3):
        cart.add(_animal(i, "5"))
    assert cart.toggle(2) is False
    removed = cart.remove_unchecked()
    assert [a.id for a in removed] == [2]
    assert [ln.animal.id for ln in cart] == [1, 3]


def test_empty_cart_total():
    assert Cart().total_str() == "0.00"


def test_checkout_buys_selected_only(stocked_store):
    rex, milo, tweety = stocked_store.list_animals()
    cart = Cart()
    for a in (rex, milo, tweety):
        cart.add(a)
    cart.set_selected(tweety.id, False)

    txs = checkout(stocked_store, cart, "alice")

    assert [t.animal.id for t in txs] == [rex.id, milo.id]
    assert all(t.customer == "alice" and t.animal.owner == "alice" for t in txs)
    assert sum(t.total for t in txs) == Decimal("200.50")
    assert [a.name for a in stocked_store.list_animals_by_owner("alice")] == ["Rex", "Milo"]
    assert stocked_store.get_animal(tweety.id).is_available
    assert [ln.animal.id for ln in cart] == [tweety.id]


def test_checkout_rejects_empty_selection(stocked_store):
    cart = Cart()
    rex = stocked_store.list_animals()[0]
    cart.add(rex)
    cart.set_selected(rex.id, False)
    with pytest.raises(ValueError):
        checkout(stocked_store, cart, "alice")


def test_checkout_with_sold_animal_buys_nothing(stocked_store):
    rex, milo, _ = stocked_store.list_animals()
    cart = Cart()
    cart.add(rex)
    cart.add(milo)
    buy_now(stocked_store, milo, "bob")

    with pytest.raises(AnimalUnavailableError):
        checkout(stocked_store, cart, "alice")

    assert stocked_store.get_animal(rex.id).is_available
    assert len(cart) == 2


def test_buy_now_returns_transaction(stocked_store):
    milo = stocked_store.list_animals()[1]
    tx = buy_now(stocked_store, milo, "alice")
    assert tx.total == Decimal("80.50")
    assert tx.animal.status == "Bought"
    assert stocked_store.get_animal(milo.id).owner == "alice"


def test_buy_now_twice_is_rejected(stocked_store):
    milo = stocked_store.list_animals()[1]
    buy_now(stocked_store, milo, "alice")
    with pytest.raises(AnimalUnavailableError):
        buy_now(stocked_store, milo, "bob")
    assert stocked_store.get_animal(milo.id).owner == "alice"
