from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Iterator, List

from models import Animal, AnimalStatus, Transaction
from utils import format_money

logger = logging.getLogger(__name__)


@dataclass
class CartLine:
    animal: Animal
    selected: bool = True


class Cart:
    """
    Client-side cart. Nothing is reserved in the database; availability is
    only checked when the selected lines are bought.
    """

    def __init__(self):
        self.lines: List[CartLine] = []

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    def __contains__(self, animal_id: int) -> bool:
        return any(ln.animal.id == animal_id for ln in self.lines)

    def _line(self, animal_id: int) -> CartLine:
        for ln in self.lines:
            if ln.animal.id == animal_id:
                return ln
        raise KeyError(animal_id)

    def add(self, animal: Animal) -> bool:
        if animal.id in self:
            return False
        self.lines.append(CartLine(animal))
        return True

    def set_selected(self, animal_id: int, selected: bool) -> None:
        self._line(animal_id).selected = bool(selected)

    def toggle(self, animal_id: int) -> bool:
        ln = self._line(animal_id)
        ln.selected = not ln.selected
        return ln.selected

    def is_selected(self, animal_id: int) -> bool:
        return self._line(animal_id).selected

    def remove_unchecked(self) -> List[Animal]:
        removed = [ln.animal for ln in self.lines if not ln.selected]
        self.lines = [ln for ln in self.lines if ln.selected]
        return removed

    def discard(self, animal_ids: Iterable[int]) -> None:
        ids = set(animal_ids)
        self.lines = [ln for ln in self.lines if ln.animal.id not in ids]

    def selected_animals(self) -> List[Animal]:
        return [ln.animal for ln in self.lines if ln.selected]

    def total(self) -> Decimal:
        return sum((a.price for a in self.selected_animals()), Decimal("0"))

    def total_str(self) -> str:
        return format_money(self.total(), decimals=2)


def _bought(animal: Animal, username: str) -> Animal:
    return replace(animal, status=AnimalStatus.BOUGHT.value, owner=username)


def buy_now(store, animal: Animal, username: str) -> Transaction:
    """Buy a single animal; raises AnimalUnavailableError if it is already sold."""
    store.buy_animals([animal.id], username)
    return Transaction(customer=username, animal=_bought(animal, username))


def checkout(store, cart: Cart, username: str) -> List[Transaction]:
    """
    Buy every selected cart line in a single transaction.

    On success the bought lines leave the cart and one Transaction per animal
    is returned. If any animal was sold in the meantime nothing is bought and
    the store's AnimalUnavailableError propagates with the cart untouched.
    """
    animals = cart.selected_animals()
    if not animals:
        raise ValueError("No animals selected")

    store.buy_animals([a.id for a in animals], username)
    cart.discard(a.id for a in animals)
    logger.info("checkout for %s: %d animal(s), total %s", username, len(animals), format_money(sum(a.price for a in animals)))
    return [Transaction(customer=username, animal=_bought(a, username)) for a in animals]
