from decimal import Decimal

from browse import ALL_SPECIES, filter_animals, species_options
from models import Animal


def _animal(aid, name, species):
    return Animal(id=aid, name=name, species=species, age=1, price=Decimal("10.00"))


ANIMALS = [_animal(1, "Rex", "Dog"), _animal(2, "Milo", "Cat")]


def _names(animals):
    return {a.name for a in animals}


def test_filter_by_category():
    assert _names(filter_animals(ANIMALS, "", "Dog")) == {"Rex"}


def test_filter_by_query():
    assert _names(filter_animals(ANIMALS, "mi", ALL_SPECIES)) == {"Milo"}


def test_query_matches_species_case_insensitive():
    assert _names(filter_animals(ANIMALS, "DO", ALL_SPECIES)) == {"Rex"}


def test_category_and_query_combine():
    assert filter_animals(ANIMALS, "mi", "Dog") == []


def test_category_is_case_insensitive():
    assert _names(filter_animals(ANIMALS, "", "cat")) == {"Milo"}


def test_blank_query_keeps_everything():
    assert _names(filter_animals(ANIMALS, "  ", ALL_SPECIES)) == {"Rex", "Milo"}


def test_species_options_follow_snapshot():
    assert species_options(ANIMALS) == ["All", "Dog", "Cat"]
    assert species_options(ANIMALS + [_animal(3, "Max", "Dog")]) == ["All", "Dog", "Cat"]
    assert species_options([]) == ["All"]
