from __future__ import annotations

from typing import Iterable, List

from models import Animal

ALL_SPECIES = "All"


def matches(animal: Animal, query: str = "", species: str = ALL_SPECIES) -> bool:
    if species != ALL_SPECIES and animal.species.lower() != species.lower():
        return False
    q = (query or "").strip().lower()
    if not q:
        return True
    return q in animal.name.lower() or q in animal.species.lower()


def filter_animals(animals: Iterable[Animal], query: str = "", species: str = ALL_SPECIES) -> List[Animal]:
    return [a for a in animals if matches(a, query, species)]


def species_options(animals: Iterable[Animal]) -> List[str]:
    """Category choices: "All" plus the distinct species of the snapshot, first seen first."""
    out = [ALL_SPECIES]
    for a in animals:
        if a.species not in out:
            out.append(a.species)
    return out
