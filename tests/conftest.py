# tests/conftest.py
import os
import sys
import pytest

# make the top-level modules importable when running from the repo root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from store import PetShopStore


@pytest.fixture()
def store():
    s = PetShopStore("sqlite://")
    yield s
    s.close()


@pytest.fixture()
def file_store(tmp_path):
    s = PetShopStore(str(tmp_path / "petshop.db"))
    yield s
    s.close()


@pytest.fixture()
def stocked_store(store):
    store.insert_animal("Rex", "Dog", 3, "120.00")
    store.insert_animal("Milo", "Cat", 2, "80.50")
    store.insert_animal("Tweety", "Bird", 1, "25.00")
    return store
