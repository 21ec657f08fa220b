from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import (
    Column,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    and_,
    create_engine,
    delete,
    func,
    insert,
    select,
    update,
)
from sqlalchemy.pool import StaticPool

from models import Animal, AnimalStatus, User, UserRole
from utils import to_decimal

logger = logging.getLogger(__name__)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(150), nullable=False, unique=True),
    Column("password", String(150), nullable=False),
    Column("role", String(50), nullable=False),  # "Customer" | "Admin"
)

animals = Table(
    "animals",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("species", String(50), nullable=False),
    Column("age", Integer, nullable=False),
    Column("price", Float, nullable=False),
    Column("status", String(20), nullable=False, default=AnimalStatus.AVAILABLE.value),
    Column("owner", String(150), nullable=True),
)

MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class AnimalUnavailableError(ValueError):
    def __init__(self, animal_id: int):
        super().__init__(f"Animal #{animal_id} is no longer available")
        self.animal_id = animal_id


def owner_after_edit(status: Any, current_owner: Optional[str], editor: str) -> Optional[str]:
    """
    Owner to store when an admin edit sets `status`: Available rows have no
    owner, Bought rows keep theirs or fall back to the editing admin.
    """
    if _text(status) == AnimalStatus.AVAILABLE.value:
        return None
    return current_owner or editor


def _text(value: Any) -> Any:
    # enum members go in as their display string
    return getattr(value, "value", value)


def _animal(row) -> Animal:
    m = row._mapping
    return Animal(
        id=int(m["id"]),
        name=m["name"],
        species=m["species"],
        age=int(m["age"]),
        price=to_decimal(m["price"]),
        status=m["status"],
        owner=m["owner"],
    )


def _user(row) -> User:
    m = row._mapping
    return User(id=int(m["id"]), username=m["username"], password=m["password"], role=UserRole(m["role"]))


class PetShopStore:
    """
    SQLite-backed store for users and animals.

    `path` is either a filesystem path or a full SQLAlchemy URL. The schema is
    created on first use; there is no migration path.
    """

    def __init__(self, path: str):
        self.path = path
        self.url = path if "://" in path else f"sqlite:///{path}"
        kwargs: Dict[str, Any] = {}
        if self.url in MEMORY_URLS:
            # one shared connection, otherwise every checkout sees an empty database
            kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        self.engine = create_engine(self.url, **kwargs)
        metadata.create_all(self.engine)
        logger.info("database ready at %s", self.url)

    def close(self) -> None:
        self.engine.dispose()

    def __enter__(self) -> "PetShopStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -------------------------
    # Users
    # -------------------------
    def get_user_by_username(self, username: str) -> Optional[User]:
        with self.engine.connect() as conn:
            row = conn.execute(select(users).where(users.c.username == username)).first()
        return _user(row) if row is not None else None

    def validate_user(self, username: str, password: str, role: UserRole) -> Optional[User]:
        stmt = select(users).where(
            and_(
                users.c.username == username,
                users.c.password == password,
                users.c.role == _text(role),
            )
        )
        with self.engine.connect() as conn:
            row = conn.execute(stmt).first()
        return _user(row) if row is not None else None

    def insert_user(self, username: str, password: str, role: UserRole) -> int:
        with self.engine.begin() as conn:
            res = conn.execute(insert(users).values(username=username, password=password, role=_text(role)))
        return int(res.inserted_primary_key[0])

    # -------------------------
    # Animals: read
    # -------------------------
    def list_animals(self) -> List[Animal]:
        with self.engine.connect() as conn:
            rows = conn.execute(select(animals).order_by(animals.c.id)).all()
        return [_animal(r) for r in rows]

    def list_available_animals(self) -> List[Animal]:
        stmt = select(animals).where(animals.c.status == AnimalStatus.AVAILABLE.value).order_by(animals.c.id)
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).all()
        return [_animal(r) for r in rows]

    def list_animals_by_owner(self, owner: str) -> List[Animal]:
        stmt = select(animals).where(animals.c.owner == owner).order_by(animals.c.id)
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).all()
        return [_animal(r) for r in rows]

    def get_animal(self, animal_id: int) -> Optional[Animal]:
        with self.engine.connect() as conn:
            row = conn.execute(select(animals).where(animals.c.id == animal_id)).first()
        return _animal(row) if row is not None else None

    def count_by_species_and_status(self) -> List[Tuple[str, str, int]]:
        stmt = (
            select(animals.c.species, animals.c.status, func.count(animals.c.id))
            .group_by(animals.c.species, animals.c.status)
            .order_by(animals.c.species, animals.c.status)
        )
        with self.engine.connect() as conn:
            return [(sp, st, int(n)) for sp, st, n in conn.execute(stmt).all()]

    # -------------------------
    # Animals: write
    # -------------------------
    def insert_animal(
        self,
        name: str,
        species: str,
        age: int,
        price,
        status: str = AnimalStatus.AVAILABLE.value,
        owner: Optional[str] = None,
    ) -> int:
        values = dict(name=name, species=species, age=int(age), price=float(price), status=_text(status), owner=owner)
        with self.engine.begin() as conn:
            res = conn.execute(insert(animals).values(**values))
        animal_id = int(res.inserted_primary_key[0])
        logger.info("inserted animal #%s (%s, %s)", animal_id, name, species)
        return animal_id

    def update_animal(
        self,
        animal_id: int,
        name: str,
        species: str,
        age: int,
        price,
        status: str,
        owner: Optional[str] = None,
    ) -> None:
        stmt = (
            update(animals)
            .where(animals.c.id == animal_id)
            .values(name=name, species=species, age=int(age), price=float(price), status=_text(status), owner=owner)
        )
        with self.engine.begin() as conn:
            conn.execute(stmt)
        logger.info("updated animal #%s", animal_id)

    def update_animal_status(self, status: str, animal_id: int) -> None:
        with self.engine.begin() as conn:
            conn.execute(update(animals).where(animals.c.id == animal_id).values(status=_text(status)))

    def update_animal_owner_and_status(self, status: str, owner: Optional[str], animal_id: int) -> None:
        # unguarded: callers that must not double-sell use buy_animals
        stmt = update(animals).where(animals.c.id == animal_id).values(status=_text(status), owner=owner)
        with self.engine.begin() as conn:
            conn.execute(stmt)
        logger.info("animal #%s -> %s (owner=%s)", animal_id, _text(status), owner)

    def mark_bought(self, animal_id: int, admin: str) -> None:
        self.update_animal_owner_and_status(AnimalStatus.BOUGHT, admin, animal_id)

    def delete_animal(self, animal_id: int) -> None:
        with self.engine.begin() as conn:
            conn.execute(delete(animals).where(animals.c.id == animal_id))
        logger.info("deleted animal #%s", animal_id)

    def buy_animals(self, animal_ids: Iterable[int], owner: str) -> int:
        """
        Mark every animal in `animal_ids` as bought by `owner` in one transaction.

        Each row only changes while it is still Available. If any row fails that
        check, nothing is written and AnimalUnavailableError is raised.
        """
        ids = list(animal_ids)
        with self.engine.begin() as conn:
            for animal_id in ids:
                stmt = (
                    update(animals)
                    .where(and_(animals.c.id == animal_id, animals.c.status == AnimalStatus.AVAILABLE.value))
                    .values(status=AnimalStatus.BOUGHT.value, owner=owner)
                )
                if conn.execute(stmt).rowcount != 1:
                    raise AnimalUnavailableError(animal_id)
        logger.info("%s bought %d animal(s): %s", owner, len(ids), ids)
        return len(ids)
