from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"

    @property
    def display(self) -> str:
        return self.value


class AnimalStatus(str, Enum):
    AVAILABLE = "Available"
    BOUGHT = "Bought"


@dataclass
class User:
    username: str
    password: str
    role: UserRole
    id: Optional[int] = None


@dataclass
class Animal:
    id: int
    name: str
    species: str
    age: int
    price: Decimal
    status: str = AnimalStatus.AVAILABLE.value
    owner: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.status == AnimalStatus.AVAILABLE.value


@dataclass
class Transaction:
    customer: str
    animal: Animal
    date: datetime = field(default_factory=datetime.now)

    @property
    def total(self) -> Decimal:
        return self.animal.price
