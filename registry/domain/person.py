"""Person record."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

ADULT_AGE = 18


@dataclass(eq=False)
class Person:
    name: Optional[str] = None
    email: Optional[str] = None
    age: int = 0
    active: bool = True
    id: Optional[int] = None

    def has_valid_email(self) -> bool:
        return bool(self.email) and "@" in self.email and "." in self.email

    def is_adult(self) -> bool:
        return self.age >= ADULT_AGE

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Person):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else 0
