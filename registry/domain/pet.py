"""Pet record, species catalogue and age-derived classification."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class Species(str, Enum):
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    HAMSTER = "hamster"
    FISH = "fish"
    REPTILE = "reptile"


# Spanish names found in legacy data
SPECIES_ALIASES = {
    "perro": Species.DOG,
    "gato": Species.CAT,
    "ave": Species.BIRD,
    "conejo": Species.RABBIT,
    "pez": Species.FISH,
    "reptil": Species.REPTILE,
}

NAME_PATTERN = re.compile(r"(?:[^\W\d_]|\s)+")
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_PATTERN = re.compile(r"\+?[0-9]{7,15}")
PHONE_NOISE = re.compile(r"[\s\-()]")

MAX_WEIGHT_KG = 200
SENIOR_AGE_DOG_CAT = 7
SENIOR_AGE_OTHER = 5


def parse_species(value: str | None) -> Optional[Species]:
    """Return the Species for value (case-insensitive, aliases accepted) or None."""
    normalized = (value or "").strip().lower()
    if not normalized:
        return None
    try:
        return Species(normalized)
    except ValueError:
        return SPECIES_ALIASES.get(normalized)


def years_before(day: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


@dataclass(eq=False)
class Pet:
    name: Optional[str] = None
    species: Optional[str] = None
    breed: Optional[str] = None
    birth_date: Optional[date] = None
    color: Optional[str] = None
    owner_name: Optional[str] = None
    owner_phone: Optional[str] = None
    owner_email: Optional[str] = None
    weight: float = 0.0
    sterilized: bool = False
    active: bool = True
    id: Optional[int] = None

    # ------------------------------ structural checks ------------------------------
    def has_valid_name(self) -> bool:
        if not self.name or not self.name.strip():
            return False
        return 2 <= len(self.name.strip()) <= 50 and bool(NAME_PATTERN.fullmatch(self.name))

    def has_valid_species(self) -> bool:
        return parse_species(self.species) is not None

    def has_valid_owner_email(self) -> bool:
        if not self.owner_email or not self.owner_email.strip():
            return False
        return bool(EMAIL_PATTERN.fullmatch(self.owner_email))

    def has_valid_owner_phone(self) -> bool:
        if not self.owner_phone or not self.owner_phone.strip():
            return False
        return bool(PHONE_PATTERN.fullmatch(PHONE_NOISE.sub("", self.owner_phone)))

    def has_valid_weight(self) -> bool:
        return 0 < self.weight <= MAX_WEIGHT_KG

    # ------------------------------ derived attributes ------------------------------
    def age_in_years(self, today: Optional[date] = None) -> int:
        if self.birth_date is None:
            return 0
        today = today or date.today()
        return today.year - self.birth_date.year

    def is_juvenile(self, today: Optional[date] = None) -> bool:
        """True while less than a full year has elapsed since birth."""
        if self.birth_date is None:
            return True
        today = today or date.today()
        return self.birth_date > years_before(today, 1)

    def is_senior(self, today: Optional[date] = None) -> bool:
        species = parse_species(self.species)
        if species in (Species.DOG, Species.CAT):
            threshold = SENIOR_AGE_DOG_CAT
        else:
            threshold = SENIOR_AGE_OTHER
        return self.age_in_years(today) >= threshold

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Pet):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else 0
