"""Pet use cases (registration, validation, classification, statistics)."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Optional

from registry.core.errors import ConflictError, NotFoundError, ValidationError
from registry.domain.pet import Pet
from registry.repositories.pet_repository import PetRepository

logger = logging.getLogger(__name__)

MAX_PET_AGE = 50
OWNER_MIN_LENGTH = 2
OWNER_MAX_LENGTH = 100


def _valid_id(pet_id: Optional[int]) -> bool:
    return pet_id is not None and pet_id > 0


def _same_text(left: str | None, right: str | None) -> bool:
    return (left or "").strip().casefold() == (right or "").strip().casefold()


class PetService:
    """Validates pet records and keeps the name+owner pair unique."""

    def __init__(self, repository: Optional[PetRepository] = None) -> None:
        self.repository = repository or PetRepository()

    # -------------------------------------- validation --------------------------------------
    def validate(self, pet: Optional[Pet], today: Optional[date] = None) -> bool:
        """Run each rule in order; the first failing rule raises ValidationError."""
        if pet is None:
            raise ValidationError("Pet is required")
        today = today or date.today()

        if not pet.has_valid_name():
            raise ValidationError("Pet name must have 2 to 50 letters or spaces")
        if not pet.has_valid_species():
            raise ValidationError("Species must be one of dog, cat, bird, rabbit, hamster, fish, reptile")
        if pet.birth_date is None:
            raise ValidationError("Birth date is required")
        if pet.birth_date > today:
            raise ValidationError("Birth date cannot be in the future")
        if pet.age_in_years(today) > MAX_PET_AGE:
            raise ValidationError(f"Pet age cannot exceed {MAX_PET_AGE} years")
        owner = (pet.owner_name or "").strip()
        if not OWNER_MIN_LENGTH <= len(owner) <= OWNER_MAX_LENGTH:
            raise ValidationError(f"Owner name must have {OWNER_MIN_LENGTH} to {OWNER_MAX_LENGTH} characters")
        if not pet.has_valid_owner_email():
            raise ValidationError("Owner email is invalid")
        if not pet.has_valid_owner_phone():
            raise ValidationError("Owner phone is invalid")
        if not pet.has_valid_weight():
            raise ValidationError("Weight must be greater than 0 and at most 200 kg")
        return True

    def _ensure_unique(self, pet: Pet, exclude_id: Optional[int] = None) -> None:
        for existing in self.repository.search_by_name(pet.name):
            if existing.id == exclude_id:
                continue
            if _same_text(existing.name, pet.name) and _same_text(existing.owner_name, pet.owner_name):
                raise ConflictError(
                    f"A pet named '{pet.name.strip()}' already exists for owner '{pet.owner_name.strip()}'"
                )

    # -------------------------------------- use cases --------------------------------------
    def register_pet(self, pet: Optional[Pet]) -> Pet:
        if pet is None:
            raise ValidationError("Pet is required")
        self.validate(pet)
        self._ensure_unique(pet)
        return self.repository.create(pet)

    def find_by_id(self, pet_id: Optional[int]) -> Optional[Pet]:
        if not _valid_id(pet_id):
            return None
        return self.repository.find_by_id(pet_id)

    def update_pet(self, pet: Optional[Pet]) -> Pet:
        if pet is None:
            raise ValidationError("Pet is required")
        if not _valid_id(pet.id):
            raise ValidationError("A valid pet id is required to update")
        if self.repository.find_by_id(pet.id) is None:
            raise NotFoundError(f"Pet not found with id {pet.id}")
        self.validate(pet)
        self._ensure_unique(pet, exclude_id=pet.id)
        return self.repository.update(pet)

    def delete_pet(self, pet_id: Optional[int]) -> bool:
        """Deactivate a pet; the record stays in the store."""
        if not _valid_id(pet_id):
            raise ValidationError("Invalid pet id")
        deactivated = self.repository.soft_delete(pet_id)
        if deactivated:
            logger.info("Deactivated pet %s", pet_id)
        return deactivated

    def remove_pet(self, pet_id: Optional[int]) -> bool:
        if not _valid_id(pet_id):
            raise ValidationError("Invalid pet id")
        if self.repository.find_by_id(pet_id) is None:
            raise NotFoundError(f"Pet not found with id {pet_id}")
        return self.repository.hard_delete(pet_id)

    def set_sterilized(self, pet_id: Optional[int], sterilized: bool = True) -> bool:
        if not _valid_id(pet_id):
            return False
        return self.repository.update_sterilization(pet_id, sterilized)

    def update_weight(self, pet_id: Optional[int], weight: float) -> bool:
        if not _valid_id(pet_id):
            return False
        return self.repository.update_weight(pet_id, weight)

    # -------------------------------------- queries --------------------------------------
    def list_all(self) -> list[Pet]:
        return self.repository.list_all()

    def list_active(self) -> list[Pet]:
        return self.repository.list_active()

    def list_juveniles(self) -> list[Pet]:
        return self.repository.list_juveniles()

    def list_seniors(self) -> list[Pet]:
        return self.repository.list_seniors()

    def list_by_species(self, species: Optional[str]) -> list[Pet]:
        term = (species or "").strip()
        if not term:
            return []
        return self.repository.search_by_species(term)

    def list_by_name_pattern(self, pattern: Optional[str]) -> list[Pet]:
        term = (pattern or "").strip()
        if not term:
            return []
        return self.repository.search_by_name(term)

    def list_by_owner(self, owner_name: Optional[str]) -> list[Pet]:
        term = (owner_name or "").strip()
        if not term:
            return []
        return self.repository.search_by_owner(term)

    def list_vaccination_candidates(self, today: Optional[date] = None) -> list[Pet]:
        # No vaccination history is stored yet: every pet aged one year or more qualifies.
        return [pet for pet in self.repository.list_all() if pet.age_in_years(today) >= 1]

    def vaccination_due(self, pet_id: Optional[int], vaccinated_on: Optional[date]) -> bool:
        """Check the preconditions for recording a vaccination; nothing is persisted."""
        if not _valid_id(pet_id):
            raise ValidationError("Invalid pet id")
        if vaccinated_on is None:
            raise ValidationError("Vaccination date is required")
        if vaccinated_on > date.today():
            raise ValidationError("Vaccination date cannot be in the future")
        if self.repository.find_by_id(pet_id) is None:
            raise NotFoundError(f"Pet not found with id {pet_id}")
        return True

    def species_statistics(self) -> dict[str, int]:
        return dict(Counter(pet.species for pet in self.repository.list_all()))

    def count(self) -> int:
        return self.repository.count()

    def count_active(self) -> int:
        return self.repository.count_active()
