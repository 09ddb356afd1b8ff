"""Person use cases (validation, uniqueness of email, soft/hard delete)."""

from __future__ import annotations

import logging
from typing import Optional

from registry.core.errors import ConflictError, NotFoundError, StorageError, ValidationError
from registry.domain.person import Person
from registry.repositories.person_repository import PersonRepository

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 150
MAX_AGE = 150


def _valid_id(person_id: Optional[int]) -> bool:
    return person_id is not None and person_id > 0


class PersonService:
    """Validates person records and enforces the unique-email rule."""

    def __init__(self, repository: Optional[PersonRepository] = None) -> None:
        self.repository = repository or PersonRepository()

    # -------------------------------------- helpers --------------------------------------
    def normalize_email(self, value: str | None) -> str:
        return (value or "").strip().lower()

    def _validate(self, person: Optional[Person]) -> None:
        """Check fields in order and normalise name/email in place."""
        if person is None:
            raise ValidationError("Person is required")

        name = (person.name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        if len(name) < NAME_MIN_LENGTH:
            raise ValidationError(f"Name must have at least {NAME_MIN_LENGTH} characters")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Name cannot exceed {NAME_MAX_LENGTH} characters")

        if not (person.email or "").strip():
            raise ValidationError("Email is required")
        if not person.has_valid_email():
            raise ValidationError("Email format is invalid")
        if len(person.email.strip()) > EMAIL_MAX_LENGTH:
            raise ValidationError(f"Email cannot exceed {EMAIL_MAX_LENGTH} characters")

        if not isinstance(person.age, int):
            raise ValidationError("Age must be a whole number")
        if person.age < 0:
            raise ValidationError("Age cannot be negative")
        if person.age > MAX_AGE:
            raise ValidationError(f"Age cannot be greater than {MAX_AGE}")

        person.email = self.normalize_email(person.email)
        person.name = name

    def _require_existing(self, person_id: Optional[int]) -> Person:
        if not _valid_id(person_id):
            raise ValidationError("Invalid person id")
        existing = self.repository.find_by_id(person_id)
        if existing is None:
            raise NotFoundError(f"Person not found with id {person_id}")
        return existing

    # -------------------------------------- use cases --------------------------------------
    def create(self, person: Person) -> Person:
        self._validate(person)
        if self.repository.exists_by_email(person.email):
            raise ConflictError(f"A person with email {person.email} already exists")
        return self.repository.create(person)

    def find_by_id(self, person_id: Optional[int]) -> Optional[Person]:
        if not _valid_id(person_id):
            return None
        return self.repository.find_by_id(person_id)

    def find_by_email(self, email: Optional[str]) -> Optional[Person]:
        candidate = self.normalize_email(email)
        if not candidate:
            return None
        return self.repository.find_by_email(candidate)

    def update(self, person_id: Optional[int], person: Person) -> Person:
        if not _valid_id(person_id):
            raise ValidationError("Invalid person id")
        self._validate(person)
        existing = self.repository.find_by_id(person_id)
        if existing is None:
            raise NotFoundError(f"Person not found with id {person_id}")
        owner = self.repository.find_by_email(person.email)
        if owner is not None and owner.id != person_id:
            raise ConflictError("Email is already used by another person")
        person.id = person_id
        # Deactivated records stay deactivated; there is no reactivation path.
        person.active = existing.active
        return self.repository.update(person)

    def soft_delete(self, person_id: Optional[int]) -> bool:
        person = self._require_existing(person_id)
        person.active = False
        try:
            self.repository.update(person)
        except StorageError as exc:
            logger.warning("Could not deactivate person %s: %s", person_id, exc.message)
            return False
        logger.info("Deactivated person %s", person_id)
        return True

    def hard_delete(self, person_id: Optional[int]) -> bool:
        self._require_existing(person_id)
        return self.repository.hard_delete(person_id)

    def count(self) -> int:
        return self.repository.count()

    def list_all(self) -> list[Person]:
        return self.repository.list_all()

    def list_active(self) -> list[Person]:
        return self.repository.list_active()

    def email_available(self, email: Optional[str]) -> bool:
        candidate = self.normalize_email(email)
        if not candidate:
            return False
        return not self.repository.exists_by_email(candidate)
