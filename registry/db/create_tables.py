"""Utility script to create the person and pet tables in their databases."""
from __future__ import annotations

from registry.core.errors import StorageError
from registry.core.logging_config import setup_logging
from registry.repositories.person_repository import PersonRepository
from registry.repositories.pet_repository import PetRepository


def create_all() -> None:
    # Repositories bootstrap their own table on construction.
    PersonRepository()
    PetRepository()


if __name__ == "__main__":
    setup_logging()
    try:
        create_all()
        print("Database tables created successfully.")
    except StorageError as exc:
        raise SystemExit(f"Failed to create tables: {exc.message}") from exc
