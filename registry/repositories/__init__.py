"""
Persistence adapters.

Each repository owns its SQLite location and maps between domain records
and table rows. Services depend on these classes, never on the session.
"""

from .person_repository import PersonRepository
from .pet_repository import PetRepository

__all__ = ["PersonRepository", "PetRepository"]
