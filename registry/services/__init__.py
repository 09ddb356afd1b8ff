"""
High-level use cases for the registry.

Each service applies validation and uniqueness rules before delegating to
its repository. A presentation layer should call these services instead of
talking to repositories directly.
"""

from .person_service import PersonService
from .pet_service import PetService

__all__ = ["PersonService", "PetService"]
