"""Plain record types and structural checks (no persistence knowledge)."""

from .person import Person
from .pet import Pet, Species, parse_species

__all__ = ["Person", "Pet", "Species", "parse_species"]
