"""Pet persistence backed by SQLAlchemy."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from registry.core.errors import StorageError
from registry.db.models import PetRecord
from registry.db.session import database_url, get_session, init_schema
from registry.domain.pet import Pet, years_before

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "pets.db"


def _contains(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _to_pet(row: PetRecord) -> Pet:
    return Pet(
        id=row.id,
        name=row.name,
        species=row.species,
        breed=row.breed,
        birth_date=row.birth_date,
        color=row.color,
        owner_name=row.owner_name,
        owner_phone=row.owner_phone,
        owner_email=row.owner_email,
        weight=float(row.weight),
        sterilized=bool(row.sterilized),
        active=bool(row.active),
    )


def _columns(pet: Pet) -> dict:
    return {
        "name": pet.name,
        "species": pet.species,
        "breed": pet.breed,
        "birth_date": pet.birth_date,
        "color": pet.color,
        "owner_name": pet.owner_name,
        "owner_phone": pet.owner_phone,
        "owner_email": pet.owner_email,
        "weight": pet.weight,
        "sterilized": pet.sterilized,
        "active": pet.active,
    }


class PetRepository:
    """CRUD statements and lookups for the ``pets`` table."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.url = database_url(db_path, DEFAULT_DB_PATH)
        init_schema(self.url, PetRecord.__table__)

    # -------------------------- create / read --------------------------
    def create(self, pet: Pet) -> Pet:
        now = datetime.now(timezone.utc)
        stmt = insert(PetRecord.__table__).values(**_columns(pet), created_at=now, updated_at=now)
        try:
            with get_session(self.url) as session:
                result = session.execute(stmt)
                if result.rowcount == 0:
                    raise StorageError("Failed to create pet: no row inserted")
                session.commit()
                pet.id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to create pet: {exc}") from exc
        logger.info("Registered pet %s (%s, owner %s)", pet.id, pet.name, pet.owner_name)
        return pet

    def find_by_id(self, pet_id: Optional[int]) -> Optional[Pet]:
        if pet_id is None:
            return None
        try:
            with get_session(self.url) as session:
                row = session.get(PetRecord, pet_id)
                return _to_pet(row) if row else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to find pet {pet_id}: {exc}") from exc

    def search_by_name(self, name: Optional[str]) -> list[Pet]:
        term = (name or "").strip()
        if not term:
            return []
        return self._list(select(PetRecord).where(PetRecord.name.ilike(_contains(term), escape="\\")))

    def search_by_species(self, species: Optional[str]) -> list[Pet]:
        term = (species or "").strip()
        if not term:
            return []
        return self._list(select(PetRecord).where(func.lower(PetRecord.species) == func.lower(term)))

    def search_by_owner(self, owner_name: Optional[str]) -> list[Pet]:
        term = (owner_name or "").strip()
        if not term:
            return []
        return self._list(select(PetRecord).where(PetRecord.owner_name.ilike(_contains(term), escape="\\")))

    def search_by_owner_email(self, email: Optional[str]) -> list[Pet]:
        term = (email or "").strip()
        if not term:
            return []
        return self._list(select(PetRecord).where(func.lower(PetRecord.owner_email) == func.lower(term)))

    def list_all(self) -> list[Pet]:
        return self._list(select(PetRecord))

    def list_active(self) -> list[Pet]:
        return self._list(select(PetRecord).where(PetRecord.active.is_(True)))

    def list_juveniles(self, today: Optional[date] = None) -> list[Pet]:
        cutoff = years_before(today or date.today(), 1)
        stmt = select(PetRecord).where(
            or_(PetRecord.birth_date.is_(None), PetRecord.birth_date > cutoff),
            PetRecord.active.is_(True),
        )
        return self._list(stmt)

    def list_seniors(self, today: Optional[date] = None) -> list[Pet]:
        # Threshold depends on species, so classification happens on the mapped records.
        return [pet for pet in self.list_active() if pet.is_senior(today)]

    # -------------------------- mutations --------------------------
    def update(self, pet: Pet) -> Pet:
        if pet is None or pet.id is None:
            raise StorageError("Pet and its id are required for update")
        stmt = (
            update(PetRecord)
            .where(PetRecord.id == pet.id)
            .values(**_columns(pet), updated_at=datetime.now(timezone.utc))
        )
        if self._execute(stmt, f"update pet {pet.id}") == 0:
            raise StorageError(f"Pet not found with id {pet.id}")
        logger.info("Updated pet %s", pet.id)
        return pet

    def soft_delete(self, pet_id: Optional[int]) -> bool:
        if pet_id is None:
            return False
        return self._update_columns(pet_id, "deactivate", active=False)

    def hard_delete(self, pet_id: Optional[int]) -> bool:
        if pet_id is None:
            return False
        stmt = delete(PetRecord).where(PetRecord.id == pet_id)
        removed = self._execute(stmt, f"delete pet {pet_id}") > 0
        if removed:
            logger.info("Deleted pet %s", pet_id)
        return removed

    def update_sterilization(self, pet_id: Optional[int], sterilized: bool) -> bool:
        if pet_id is None:
            return False
        return self._update_columns(pet_id, "update sterilization of", sterilized=bool(sterilized))

    def update_weight(self, pet_id: Optional[int], weight: float) -> bool:
        if pet_id is None or weight is None or weight <= 0:
            return False
        return self._update_columns(pet_id, "update weight of", weight=weight)

    # -------------------------- counters --------------------------
    def count(self) -> int:
        return self._scalar(select(func.count()).select_from(PetRecord), "count pets")

    def count_active(self) -> int:
        stmt = select(func.count()).select_from(PetRecord).where(PetRecord.active.is_(True))
        return self._scalar(stmt, "count active pets")

    def count_by_species(self, species: Optional[str]) -> int:
        term = (species or "").strip()
        if not term:
            return 0
        stmt = (
            select(func.count())
            .select_from(PetRecord)
            .where(func.lower(PetRecord.species) == func.lower(term), PetRecord.active.is_(True))
        )
        return self._scalar(stmt, "count pets by species")

    def exists_by_owner_email(self, email: Optional[str]) -> bool:
        term = (email or "").strip()
        if not term:
            return False
        stmt = select(func.count()).select_from(PetRecord).where(func.lower(PetRecord.owner_email) == func.lower(term))
        return self._scalar(stmt, "check owner email") > 0

    # -------------------------- helpers --------------------------
    def _update_columns(self, pet_id: int, action: str, **values) -> bool:
        stmt = (
            update(PetRecord)
            .where(PetRecord.id == pet_id)
            .values(**values, updated_at=datetime.now(timezone.utc))
        )
        return self._execute(stmt, f"{action} pet {pet_id}") > 0

    def _list(self, stmt) -> list[Pet]:
        stmt = stmt.order_by(PetRecord.name, PetRecord.id)
        try:
            with get_session(self.url) as session:
                return [_to_pet(row) for row in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to list pets: {exc}") from exc

    def _scalar(self, stmt, action: str) -> int:
        try:
            with get_session(self.url) as session:
                return int(session.execute(stmt).scalar_one() or 0)
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to {action}: {exc}") from exc

    def _execute(self, stmt, action: str) -> int:
        try:
            with get_session(self.url) as session:
                result = session.execute(stmt)
                session.commit()
                return result.rowcount
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to {action}: {exc}") from exc
