"""Person persistence backed by SQLAlchemy."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from registry.core.errors import StorageError
from registry.db.models import PersonRecord
from registry.db.session import database_url, get_session, init_schema
from registry.domain.person import Person

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "people.db"


def _to_person(row: PersonRecord) -> Person:
    return Person(
        id=row.id,
        name=row.name,
        email=row.email,
        age=row.age,
        active=bool(row.active),
    )


class PersonRepository:
    """CRUD statements for the ``people`` table."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.url = database_url(db_path, DEFAULT_DB_PATH)
        init_schema(self.url, PersonRecord.__table__)

    def create(self, person: Person) -> Person:
        now = datetime.now(timezone.utc)
        stmt = insert(PersonRecord.__table__).values(
            name=person.name,
            email=person.email,
            age=person.age,
            active=person.active,
            created_at=now,
            updated_at=now,
        )
        try:
            with get_session(self.url) as session:
                result = session.execute(stmt)
                if result.rowcount == 0:
                    raise StorageError("Failed to create person: no row inserted")
                session.commit()
                person.id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to create person: {exc}") from exc
        logger.info("Created person %s <%s>", person.id, person.email)
        return person

    def find_by_id(self, person_id: Optional[int]) -> Optional[Person]:
        if person_id is None:
            return None
        try:
            with get_session(self.url) as session:
                row = session.get(PersonRecord, person_id)
                return _to_person(row) if row else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to find person {person_id}: {exc}") from exc

    def find_by_email(self, email: Optional[str]) -> Optional[Person]:
        if not (email or "").strip():
            return None
        try:
            with get_session(self.url) as session:
                stmt = select(PersonRecord).where(PersonRecord.email == email)
                row = session.execute(stmt).scalar_one_or_none()
                return _to_person(row) if row else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to find person by email: {exc}") from exc

    def list_all(self) -> list[Person]:
        return self._list(select(PersonRecord).order_by(PersonRecord.id))

    def list_active(self) -> list[Person]:
        stmt = select(PersonRecord).where(PersonRecord.active.is_(True)).order_by(PersonRecord.id)
        return self._list(stmt)

    def update(self, person: Person) -> Person:
        if person is None or person.id is None:
            raise StorageError("Person and its id are required for update")
        stmt = (
            update(PersonRecord)
            .where(PersonRecord.id == person.id)
            .values(
                name=person.name,
                email=person.email,
                age=person.age,
                active=person.active,
                updated_at=datetime.now(timezone.utc),
            )
        )
        affected = self._execute(stmt, f"update person {person.id}")
        if affected == 0:
            raise StorageError(f"Person not found with id {person.id}")
        logger.info("Updated person %s", person.id)
        return person

    def soft_delete(self, person_id: Optional[int]) -> bool:
        if person_id is None:
            return False
        stmt = (
            update(PersonRecord)
            .where(PersonRecord.id == person_id)
            .values(active=False, updated_at=datetime.now(timezone.utc))
        )
        return self._execute(stmt, f"deactivate person {person_id}") > 0

    def hard_delete(self, person_id: Optional[int]) -> bool:
        if person_id is None:
            return False
        stmt = delete(PersonRecord).where(PersonRecord.id == person_id)
        removed = self._execute(stmt, f"delete person {person_id}") > 0
        if removed:
            logger.info("Deleted person %s", person_id)
        return removed

    def count(self) -> int:
        return self._scalar(select(func.count()).select_from(PersonRecord), "count people")

    def exists_by_email(self, email: Optional[str]) -> bool:
        if not (email or "").strip():
            return False
        stmt = select(func.count()).select_from(PersonRecord).where(PersonRecord.email == email)
        return self._scalar(stmt, "check email") > 0

    # -------------------------- helpers --------------------------
    def _list(self, stmt) -> list[Person]:
        try:
            with get_session(self.url) as session:
                return [_to_person(row) for row in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to list people: {exc}") from exc

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
