"""SQLAlchemy tables for person and pet records."""
from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    func,
)

from .session import Base


class PersonRecord(Base):
    __tablename__ = "people"
    __table_args__ = (CheckConstraint("age >= 0", name="ck_people_age"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False)
    age = Column(Integer, nullable=False)
    active = Column(Boolean, default=True, server_default="1", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class PetRecord(Base):
    __tablename__ = "pets"
    __table_args__ = (CheckConstraint("weight > 0", name="ck_pets_weight"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    species = Column(String(20), nullable=False)
    breed = Column(String(50), nullable=True)
    birth_date = Column(Date, nullable=True)
    color = Column(String(30), nullable=True)
    owner_name = Column(String(100), nullable=False)
    owner_phone = Column(String(20), nullable=True)
    owner_email = Column(String(150), nullable=True)
    weight = Column(Float, nullable=False)
    sterilized = Column(Boolean, default=False, server_default="0", nullable=False)
    active = Column(Boolean, default=True, server_default="1", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
