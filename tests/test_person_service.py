from __future__ import annotations

from unittest.mock import Mock

import pytest

from registry.core.errors import ConflictError, NotFoundError, StorageError, ValidationError
from registry.domain.person import Person
from registry.repositories.person_repository import PersonRepository
from registry.services.person_service import PersonService


@pytest.fixture()
def svc(temp_db):
    return PersonService()


def test_create_normalises_and_persists(svc):
    created = svc.create(Person("  Juan Pérez ", "Juan@Test.COM", 30))

    assert created.id == 1
    assert created.active is True
    found = svc.find_by_id(created.id)
    assert found == created
    assert found.name == "Juan Pérez"
    assert found.email == "juan@test.com"
    assert found.age == 30


@pytest.mark.parametrize(
    "person, message",
    [
        (Person(None, "a@b.com", 20), "Name is required"),
        (Person("   ", "a@b.com", 20), "Name is required"),
        (Person("J", "a@b.com", 20), "at least 2"),
        (Person("J" * 101, "a@b.com", 20), "exceed 100"),
        (Person("Juan", None, 20), "Email is required"),
        (Person("Juan", "juan-at-test", 20), "format"),
        (Person("Juan", "j" * 140 + "@test.com.co", 20), "exceed 150"),
        (Person("Juan", "juan@test.com", -1), "negative"),
        (Person("Juan", "juan@test.com", 151), "greater than 150"),
    ],
)
def test_create_rejects_invalid_fields(svc, person, message):
    with pytest.raises(ValidationError) as excinfo:
        svc.create(person)
    assert message in excinfo.value.message
    assert svc.count() == 0


def test_create_rejects_none(svc):
    with pytest.raises(ValidationError):
        svc.create(None)


def test_duplicate_email_conflicts_even_when_inactive(svc):
    first = svc.create(Person("Juan Pérez", "juan@test.com", 30))
    svc.soft_delete(first.id)

    with pytest.raises(ConflictError):
        svc.create(Person("Otro Nombre", "JUAN@test.com", 55))


def test_update_scenario(svc):
    juan = svc.create(Person("Juan Pérez", "juan@test.com", 30))
    maria = svc.create(Person("María López", "maria@test.com", 28))

    updated = svc.update(juan.id, Person("Juan Pérez", "juan@test.com", 31))
    assert updated.id == juan.id
    assert svc.find_by_id(juan.id).age == 31

    with pytest.raises(ConflictError):
        svc.update(juan.id, Person("Juan Pérez", "maria@test.com", 31))
    assert svc.find_by_id(maria.id).email == "maria@test.com"


def test_update_guards(svc):
    with pytest.raises(ValidationError):
        svc.update(0, Person("Juan Pérez", "juan@test.com", 30))
    with pytest.raises(ValidationError):
        svc.update(1, Person("J", "juan@test.com", 30))
    with pytest.raises(NotFoundError):
        svc.update(99, Person("Juan Pérez", "juan@test.com", 30))


def test_update_keeps_inactive_flag(svc):
    juan = svc.create(Person("Juan Pérez", "juan@test.com", 30))
    svc.soft_delete(juan.id)
    svc.update(juan.id, Person("Juan Pérez", "juan@test.com", 32))
    assert svc.find_by_id(juan.id).active is False


def test_soft_delete_keeps_record(svc):
    juan = svc.create(Person("Juan Pérez", "juan@test.com", 30))

    assert svc.soft_delete(juan.id) is True
    found = svc.find_by_id(juan.id)
    assert found is not None
    assert found.active is False
    assert svc.list_active() == []
    assert svc.list_all() == [juan]


def test_hard_delete_removes_record(svc):
    juan = svc.create(Person("Juan Pérez", "juan@test.com", 30))

    assert svc.hard_delete(juan.id) is True
    assert svc.find_by_id(juan.id) is None
    assert svc.count() == 0
    with pytest.raises(NotFoundError):
        svc.hard_delete(juan.id)


@pytest.mark.parametrize("method", ["soft_delete", "hard_delete"])
def test_delete_guards(svc, method):
    with pytest.raises(ValidationError):
        getattr(svc, method)(None)
    with pytest.raises(ValidationError):
        getattr(svc, method)(-3)
    with pytest.raises(NotFoundError):
        getattr(svc, method)(7)


def test_email_available(svc):
    svc.create(Person("Juan Pérez", "juan@test.com", 30))

    assert svc.email_available(None) is False
    assert svc.email_available("") is False
    assert svc.email_available("  ") is False
    assert svc.email_available("juan@test.com") is False
    assert svc.email_available(" JUAN@test.com ") is False
    assert svc.email_available("otro@test.com") is True


def test_find_by_email_normalises(svc):
    juan = svc.create(Person("Juan Pérez", "juan@test.com", 30))
    assert svc.find_by_email(" Juan@Test.com") == juan
    assert svc.find_by_email("") is None


def test_non_positive_id_does_not_touch_repository():
    repo = Mock(spec=PersonRepository)
    svc = PersonService(repository=repo)

    assert svc.find_by_id(None) is None
    assert svc.find_by_id(0) is None
    assert svc.find_by_id(-1) is None
    repo.find_by_id.assert_not_called()


def test_soft_delete_reports_storage_failure():
    repo = Mock(spec=PersonRepository)
    repo.find_by_id.return_value = Person("Juan Pérez", "juan@test.com", 30, id=1)
    repo.update.side_effect = StorageError("disk full")
    svc = PersonService(repository=repo)

    assert svc.soft_delete(1) is False
