# paws_api/api/pets/test_services.py
import pytest

from paws_api.api.pets.services import PetService, CONFLATED_NOT_FOUND_MESSAGE, NOT_FOUND_MESSAGE
from paws_api.conftest import ZEUS, BRUNO
from paws_api.core.errors import PetNotFoundError, PetStoreError


@pytest.fixture
def pet_service(pet_store):
    return PetService(pet_store)


def test_created_pet_appears_exactly_once_in_list(pet_service):
    created = pet_service.create_pet(ZEUS)
    pet_service.create_pet(BRUNO)

    matches = [p for p in pet_service.list_pets() if p.pet_uid == "zeus@1"]
    assert len(matches) == 1
    assert matches[0].id == created.id
    assert created.id

def test_get_by_uid_is_case_insensitive_exact_match(pet_service):
    created = pet_service.create_pet(BRUNO)

    assert pet_service.get_pet_by_uid("Bruno@1").id == created.id
    assert pet_service.get_pet_by_uid("BRUNO@1").id == created.id
    for uid in ("bruno@1x", "bruno@", "runo@1", "bruno.1"):
        with pytest.raises(PetNotFoundError):
            pet_service.get_pet_by_uid(uid)

def test_get_by_uid_treats_pattern_characters_literally(pet_service):
    pet_service.create_pet(BRUNO)
    with pytest.raises(PetNotFoundError):
        pet_service.get_pet_by_uid(".*")

    dotted = pet_service.create_pet({**ZEUS, "petUID": "zeus.1"})
    assert pet_service.get_pet_by_uid("ZEUS.1").id == dotted.id
    with pytest.raises(PetNotFoundError):
        pet_service.get_pet_by_uid("zeusx1")

def test_update_changes_only_given_fields(pet_service):
    created = pet_service.create_pet(BRUNO)

    updated = pet_service.update_pet_by_uid("BRUNO@1", {"age": 3, "availabilityStatus": False, "id": "hijacked"})

    assert updated.id == created.id
    assert updated.age == 3
    assert updated.availability_status is False
    assert updated.pet_name == "Bruno"
    assert updated.pet_type == "Dog"
    assert updated.vacination_status is True
    assert pet_service.get_pet_by_uid("bruno@1").age == 3

def test_update_of_pet_uid_moves_lookup_key(pet_service):
    created = pet_service.create_pet(BRUNO)
    pet_service.update_pet_by_uid("bruno@1", {"petUID": "Bruno@2"})

    assert pet_service.get_pet_by_uid("bruno@2").id == created.id
    with pytest.raises(PetNotFoundError):
        pet_service.get_pet_by_uid("bruno@1")

def test_update_missing_pet_raises_not_found(pet_service):
    with pytest.raises(PetNotFoundError) as exc_info:
        pet_service.update_pet_by_uid("ghost@1", {"age": 1})
    assert exc_info.value.message == NOT_FOUND_MESSAGE

def test_delete_then_fetch_and_second_delete_are_not_found(pet_service):
    pet_service.create_pet(ZEUS)
    pet_service.delete_pet_by_uid("Zeus@1")

    with pytest.raises(PetNotFoundError):
        pet_service.get_pet_by_uid("zeus@1")
    with pytest.raises(PetNotFoundError):
        pet_service.delete_pet_by_uid("zeus@1")

def test_create_rejected_by_schema_is_store_error(pet_service):
    with pytest.raises(PetStoreError) as exc_info:
        pet_service.create_pet({"petName": "Zeus"})
    assert "petUID" in exc_info.value.message
    assert pet_service.list_pets() == []

def test_store_errors_propagate_by_default(broken_store):
    pet_service = PetService(broken_store)
    with pytest.raises(PetStoreError):
        pet_service.list_pets()
    with pytest.raises(PetStoreError):
        pet_service.get_pet_by_uid("zeus@1")
    with pytest.raises(PetStoreError):
        pet_service.update_pet_by_uid("zeus@1", {"age": 1})
    with pytest.raises(PetStoreError):
        pet_service.delete_pet_by_uid("zeus@1")

def test_store_errors_become_not_found_in_compat_mode(broken_store):
    pet_service = PetService(broken_store, store_errors_as_not_found=True)
    for call in (lambda: pet_service.get_pet_by_uid("zeus@1"),
                 lambda: pet_service.update_pet_by_uid("zeus@1", {"age": 1}),
                 lambda: pet_service.delete_pet_by_uid("zeus@1")):
        with pytest.raises(PetNotFoundError) as exc_info:
            call()
        assert exc_info.value.message == CONFLATED_NOT_FOUND_MESSAGE
        assert isinstance(exc_info.value.__cause__, PetStoreError)

    # 목록 조회와 등록은 호환 모드에서도 저장소 오류를 그대로 전달합니다.
    with pytest.raises(PetStoreError):
        pet_service.list_pets()
    with pytest.raises(PetStoreError):
        pet_service.create_pet(ZEUS)
