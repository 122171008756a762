# paws_api/conftest.py
import pytest
from unittest.mock import MagicMock

from paws_api import create_app
from paws_api.core.errors import PetStoreError
from paws_api.services.pet_store import PetStore, InMemoryPetStore

ZEUS = {
    "petName": "Zeus",
    "petType": "Cat",
    "petUID": "zeus@1",
    "age": 5,
    "vacinationStatus": False,
    "availabilityStatus": True,
}

BRUNO = {
    "petName": "Bruno",
    "petType": "Dog",
    "petUID": "bruno@1",
    "age": 2,
    "vacinationStatus": True,
    "availabilityStatus": True,
}


@pytest.fixture
def pet_store():
    return InMemoryPetStore()

@pytest.fixture
def app(pet_store):
    app = create_app('testing', pet_store=pet_store)
    return app

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def broken_store():
    """모든 호출이 저장소 오류로 실패하는 저장소."""
    store = MagicMock(spec=PetStore)
    error = PetStoreError("connection reset by peer")
    for method in ('find_all', 'find_by_id', 'find_one_by_field', 'insert',
                   'update_one_by_field', 'delete_one_by_field'):
        getattr(store, method).side_effect = error
    return store
