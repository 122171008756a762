# paws_api/services/pet_store.py
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Any, List, Optional

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from marshmallow import ValidationError

from paws_api.core.errors import PetStoreError
from paws_api.models.pet import Pet, LOOKUP_FIELDS, lookup_key, normalize_lookup_value, with_lookup_keys
from paws_api.schemas.pet_schema import PetDocumentSchema
from paws_api.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


def _format_validation_error(err: ValidationError) -> str:
    """marshmallow 검증 오류를 한 줄짜리 메시지로 변환합니다."""
    messages = err.messages if isinstance(err.messages, dict) else {'_schema': err.messages}
    parts = []
    for field_name, field_messages in messages.items():
        if isinstance(field_messages, (list, tuple)):
            field_messages = ' '.join(str(m) for m in field_messages)
        parts.append(f"{field_name}: {field_messages}")
    return "Pet validation failed: " + ", ".join(parts)


class PetStore(ABC):
    """
    반려동물 문서 저장소 인터페이스.
    모든 메서드는 저장소 호출 실패 시 PetStoreError를 발생시킵니다.
    """
    schema = PetDocumentSchema()

    @abstractmethod
    def find_all(self) -> List[Pet]: ...

    @abstractmethod
    def find_by_id(self, pet_id: str) -> Optional[Pet]: ...

    @abstractmethod
    def find_one_by_field(self, field_name: str, value: str) -> Optional[Pet]:
        """field_name 값이 value와 대소문자 구분 없이 완전히 일치하는 문서 하나를 반환합니다."""

    @abstractmethod
    def insert(self, fields: Dict[str, Any]) -> Pet: ...

    @abstractmethod
    def update_one_by_field(self, field_name: str, value: str, patch: Dict[str, Any]) -> Optional[Pet]:
        """일치하는 문서 하나에 patch를 적용하고 수정 후의 Pet을 반환합니다. 없으면 None."""

    @abstractmethod
    def delete_one_by_field(self, field_name: str, value: str) -> bool: ...

    def _validate(self, data: Any, partial: bool = False) -> Dict[str, Any]:
        try:
            return self.schema.load(data, partial=partial)
        except ValidationError as err:
            logger.warning(f"Pet document rejected by schema: {err.messages}")
            raise PetStoreError(_format_validation_error(err), details=err.messages) from err

    @staticmethod
    def _check_lookup_field(field_name: str) -> str:
        if field_name not in LOOKUP_FIELDS:
            raise PetStoreError(f"'{field_name}' is not a lookup field. Use one of: {', '.join(LOOKUP_FIELDS)}")
        return lookup_key(field_name)


class FirestorePetStore(PetStore):
    """Firestore 컬렉션을 사용하는 저장소 구현."""

    def __init__(self, client, collection_name: str = 'pets'):
        self.db = client
        self.pets_ref = self.db.collection(collection_name)
        logger.info(f"FirestorePetStore initialized (collection: {collection_name})")

    @contextmanager
    def _store_call(self, operation: str):
        """Firestore 호출 중 발생한 예외를 PetStoreError로 감쌉니다."""
        try:
            yield
        except PetStoreError:
            raise
        except Exception as e:
            logger.error(f"Firestore {operation} failed: {e}", exc_info=True)
            raise PetStoreError(str(e)) from e

    def _query_by_field(self, field_name: str, value: str):
        key = self._check_lookup_field(field_name)
        return self.pets_ref.where(filter=FieldFilter(key, "==", normalize_lookup_value(value))).limit(1)

    def find_all(self) -> List[Pet]:
        with self._store_call("find_all"):
            return [Pet.from_document(doc.id, doc.to_dict()) for doc in self.pets_ref.stream()]

    def find_by_id(self, pet_id: str) -> Optional[Pet]:
        with self._store_call("find_by_id"):
            doc = self.pets_ref.document(pet_id).get()
            if not doc.exists:
                return None
            return Pet.from_document(doc.id, doc.to_dict())

    def find_one_by_field(self, field_name: str, value: str) -> Optional[Pet]:
        with self._store_call("find_one_by_field"):
            for doc in self._query_by_field(field_name, value).stream():
                return Pet.from_document(doc.id, doc.to_dict())
            return None

    def insert(self, fields: Dict[str, Any]) -> Pet:
        document = with_lookup_keys(self._validate(fields))
        timestamp = DateTimeUtils.now()
        document['createdAt'] = timestamp
        document['updatedAt'] = timestamp
        with self._store_call("insert"):
            # document()는 ID가 자동 생성된 새 문서 참조를 반환합니다.
            doc_ref = self.pets_ref.document()
            doc_ref.set(document)
            logger.info(f"Pet document created: {doc_ref.id}")
            return Pet.from_document(doc_ref.id, document)

    def update_one_by_field(self, field_name: str, value: str, patch: Dict[str, Any]) -> Optional[Pet]:
        query = self._query_by_field(field_name, value)
        transaction = self.db.transaction()

        # 조회와 수정을 하나의 트랜잭션에서 처리합니다. 대상 문서가 있을 때만 patch를 검증합니다.
        @firestore.transactional
        def _update_in_transaction(transaction):
            snapshots = list(query.stream(transaction=transaction))
            if not snapshots:
                return None, {}
            changes = with_lookup_keys(self._validate(patch, partial=True))
            changes['updatedAt'] = DateTimeUtils.now()
            snapshot = snapshots[0]
            transaction.update(snapshot.reference, changes)
            updated = snapshot.to_dict()
            updated.update(changes)
            return Pet.from_document(snapshot.id, updated), changes

        with self._store_call("update_one_by_field"):
            pet, changes = _update_in_transaction(transaction)
            if pet:
                logger.info(f"Pet document updated: {pet.id} (fields: {list(changes.keys())})")
            return pet

    def delete_one_by_field(self, field_name: str, value: str) -> bool:
        query = self._query_by_field(field_name, value)
        transaction = self.db.transaction()

        @firestore.transactional
        def _delete_in_transaction(transaction):
            snapshots = list(query.stream(transaction=transaction))
            if not snapshots:
                return None
            transaction.delete(snapshots[0].reference)
            return snapshots[0].id

        with self._store_call("delete_one_by_field"):
            deleted_id = _delete_in_transaction(transaction)
            if deleted_id is None:
                return False
            logger.info(f"Pet document deleted: {deleted_id}")
            return True


class InMemoryPetStore(PetStore):
    """
    프로세스 메모리에 문서를 보관하는 저장소 구현.
    Firebase 인증 정보 없이 로컬에서 실행하거나 테스트할 때 사용합니다.
    """

    def __init__(self):
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _match(self, field_name: str, value: str) -> Optional[str]:
        key = self._check_lookup_field(field_name)
        wanted = normalize_lookup_value(value)
        for pet_id, document in self._documents.items():
            if document.get(key) == wanted:
                return pet_id
        return None

    def find_all(self) -> List[Pet]:
        with self._lock:
            return [Pet.from_document(pet_id, dict(doc)) for pet_id, doc in self._documents.items()]

    def find_by_id(self, pet_id: str) -> Optional[Pet]:
        with self._lock:
            document = self._documents.get(pet_id)
            return Pet.from_document(pet_id, dict(document)) if document is not None else None

    def find_one_by_field(self, field_name: str, value: str) -> Optional[Pet]:
        with self._lock:
            pet_id = self._match(field_name, value)
            if pet_id is None:
                return None
            return Pet.from_document(pet_id, dict(self._documents[pet_id]))

    def insert(self, fields: Dict[str, Any]) -> Pet:
        document = with_lookup_keys(self._validate(fields))
        timestamp = DateTimeUtils.now()
        document['createdAt'] = timestamp
        document['updatedAt'] = timestamp
        pet_id = uuid.uuid4().hex
        with self._lock:
            self._documents[pet_id] = document
        logger.info(f"Pet document created: {pet_id}")
        return Pet.from_document(pet_id, dict(document))

    def update_one_by_field(self, field_name: str, value: str, patch: Dict[str, Any]) -> Optional[Pet]:
        with self._lock:
            pet_id = self._match(field_name, value)
            if pet_id is None:
                return None
            changes = with_lookup_keys(self._validate(patch, partial=True))
            changes['updatedAt'] = DateTimeUtils.now()
            self._documents[pet_id].update(changes)
            document = dict(self._documents[pet_id])
        logger.info(f"Pet document updated: {pet_id} (fields: {list(changes.keys())})")
        return Pet.from_document(pet_id, document)

    def delete_one_by_field(self, field_name: str, value: str) -> bool:
        with self._lock:
            pet_id = self._match(field_name, value)
            if pet_id is None:
                return False
            del self._documents[pet_id]
        logger.info(f"Pet document deleted: {pet_id}")
        return True
