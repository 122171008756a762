# paws_api/api/pets/services.py
import logging
from typing import Dict, Any, List

from paws_api.core.errors import PetNotFoundError, PetStoreError
from paws_api.models.pet import Pet
from paws_api.services.pet_store import PetStore

logger = logging.getLogger(__name__)

UID_FIELD = 'petUID'
NOT_FOUND_MESSAGE = "Pet not found"
# 호환 모드에서 저장소 오류를 404로 바꿀 때 사용하는 일반 메시지
CONFLATED_NOT_FOUND_MESSAGE = "No Pet found with the specified UID."


class PetService:
    """반려동물 목록/조회/등록/수정/삭제를 담당하는 서비스. 상태는 주입받은 저장소뿐입니다."""

    def __init__(self, store: PetStore, store_errors_as_not_found: bool = False):
        self.store = store
        self.store_errors_as_not_found = store_errors_as_not_found
        logger.info(f"PetService initialized (store_errors_as_not_found={store_errors_as_not_found}).")

    def _conflate_store_error(self, uid: str, err: PetStoreError) -> None:
        """호환 모드이면 저장소 오류를 PetNotFoundError로 바꿔 발생시킵니다."""
        if self.store_errors_as_not_found:
            logger.warning(f"Store error for petUID '{uid}' reported as not found: {err.message}")
            raise PetNotFoundError(CONFLATED_NOT_FOUND_MESSAGE) from err

    def list_pets(self) -> List[Pet]:
        """저장된 모든 반려동물을 조회합니다. 순서는 저장소가 결정합니다."""
        return self.store.find_all()

    def get_pet_by_uid(self, uid: str) -> Pet:
        """petUID가 uid와 대소문자 구분 없이 일치하는 반려동물을 조회합니다."""
        try:
            pet = self.store.find_one_by_field(UID_FIELD, uid)
        except PetStoreError as e:
            self._conflate_store_error(uid, e)
            raise
        if pet is None:
            raise PetNotFoundError(NOT_FOUND_MESSAGE)
        return pet

    def create_pet(self, data: Dict[str, Any]) -> Pet:
        """반려동물을 등록합니다. 필드 검증은 저장소 스키마가 담당합니다."""
        pet = self.store.insert(data)
        logger.info(f"Pet registered: {pet.id} (petUID: {pet.pet_uid})")
        return pet

    def update_pet_by_uid(self, uid: str, patch: Dict[str, Any]) -> Pet:
        """patch에 포함된 필드만 수정하고 수정 후의 반려동물을 반환합니다. id는 변경되지 않습니다."""
        try:
            pet = self.store.update_one_by_field(UID_FIELD, uid, patch)
        except PetStoreError as e:
            self._conflate_store_error(uid, e)
            raise
        if pet is None:
            raise PetNotFoundError(NOT_FOUND_MESSAGE)
        logger.info(f"Pet updated: {pet.id} with fields: {list(patch.keys())}")
        return pet

    def delete_pet_by_uid(self, uid: str) -> None:
        try:
            deleted = self.store.delete_one_by_field(UID_FIELD, uid)
        except PetStoreError as e:
            self._conflate_store_error(uid, e)
            raise
        if not deleted:
            raise PetNotFoundError(NOT_FOUND_MESSAGE)
        logger.info(f"Pet deleted (petUID: {uid})")
