# paws_api/api/pets/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app

from paws_api.core.errors import PetNotFoundError, PetStoreError
from .schemas import PetResponseSchema, MessageSchema

logger = logging.getLogger(__name__)

pets_bp = Blueprint('pets_bp', __name__)

DELETED_MESSAGE = "Pet Deleted Successfully!"


def _request_body() -> dict:
    """요청 본문을 dict로 가져옵니다. JSON 객체가 아니면 빈 dict로 취급합니다."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

def _message(message: str, status_code: int):
    return jsonify(MessageSchema().dump({"message": message})), status_code


@pets_bp.route('/', methods=['GET'], strict_slashes=False)
def get_pets():
    """전체 반려동물 목록을 조회합니다."""
    pet_service = current_app.services['pets']
    try:
        pets = pet_service.list_pets()
        return jsonify(PetResponseSchema(many=True).dump(pets)), 200
    except PetStoreError as e:
        logger.error(f"Get pets API error: {e}", exc_info=True)
        return _message(e.message, 500)

@pets_bp.route('/<string:uid>', methods=['GET'])
def get_pet_by_uid(uid: str):
    """petUID로 반려동물을 조회합니다 (대소문자 구분 없음)."""
    pet_service = current_app.services['pets']
    try:
        pet = pet_service.get_pet_by_uid(uid)
        return jsonify(PetResponseSchema().dump(pet)), 200
    except PetNotFoundError as e:
        return _message(e.message, 404)
    except PetStoreError as e:
        logger.error(f"Get pet API error (uid: {uid}): {e}", exc_info=True)
        return _message(e.message, 500)

@pets_bp.route('/', methods=['POST'], strict_slashes=False)
def add_pet():
    """반려동물을 등록합니다."""
    pet_service = current_app.services['pets']
    try:
        new_pet = pet_service.create_pet(_request_body())
        return jsonify(PetResponseSchema().dump(new_pet)), 201
    except PetStoreError as e:
        logger.error(f"Add pet API error: {e}")
        return _message(e.message, 500)

@pets_bp.route('/<string:uid>', methods=['PUT'])
def update_pet_by_uid(uid: str):
    """petUID로 반려동물 정보를 수정합니다 (본문에 포함된 필드만 변경)."""
    pet_service = current_app.services['pets']
    try:
        updated_pet = pet_service.update_pet_by_uid(uid, _request_body())
        return jsonify(PetResponseSchema().dump(updated_pet)), 200
    except PetNotFoundError as e:
        return _message(e.message, 404)
    except PetStoreError as e:
        logger.error(f"Update pet API error (uid: {uid}): {e}")
        return _message(e.message, 500)

@pets_bp.route('/<string:uid>', methods=['DELETE'])
def delete_pet_by_uid(uid: str):
    """petUID로 반려동물을 삭제합니다."""
    pet_service = current_app.services['pets']
    try:
        pet_service.delete_pet_by_uid(uid)
        return _message(DELETED_MESSAGE, 200)
    except PetNotFoundError as e:
        return _message(e.message, 404)
    except PetStoreError as e:
        logger.error(f"Delete pet API error (uid: {uid}): {e}", exc_info=True)
        return _message(e.message, 500)
