# paws_api/api/pets/schemas.py
from marshmallow import Schema, fields

from paws_api.utils.datetime_utils import to_iso


def _iso_or_none(value):
    return to_iso(value) if value else None


class PetResponseSchema(Schema):
    """반려동물 응답 스키마. Pet 객체의 속성을 camelCase 키로 직렬화합니다."""
    id = fields.Str(dump_only=True)
    pet_name = fields.Str(data_key="petName")
    pet_type = fields.Str(data_key="petType")
    pet_uid = fields.Str(data_key="petUID")
    age = fields.Int()
    vacination_status = fields.Bool(data_key="vacinationStatus")
    availability_status = fields.Bool(data_key="availabilityStatus")
    created_at = fields.Function(lambda pet: _iso_or_none(pet.created_at), data_key="createdAt")
    updated_at = fields.Function(lambda pet: _iso_or_none(pet.updated_at), data_key="updatedAt")

class MessageSchema(Schema):
    """성공/오류 메시지 응답 스키마."""
    message = fields.Str(required=True)
