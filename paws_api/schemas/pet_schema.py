from marshmallow import Schema, fields, validate, EXCLUDE


class StrictBool(fields.Boolean):
    """JSON true/false만 허용합니다. 1, 0, "true" 같은 값은 거부합니다."""
    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, bool):
            raise self.make_error("invalid", input=value)
        return value

class StrictInt(fields.Integer):
    """정수만 허용합니다. bool은 int의 하위 타입이지만 거부합니다."""
    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, bool):
            raise self.make_error("invalid", input=value)
        return super()._deserialize(value, attr, data, **kwargs)


class PetDocumentSchema(Schema):
    """Pet 문서가 저장소에 기록되기 전에 통과해야 하는 스키마.

    핸들러는 검증을 하지 않으며, 저장소(PetStore)가 insert/update 시 이 스키마를 적용합니다.
    id, createdAt 등 스키마에 없는 키는 저장되지 않고 버려집니다.
    """
    class Meta:
        unknown = EXCLUDE

    petName = fields.Str(required=True, validate=validate.Length(min=1))
    # 'Dog', 'Cat' 등 자유 텍스트. 열거형 제한은 두지 않습니다.
    petType = fields.Str(required=True, validate=validate.Length(min=1))
    petUID = fields.Str(required=True, validate=validate.Length(min=1))
    age = StrictInt(required=True, strict=True, validate=validate.Range(min=0))
    vacinationStatus = StrictBool(required=True)
    availabilityStatus = StrictBool(required=True)
