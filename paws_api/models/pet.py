# paws_api/models/pet.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from paws_api.utils.datetime_utils import DateTimeUtils

# 대소문자 구분 없이 조회할 수 있는 필드 목록 (저장 문서의 키 기준).
LOOKUP_FIELDS = ('petName', 'petUID')

# 저장 문서 키 <-> Pet 속성 매핑
DOCUMENT_FIELDS = {
    'petName': 'pet_name',
    'petType': 'pet_type',
    'petUID': 'pet_uid',
    'age': 'age',
    'vacinationStatus': 'vacination_status',
    'availabilityStatus': 'availability_status',
}


def lookup_key(field_name: str) -> str:
    """조회용 보조 필드 이름을 반환합니다. 예: 'petUID' -> 'petUID_lower'"""
    return f"{field_name}_lower"


def normalize_lookup_value(value: Any) -> str:
    """대소문자 구분 없는 완전 일치 비교를 위해 값을 소문자로 정규화합니다."""
    return str(value).lower()


def with_lookup_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """저장할 문서에 조회용 보조 필드를 채워 넣은 복사본을 반환합니다."""
    document = dict(data)
    for field_name in LOOKUP_FIELDS:
        if field_name in document and document[field_name] is not None:
            document[lookup_key(field_name)] = normalize_lookup_value(document[field_name])
    return document


@dataclass
class Pet:
    """
    Firestore 'pets' 컬렉션 문서 구조.
    문서에는 camelCase 키로 저장되며, 조회용 보조 필드(*_lower)는 모델에 포함하지 않습니다.
    """
    id: str
    pet_name: str
    pet_type: str
    pet_uid: str
    age: int
    vacination_status: bool
    availability_status: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Pet":
        """저장소 문서(딕셔너리)와 문서 ID로부터 Pet 인스턴스를 생성합니다."""
        kwargs = {attr: data.get(key) for key, attr in DOCUMENT_FIELDS.items()}
        return cls(
            id=doc_id,
            created_at=DateTimeUtils.from_firestore(data.get('createdAt')),
            updated_at=DateTimeUtils.from_firestore(data.get('updatedAt')),
            **kwargs
        )
