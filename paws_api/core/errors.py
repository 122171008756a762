# paws_api/core/errors.py
"""반려동물 API 전반에서 사용하는 예외 계층."""


class PetApiError(Exception):
    """모든 도메인 예외의 기반 클래스. message는 그대로 클라이언트 응답에 사용됩니다."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PetNotFoundError(PetApiError):
    """조회 조건에 맞는 반려동물 문서가 없을 때 발생합니다."""
    status_code = 404


class PetStoreError(PetApiError):
    """저장소 호출 자체가 실패했을 때 발생합니다 (스키마 검증 실패 포함)."""
    status_code = 500

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.details = details
