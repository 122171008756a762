# paws_api/core/config.py

import os # 'os' 모듈: 환경 변수를 읽기 위해 사용합니다.


def _env_flag(name: str, default: bool = False) -> bool:
    """'true', '1', 'yes' 형태의 환경 변수를 bool 값으로 해석합니다."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes', 'on')


class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # 반려동물 문서가 저장되는 Firestore 컬렉션 이름입니다.
    PETS_COLLECTION = os.getenv('PETS_COLLECTION', 'pets')
    # 저장소 백엔드: 'firestore'(기본) 또는 'memory'(인증 파일 없이 로컬 실행 시).
    PET_STORE_BACKEND = os.getenv('PET_STORE_BACKEND', 'firestore')
    # True이면 UID 기반 조회/수정/삭제 중 발생한 저장소 오류를 404로 응답합니다 (구 API 호환 모드).
    # False이면 저장소 오류는 500으로, '없음'만 404로 구분해서 응답합니다.
    PET_STORE_ERRORS_AS_NOT_FOUND = _env_flag('PET_STORE_ERRORS_AS_NOT_FOUND', False)
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    # 코드 변경 시 자동 재시작, 에러 발생 시 상세 디버그 정보를 표시합니다.
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH', Config.FIREBASE_CREDENTIALS_PATH)

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')
    # 테스트는 기본적으로 Firebase 없이 메모리 저장소를 사용합니다.
    PET_STORE_BACKEND = os.getenv('TEST_PET_STORE_BACKEND', 'memory')

class ProductionConfig(Config):
    """운영 환경 설정 클래스입니다."""
    DEBUG = False

# config_by_name: FLASK_ENV 값('development', 'testing', 'production')과 설정 클래스를 매핑합니다.
# paws_api/__init__.py의 create_app 함수에서 사용됩니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
