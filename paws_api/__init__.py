# paws_api/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials, firestore

# - 설정 및 예외
from paws_api.core.config import config_by_name
from paws_api.core.errors import PetApiError

# - API 블루프린트
from paws_api.api.pets.routes import pets_bp

# - 서비스 모듈
from paws_api.api.pets.services import PetService
from paws_api.services.pet_store import PetStore, FirestorePetStore, InMemoryPetStore

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'


def _configure_logging(app: Flask) -> None:
    """루트 로거의 포맷과 레벨을 설정합니다. 다른 로깅 호출보다 먼저 실행되어야 합니다."""
    # basicConfig는 핸들러가 이미 있으면 아무것도 하지 않으므로 레벨은 따로 지정합니다.
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(app.config['LOG_LEVEL'])



def _create_pet_store(app: Flask) -> PetStore:
    """설정된 백엔드에 맞는 반려동물 저장소를 생성합니다."""
    backend = app.config['PET_STORE_BACKEND']
    if backend == 'memory':
        logger.warning("Using in-memory pet store. Data will be lost on restart.")
        return InMemoryPetStore()
    if backend != 'firestore':
        raise ValueError(f"알 수 없는 PET_STORE_BACKEND 값입니다: {backend}")

    if not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred)
    return FirestorePetStore(firestore.client(), collection_name=app.config['PETS_COLLECTION'])


def create_app(config_name: str = None, pet_store: PetStore = None):
    """
    Flask 애플리케이션 팩토리 함수.

    pet_store를 넘기면 설정과 무관하게 해당 저장소를 사용합니다 (테스트, 임베딩 용도).
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False
    app.json.sort_keys = False
    _configure_logging(app)

    # =====================================================================================
    # 4. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    try:
        app.services['pet_store'] = pet_store if pet_store is not None else _create_pet_store(app)
        logger.info(f"Pet store initialized: {type(app.services['pet_store']).__name__}")
    except Exception as e:
        logger.error(f"Failed to initialize pet store: {e}")
        raise

    app.services['pets'] = PetService(
        store=app.services['pet_store'],
        store_errors_as_not_found=app.config['PET_STORE_ERRORS_AS_NOT_FOUND']
    )

    # =====================================================================================
    # 5. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(pets_bp, url_prefix='/api/pets')

    # =====================================================================================
    # 6. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(PetApiError)
    def handle_pet_api_error(err):
        return jsonify({"message": err.message}), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logger.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return jsonify({"message": "Internal server error"}), 500

    # =====================================================================================
    # 7. 앱 반환
    # =====================================================================================
    logger.info(f"Flask app created for '{config_name}' environment.")

    return app
