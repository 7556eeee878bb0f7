"""환경변수 및 설정값 관리"""
import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# fal.ai 모델 설정
DEFAULT_FAL_MODEL = "fal-ai/nano-banana-pro/edit"

# 스토리지 백엔드
STORAGE_BACKENDS = ("fal", "s3")


class ConfigurationError(RuntimeError):
    """필수 설정값이 없거나 잘못된 경우"""


class Settings(BaseModel):
    """
    서버 시작 시 한 번 로드되는 설정 객체

    로드 이후에는 변경할 수 없습니다 (frozen).
    """
    model_config = ConfigDict(frozen=True)

    port: int = 3001
    fal_key: str
    fal_model: str = DEFAULT_FAL_MODEL
    storage_backend: str = "fal"

    # AWS S3 설정 (storage_backend == "s3" 일 때만 사용)
    aws_s3_bucket_name: Optional[str] = None
    aws_region: str = "ap-northeast-2"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    s3_folder: str = "goplaces"
    s3_url_expires_in: int = 3600

    upload_dir: str = "uploads"
    log_level: str = "INFO"

    # 클라이언트용 공개 설정
    mapbox_token: Optional[str] = None
    google_maps_api_key: Optional[str] = None
    api_url: Optional[str] = None


def _parse_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} 값이 정수가 아닙니다: {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    환경변수에서 Settings를 생성합니다.

    Args:
        environ: 사용할 환경변수 매핑 (기본값: .env 로드 후 os.environ)

    Returns:
        Settings

    Raises:
        ConfigurationError: 필수 값(FAL_KEY 등)이 없거나 잘못된 경우
    """
    if environ is None:
        load_dotenv()
        environ = os.environ
    env = environ

    fal_key = env.get("FAL_KEY", "").strip()
    if not fal_key:
        raise ConfigurationError(
            "FAL_KEY가 설정되지 않았습니다. .env 파일에 FAL_KEY=<your key> 를 추가하세요."
        )

    storage_backend = env.get("STORAGE_BACKEND", "fal").strip().lower() or "fal"
    if storage_backend not in STORAGE_BACKENDS:
        raise ConfigurationError(
            f"알 수 없는 STORAGE_BACKEND: {storage_backend}. 'fal' 또는 's3'를 사용하세요."
        )

    bucket_name = env.get("AWS_S3_BUCKET_NAME") or None
    if storage_backend == "s3" and not bucket_name:
        raise ConfigurationError("STORAGE_BACKEND=s3 이지만 AWS_S3_BUCKET_NAME이 없습니다.")

    log_level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"알 수 없는 LOG_LEVEL: {log_level}")

    return Settings(
        port=_parse_int(env, "PORT", 3001),
        fal_key=fal_key,
        fal_model=env.get("FAL_MODEL") or DEFAULT_FAL_MODEL,
        storage_backend=storage_backend,
        aws_s3_bucket_name=bucket_name,
        aws_region=env.get("AWS_REGION") or "ap-northeast-2",
        aws_access_key_id=env.get("AWS_ACCESS_KEY_ID") or None,
        aws_secret_access_key=env.get("AWS_SECRET_ACCESS_KEY") or None,
        s3_folder=env.get("AWS_S3_FOLDER") or "goplaces",
        s3_url_expires_in=_parse_int(env, "AWS_S3_URL_EXPIRES_IN", 3600),
        upload_dir=env.get("UPLOAD_DIR") or "uploads",
        log_level=log_level,
        mapbox_token=env.get("VITE_MAPBOX_TOKEN") or env.get("MAPBOX_TOKEN") or None,
        google_maps_api_key=env.get("VITE_GOOGLE_MAPS_API_KEY") or env.get("GOOGLE_MAPS_API_KEY") or None,
        api_url=env.get("VITE_API_URL") or env.get("API_URL") or None,
    )
