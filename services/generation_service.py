"""위치 + 사진 -> 합성 이미지 생성 릴레이 서비스"""
import io
import logging
from typing import Any, Dict, Optional

import fal_client
from PIL import Image, UnidentifiedImageError

from config.prompts import LOCATION_PROMPT_TEMPLATE
from config.settings import Settings
from core.dms import to_dms
from core.fal_api import build_generator
from core.storage import build_storage
from schemas.generation import (
    Coordinate,
    GenerationFailure,
    GenerationRequest,
    GenerationResult,
    GenerationSuccess,
)

logger = logging.getLogger(__name__)
# 진행 로그는 진단용으로만 별도 로거에 기록
progress_logger = logging.getLogger("goplaces.generation")

FAILURE_PREFIX = "Failed to generate image. "
NO_IMAGE_MESSAGE = "No image generated"
MISSING_IMAGE_MESSAGE = "No image file provided"


def build_prompt(coordinate: Coordinate) -> str:
    """좌표를 DMS로 변환하여 프롬프트 템플릿에 삽입"""
    location = to_dms(coordinate.lat, coordinate.lng)
    return LOCATION_PROMPT_TEMPLATE.format(location=location)


def extract_image_url(data: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    생성 결과에서 첫 번째 이미지 URL 추출

    images 리스트를 먼저 확인하고, 없으면 단일 image 필드를 확인합니다.
    """
    if not data:
        return None

    images = data.get("images") or []
    if images and isinstance(images[0], dict) and images[0].get("url"):
        return images[0]["url"]

    image = data.get("image")
    if isinstance(image, dict) and image.get("url"):
        return image["url"]
    return None


def resolve_media_type(image_bytes: bytes, declared: Optional[str]) -> Optional[str]:
    """
    이미지 MIME 타입 확인

    선언된 타입이 image/* 이면 그대로 사용하고, 없거나 일반 타입
    (application/octet-stream 등)이면 Pillow로 포맷을 판별합니다.
    """
    if declared and declared.lower().startswith("image/"):
        return declared.lower()

    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            image_format = img.format
    except (UnidentifiedImageError, OSError):
        return None
    return Image.MIME.get(image_format) if image_format else None


class GenerationRelay:
    """
    스토리지 업로드와 이미지 생성 호출을 순서대로 실행하는 릴레이

    요청 간 공유 상태는 생성 시 주입된 협력 객체(스토리지, 생성기)뿐입니다.
    재시도나 부분 결과는 없습니다.
    """

    def __init__(self, storage, generator):
        self.storage = storage
        self.generator = generator

    def generate(self, request: GenerationRequest) -> GenerationResult:
        coordinate = request.coordinate

        if not request.image_bytes:
            logger.error("[GoPlaces Relay] 이미지 데이터가 비어 있습니다")
            return GenerationFailure(message=MISSING_IMAGE_MESSAGE, status_code=400)

        media_type = resolve_media_type(request.image_bytes, request.media_type)
        if not media_type:
            logger.error(f"[GoPlaces Relay] 지원하지 않는 이미지 타입: {request.media_type}")
            return GenerationFailure(
                message=f"Unsupported image type: {request.media_type or 'unknown'}",
                status_code=400,
            )

        # 1. 스토리지 업로드 (실패 시 생성 호출 없이 종료)
        logger.info(f"[GoPlaces Relay] 이미지 업로드 중... ({len(request.image_bytes)} bytes, {media_type})")
        try:
            reference_url = self.storage.upload(request.image_bytes, media_type)
        except Exception as e:
            logger.error(f"[GoPlaces Relay] 스토리지 업로드 실패: {e}")
            return GenerationFailure(message=FAILURE_PREFIX + str(e))
        logger.info(f"[GoPlaces Relay] 이미지 업로드 완료: {reference_url}")

        # 2. 프롬프트 생성
        prompt = build_prompt(coordinate)
        logger.info(f"[GoPlaces Relay] DMS 위치: {to_dms(coordinate.lat, coordinate.lng)}")
        logger.debug(f"[GoPlaces Relay] 프롬프트: {prompt}")

        # 3. 생성 요청 + 진행 로그 관찰
        try:
            job = self.generator.submit(prompt, [reference_url])
            for log in job.logs():
                progress_logger.info(log.message)
            data = job.result()
        except Exception as e:
            logger.error(f"[GoPlaces Relay] 이미지 생성 실패: {e}")
            return GenerationFailure(message=FAILURE_PREFIX + str(e))

        logger.info(f"[GoPlaces Relay] Request ID: {job.request_id}")

        # 4. 결과 URL 추출
        image_url = extract_image_url(data)
        if not image_url:
            logger.error(f"[GoPlaces Relay] 응답에 이미지 URL 없음: {data}")
            return GenerationFailure(message=FAILURE_PREFIX + NO_IMAGE_MESSAGE)

        logger.info(f"[GoPlaces Relay] 이미지 생성 완료: {image_url}")
        return GenerationSuccess(image_url=image_url, request_id=job.request_id)


def build_relay(settings: Settings) -> GenerationRelay:
    """설정으로부터 릴레이 생성 (서버 시작 시 1회)"""
    client = fal_client.SyncClient(key=settings.fal_key)
    storage = build_storage(settings, fal=client)
    generator = build_generator(settings.fal_key, settings.fal_model, client=client)
    logger.info(
        f"[GoPlaces Relay] 초기화 완료 - storage: {settings.storage_backend}, model: {settings.fal_model}"
    )
    return GenerationRelay(storage, generator)
