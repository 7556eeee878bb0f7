"""위치 기반 이미지 생성 API 라우터"""
import logging
import os
from typing import Optional, Union

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from schemas.generation import (
    Coordinate,
    ErrorResponse,
    GenerateResponse,
    GenerationFailure,
    GenerationRequest,
)
from services.generation_service import FAILURE_PREFIX, MISSING_IMAGE_MESSAGE
from services.upload_service import staged_upload

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Image Generation"]
)

SUCCESS_MESSAGE = "Image generated successfully with fal.ai"


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def generate(
    request: Request,
    lat: Optional[str] = Form(None),
    lng: Optional[str] = Form(None),
    image: Union[UploadFile, str, None] = File(None),
):
    """
    선택한 위치와 업로드한 사진으로 합성 이미지를 생성합니다.

    - 사진은 외부 스토리지에 업로드된 뒤 생성 모델의 참조 이미지로 사용됩니다.
    - 업로드 임시 파일은 요청이 끝나면 항상 삭제됩니다.

    Returns:
        {"success": true, "imageUrl": ..., "message": ..., "requestId": ...}
        실패 시 {"error": ...} (400: 입력 오류, 500: 외부 서비스 오류)
    """
    logger.info("--- 이미지 생성 요청 수신 ---")
    try:
        # 파일이 아닌 일반 텍스트 필드로 온 image는 누락으로 처리
        if not isinstance(image, StarletteUploadFile):
            image = None
        logger.info(
            f"요청 데이터: lat={lat}, lng={lng}, file="
            f"{(image.filename, image.content_type) if image else 'No file provided'}"
        )

        if image is None or not image.filename:
            logger.error(f"오류: {MISSING_IMAGE_MESSAGE}")
            return _error(MISSING_IMAGE_MESSAGE, 400)

        try:
            coordinate = Coordinate.parse(lat, lng)
        except ValueError as e:
            logger.error(f"잘못된 좌표: {e}")
            return _error(f"Invalid coordinates: lat={lat}, lng={lng}", 400)

        relay = request.app.state.relay
        upload_dir = request.app.state.settings.upload_dir
        suffix = os.path.splitext(image.filename)[1]

        with staged_upload(image.file, upload_dir, suffix) as staged_path:
            generation_request = GenerationRequest(
                coordinate=coordinate,
                image_bytes=staged_path.read_bytes(),
                media_type=image.content_type,
            )
            result = relay.generate(generation_request)

        if isinstance(result, GenerationFailure):
            return _error(result.message, result.status_code)

        return GenerateResponse(
            imageUrl=result.image_url,
            message=SUCCESS_MESSAGE,
            requestId=result.request_id,
        )
    except Exception as e:
        logger.error(f"이미지 생성 중 오류: {e}", exc_info=True)
        return _error(FAILURE_PREFIX + str(e), 500)
    finally:
        logger.info("--- 요청 처리 완료 ---")
