"""GoPlaces 생성 API 클라이언트"""
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Tuple

import requests

from client.photo_cache import DEFAULT_MEDIA_TYPE, PhotoCache

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to generate image. Please try again."
NO_URL_ERROR = "Failed to generate image. No URL returned."


class PayloadMissingError(RuntimeError):
    """보낼 사진이 없음 (새 파일도, 캐시도 없음)"""


class GenerationRequestError(RuntimeError):
    """생성 API 호출 실패 (사용자에게 보여줄 메시지만 포함)"""


class GoPlacesClient:
    """
    생성 API 호출 클라이언트

    generate()는 "사진 준비 -> 요청 1회" 순서로만 동작하며 재시도하지 않습니다.
    """

    def __init__(self, api_url: str, cache: PhotoCache, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.api_url = api_url
        self.cache = cache
        self.session = session or requests.Session()
        self.timeout = timeout

    def ensure_payload(self, image_path: Optional[Path] = None) -> Tuple[bytes, str]:
        """
        전송할 사진 준비

        새 파일이 주어지면 읽어서 캐시에 저장하고, 없으면 캐시된 사진을 사용합니다.
        """
        if image_path is not None:
            path = Path(image_path)
            try:
                data = path.read_bytes()
            except OSError as e:
                logger.error(f"사진 파일을 읽을 수 없습니다: {e}")
                raise PayloadMissingError(f"Cannot read photo: {path}") from e
            media_type = mimetypes.guess_type(path.name)[0] or DEFAULT_MEDIA_TYPE
            self.cache.save(data, media_type)
            return data, media_type

        cached = self.cache.load()
        if cached is None:
            raise PayloadMissingError("Upload a photo first.")
        return cached

    def generate(self, lat: float, lng: float, image_path: Optional[Path] = None) -> str:
        """
        생성 요청을 보내고 생성된 이미지 URL 반환

        Raises:
            PayloadMissingError: 보낼 사진이 없는 경우
            GenerationRequestError: 응답 오류 또는 네트워크 오류
        """
        data, media_type = self.ensure_payload(image_path)
        extension = mimetypes.guess_extension(media_type) or ".jpg"

        try:
            response = self.session.post(
                self.api_url,
                data={"lat": str(lat), "lng": str(lng)},
                files={"image": (f"uploaded-image{extension}", data, media_type)},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"생성 API 호출 실패: {e}")
            raise GenerationRequestError(GENERIC_ERROR) from e

        image_url = body.get("imageUrl") if isinstance(body, dict) else None
        if not image_url:
            raise GenerationRequestError(NO_URL_ERROR)
        return image_url
