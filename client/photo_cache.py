"""업로드 사진 로컬 캐시 (base64 data URL)"""
import base64
import binascii
import json
import logging
import re
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

PHOTO_CACHE_KEY = "goplaces_uploaded_image"
DEFAULT_MEDIA_TYPE = "image/jpeg"

_DATA_URL_RE = re.compile(r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+)?;base64,(?P<data>.*)$", re.DOTALL)


def encode_data_url(data: bytes, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{media_type};base64,{encoded}"


def decode_data_url(data_url: str) -> Tuple[bytes, str]:
    """
    data URL을 (bytes, media_type)으로 변환

    Raises:
        ValueError: base64 data URL 형식이 아닌 경우
    """
    match = _DATA_URL_RE.match(data_url or "")
    if not match:
        raise ValueError("base64 data URL 형식이 아닙니다")
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"base64 디코딩 실패: {e}") from e
    return data, match.group("media_type") or DEFAULT_MEDIA_TYPE


class PhotoCache:
    """
    브라우저 localStorage에 해당하는 JSON 파일 저장소

    사진은 고정 키(goplaces_uploaded_image)에 data URL로 저장됩니다.
    """

    def __init__(self, path: Path, key: str = PHOTO_CACHE_KEY):
        self.path = Path(path)
        self.key = key

    def _read_store(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            store = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"캐시 파일을 읽을 수 없습니다: {e}")
            return {}
        return store if isinstance(store, dict) else {}

    def _write_store(self, store: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(store), encoding="utf-8")

    def save(self, data: bytes, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
        data_url = encode_data_url(data, media_type)
        store = self._read_store()
        store[self.key] = data_url
        self._write_store(store)
        return data_url

    def load(self) -> Optional[Tuple[bytes, str]]:
        """저장된 사진 반환. 손상된 항목은 삭제하고 None 반환"""
        data_url = self._read_store().get(self.key)
        if not data_url:
            return None
        try:
            return decode_data_url(data_url)
        except ValueError as e:
            logger.error(f"저장된 이미지 로드 오류: {e}")
            self.clear()
            return None

    def clear(self) -> None:
        store = self._read_store()
        if store.pop(self.key, None) is not None:
            self._write_store(store)
