"""위치 기반 이미지 생성 API를 위한 Pydantic 스키마"""
import math
import time
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coordinate(BaseModel):
    """위도/경도 (생성 후 변경 불가)"""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    @field_validator("lat", "lng")
    @classmethod
    def _must_be_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("좌표는 유한한 숫자여야 합니다")
        return value

    @classmethod
    def parse(cls, lat: Optional[str], lng: Optional[str]) -> "Coordinate":
        """폼 필드 문자열에서 좌표 생성 (잘못된 값이면 ValueError)"""
        if lat is None or lng is None or not str(lat).strip() or not str(lng).strip():
            raise ValueError("lat, lng 값이 필요합니다")
        try:
            lat_value = float(lat)
            lng_value = float(lng)
        except (TypeError, ValueError):
            raise ValueError(f"잘못된 좌표 값입니다: lat={lat!r}, lng={lng!r}")
        return cls(lat=lat_value, lng=lng_value)


class GenerationRequest(BaseModel):
    """생성 요청 1건 (좌표 1개 + 이미지 1개)"""
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    image_bytes: bytes
    media_type: Optional[str] = None


class GenerationSuccess(BaseModel):
    image_url: str
    request_id: str
    success: bool = True


class GenerationFailure(BaseModel):
    message: str
    status_code: int = 500
    success: bool = False


GenerationResult = Union[GenerationSuccess, GenerationFailure]


class GenerationLog(BaseModel):
    """생성 서비스 진행 로그 이벤트"""
    message: str
    level: Optional[str] = None
    timestamp: float = Field(default_factory=time.time)


class GenerateResponse(BaseModel):
    """POST /api/generate 성공 응답"""
    success: bool = True
    imageUrl: str
    message: str
    requestId: str


class ErrorResponse(BaseModel):
    error: str


class ClientConfigResponse(BaseModel):
    """브라우저 클라이언트용 공개 설정"""
    mapboxToken: Optional[str] = None
    googleMapsApiKey: Optional[str] = None
    apiUrl: Optional[str] = None
