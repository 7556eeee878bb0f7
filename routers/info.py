from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from schemas.generation import ClientConfigResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, tags=["정보"])
async def health_check():
    """서버 상태 확인"""
    return "GoPlaces API is running"


@router.get("/api/config", response_model=ClientConfigResponse, tags=["정보"])
async def client_config(request: Request):
    """
    브라우저 클라이언트 설정 조회

    지도 토큰, 장소 검색 키, 생성 API 주소 등 공개 가능한 값만 반환합니다.
    """
    settings = request.app.state.settings
    return ClientConfigResponse(
        mapboxToken=settings.mapbox_token,
        googleMapsApiKey=settings.google_maps_api_key,
        apiUrl=settings.api_url,
    )
