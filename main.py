"""FastAPI 메인 애플리케이션"""

from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.cors import CORS_ORIGINS, CORS_CREDENTIALS, CORS_METHODS, CORS_HEADERS
from config.settings import Settings, load_settings
from routers import info, generation
from services.generation_service import GenerationRelay, build_relay

# 로깅 설정
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def create_app(settings: Optional[Settings] = None, relay: Optional[GenerationRelay] = None) -> FastAPI:
    """
    FastAPI 앱 생성

    settings/relay를 주입하지 않으면 서버 시작 시 환경변수에서 로드합니다.
    FAL_KEY 등 필수 설정이 없으면 시작 단계에서 실패합니다.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """서버 시작 시 설정과 릴레이를 한 번 생성합니다."""
        if app.state.settings is None:
            app.state.settings = load_settings()
        logging.getLogger().setLevel(app.state.settings.log_level)
        if app.state.relay is None:
            app.state.relay = build_relay(app.state.settings)
        logger.info(f"GoPlaces API 준비 완료 (port {app.state.settings.port})")
        yield

    app = FastAPI(
        title="GoPlaces API",
        description="지도에서 고른 위치와 사진으로 fal.ai 합성 이미지를 생성하는 릴레이 API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=CORS_CREDENTIALS,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    # 라우터 등록
    app.include_router(info.router)
    app.include_router(generation.router)

    app.state.settings = settings
    app.state.relay = relay

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
