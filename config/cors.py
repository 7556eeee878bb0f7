"""CORS 설정"""
import os

# 브라우저 클라이언트는 별도 호스트에서 서빙되므로 기본값은 전체 허용
_origins = os.getenv("CORS_ORIGINS", "*")

CORS_ORIGINS = [origin.strip() for origin in _origins.split(",") if origin.strip()] or ["*"]
# 와일드카드 origin에는 credentials를 허용할 수 없음
CORS_CREDENTIALS = CORS_ORIGINS != ["*"]
CORS_METHODS = ["*"]
CORS_HEADERS = ["*"]
