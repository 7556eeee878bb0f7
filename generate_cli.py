"""
GoPlaces 생성 API 호출 스크립트

사용 예:
    python generate_cli.py --lat 25.1972 --lng 55.2744 --image me.jpg
    python generate_cli.py --lat 48.8584 --lng 2.2945          # 캐시된 사진 사용
    python generate_cli.py --clear
"""
import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from client.api_client import GenerationRequestError, GoPlacesClient, PayloadMissingError
from client.photo_cache import PhotoCache
from core.dms import to_dms

logger = logging.getLogger("generate_cli")

DEFAULT_CACHE_PATH = Path.home() / ".goplaces" / "local_storage.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="위치와 사진으로 GoPlaces 이미지를 생성합니다")
    parser.add_argument("--lat", type=float, help="위도")
    parser.add_argument("--lng", type=float, help="경도")
    parser.add_argument("--image", type=Path, help="사진 파일 (생략하면 캐시된 사진 사용)")
    parser.add_argument("--api-url", default=None, help="생성 API 주소 (기본값: API_URL 환경변수)")
    parser.add_argument("--cache", type=Path, default=DEFAULT_CACHE_PATH, help="사진 캐시 파일 경로")
    parser.add_argument("--clear", action="store_true", help="캐시된 사진 삭제")
    return parser


def main(argv=None) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    cache = PhotoCache(args.cache)

    if args.clear:
        cache.clear()
        logger.info("캐시된 사진을 삭제했습니다.")
        return 0

    if args.lat is None or args.lng is None:
        logger.error("--lat, --lng 값이 필요합니다.")
        return 2

    api_url = args.api_url or os.getenv("VITE_API_URL") or os.getenv("API_URL") or "http://localhost:3001/api/generate"
    client = GoPlacesClient(api_url, cache)

    logger.info(f"위치: {to_dms(args.lat, args.lng)}")
    try:
        image_url = client.generate(args.lat, args.lng, args.image)
    except (PayloadMissingError, GenerationRequestError) as e:
        logger.error(str(e))
        return 1

    print(image_url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
