"""fal.ai 이미지 생성 클라이언트"""
import logging
from typing import Any, Dict, Iterator, List, Optional

import fal_client

from schemas.generation import GenerationLog

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """생성 서비스 호출 실패 또는 결과 없음"""


class GenerationJob:
    """
    큐에 제출된 생성 요청 1건

    logs()는 진행 로그를 지연 시퀀스로 돌려주고, result()는 최종 결과를
    기다립니다. logs() 소비 여부와 관계없이 result()는 같은 값을 반환합니다.
    """

    def __init__(self, handle):
        self._handle = handle

    @property
    def request_id(self) -> str:
        return self._handle.request_id

    def logs(self) -> Iterator[GenerationLog]:
        """
        IN_PROGRESS / COMPLETED 상태의 로그 라인을 순서대로 반환

        상태 조회가 실패하면 경고만 남기고 종료합니다. 성공 여부는 result()가 결정합니다.
        """
        seen = 0
        try:
            for status in self._handle.iter_events(with_logs=True):
                if not isinstance(status, (fal_client.InProgress, fal_client.Completed)):
                    continue
                entries = status.logs or []
                # 상태 응답마다 전체 로그가 다시 올 수 있으므로 새 항목만
                for entry in entries[seen:]:
                    yield GenerationLog(
                        message=entry.get("message", ""),
                        level=entry.get("level"),
                    )
                seen = max(seen, len(entries))
        except Exception as e:
            logger.warning(f"[fal.ai] 진행 로그 조회 중단 - request_id: {self.request_id}, {e}")

    def result(self) -> Dict[str, Any]:
        try:
            data = self._handle.get()
        except Exception as e:
            raise GenerationError(str(e)) from e
        return data or {}


class FalImageGenerator:
    """fal.ai 모델에 프롬프트와 이미지 URL을 제출"""

    def __init__(self, client: fal_client.SyncClient, model: str):
        self._client = client
        self.model = model

    def submit(self, prompt: str, image_urls: List[str]) -> GenerationJob:
        """
        생성 요청 제출

        Args:
            prompt: 이미지 생성 프롬프트
            image_urls: 참조 이미지 URL 목록

        Returns:
            GenerationJob
        """
        try:
            handle = self._client.submit(
                self.model,
                arguments={
                    "prompt": prompt,
                    "image_urls": image_urls,
                },
            )
        except Exception as e:
            logger.error(f"[fal.ai] 요청 제출 실패: {e}")
            raise GenerationError(str(e)) from e

        logger.info(f"[fal.ai] 요청 제출 완료 - model: {self.model}, request_id: {handle.request_id}")
        return GenerationJob(handle)


def build_generator(fal_key: str, model: str, client: Optional[fal_client.SyncClient] = None) -> FalImageGenerator:
    return FalImageGenerator(client or fal_client.SyncClient(key=fal_key), model)
