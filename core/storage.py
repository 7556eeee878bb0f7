"""업로드 이미지 스토리지 (fal.ai storage / S3)"""
import logging

import fal_client

from config.settings import Settings

logger = logging.getLogger(__name__)


class StorageUploadError(RuntimeError):
    """외부 스토리지 업로드 실패"""


class FalStorage:
    """fal.ai storage에 업로드하고 참조 URL을 반환"""

    def __init__(self, client: fal_client.SyncClient):
        self._client = client

    def upload(self, data: bytes, content_type: str) -> str:
        try:
            url = self._client.upload(data, content_type)
        except Exception as e:
            logger.error(f"[fal storage] 업로드 오류: {e}")
            raise StorageUploadError(str(e)) from e

        if not url:
            raise StorageUploadError("Storage did not return a reference URL")
        return url


def build_storage(settings: Settings, fal=None):
    """설정에 맞는 스토리지 백엔드 생성"""
    if settings.storage_backend == "s3":
        # boto3는 S3를 쓸 때만 필요
        from core.s3_client import S3Storage

        return S3Storage(
            bucket_name=settings.aws_s3_bucket_name,
            region=settings.aws_region,
            folder=settings.s3_folder,
            expires_in=settings.s3_url_expires_in,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
    return FalStorage(fal or fal_client.SyncClient(key=settings.fal_key))
