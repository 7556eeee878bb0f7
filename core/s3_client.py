"""S3 클라이언트"""
import logging
import mimetypes
import uuid
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.storage import StorageUploadError

logger = logging.getLogger(__name__)


class S3Storage:
    """
    업로드한 사진을 S3에 저장하고 pre-signed URL을 돌려주는 스토리지

    생성 서비스가 이미지를 직접 내려받아야 하므로 공개 URL 대신
    만료 시간이 있는 pre-signed GET URL을 사용합니다.
    """

    def __init__(
        self,
        bucket_name: str,
        region: str = "ap-northeast-2",
        folder: str = "goplaces",
        expires_in: int = 3600,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        s3_client=None,
    ):
        self.bucket_name = bucket_name
        self.region = region
        self.folder = folder.strip("/")
        self.expires_in = expires_in
        self._client = s3_client or boto3.client(
            's3',
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region
        )

    def _build_key(self, content_type: str) -> str:
        extension = mimetypes.guess_extension(content_type) or ""
        if extension == ".jpe":
            extension = ".jpg"
        return f"{self.folder}/{uuid.uuid4().hex}{extension}"

    def upload(self, data: bytes, content_type: str) -> str:
        """
        S3에 파일 업로드

        Args:
            data: 파일 내용 (bytes)
            content_type: MIME 타입

        Returns:
            pre-signed URL

        Raises:
            StorageUploadError: 업로드 또는 URL 생성 실패 시
        """
        s3_key = self._build_key(content_type)
        try:
            self._client.put_object(
                Bucket=self.bucket_name,
                Key=s3_key,
                Body=data,
                ContentType=content_type
            )
            url = self._client.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket_name, 'Key': s3_key},
                ExpiresIn=self.expires_in
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"[S3] 업로드 오류: {e}")
            raise StorageUploadError(str(e)) from e

        logger.info(f"[S3] 업로드 완료: s3://{self.bucket_name}/{s3_key}")
        return url
