"""멀티파트 업로드 임시 파일 관리"""
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

logger = logging.getLogger(__name__)


@contextmanager
def staged_upload(source: BinaryIO, upload_dir: str = "uploads", suffix: Optional[str] = None) -> Iterator[Path]:
    """
    업로드 스트림을 upload_dir 안의 임시 파일로 복사하고 경로를 반환합니다.

    with 블록을 벗어나면 성공/실패/예외와 관계없이 임시 파일을 삭제합니다.

    Args:
        source: 읽기 가능한 바이너리 스트림 (UploadFile.file 등)
        upload_dir: 임시 파일을 만들 디렉토리
        suffix: 파일 확장자 (예: ".jpg")
    """
    Path(upload_dir).mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(dir=upload_dir, suffix=suffix or "")
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(source, out)
        yield path
    finally:
        try:
            path.unlink()
            logger.info(f"임시 파일 삭제 완료: {path}")
        except FileNotFoundError:
            pass
