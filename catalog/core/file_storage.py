"""
상품 이미지 파일 저장소
날짜 기반 디렉토리 구조로 파일 관리
"""
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from catalog.core.config import settings
from catalog.schemas.product import ImageFile

logger = logging.getLogger(__name__)

# MIME 타입별 기본 확장자
MIME_EXTENSIONS = {
    'image/jpeg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
}


def write_bytes(data: bytes, destination: Path) -> None:
    """업로드 데이터를 지정 경로에 기록"""
    with open(destination, 'wb') as f:
        f.write(data)


class FileStorage:
    """파일 저장소 클래스"""

    base_path = 'products/images'
    pending_suffix = '.deleting'

    def __init__(self, root_path: Optional[Path] = None):
        """파일 저장소 초기화"""
        self.root_path = Path(root_path or settings.UPLOAD_DIR)

    def get_date_path(self) -> str:
        """날짜 기반 경로 생성 (YYYY/MM/DD)"""
        now = datetime.now()
        return f"{now.year}/{now.month:02d}/{now.day:02d}"

    def get_extension(self, image: ImageFile) -> str:
        suffix = Path(image.name).suffix.lower()
        if suffix in ('.jpg', '.jpeg', '.png', '.gif'):
            return suffix
        return MIME_EXTENSIONS.get(image.mimetype, '')

    def save_image(self, image: ImageFile) -> str:
        """이미지 저장 및 상대 경로 반환"""
        dir_path = self.root_path / self.base_path / self.get_date_path()
        dir_path.mkdir(parents=True, exist_ok=True)

        # UUID로 고유한 파일명 생성
        filename = f"{uuid.uuid4().hex[:16]}{self.get_extension(image)}"
        file_path = dir_path / filename

        try:
            image.move_to(file_path)
        except OSError:
            logger.error(f"Failed to save file: {file_path}")
            if file_path.exists():
                file_path.unlink()
            raise

        logger.info(f"File saved: {file_path} ({image.size} bytes)")

        # 상대 경로 반환 (uploads 폴더 기준)
        return file_path.relative_to(self.root_path).as_posix()

    def get_full_path(self, relative_path: str) -> Path:
        """상대 경로를 전체 경로로 변환"""
        return self.root_path / relative_path

    def delete_file(self, relative_path: str) -> None:
        """
        파일 삭제

        파일이 없거나 삭제할 수 없으면 OSError 를 그대로 올린다.
        """
        full_path = self.get_full_path(relative_path)
        full_path.unlink()
        logger.info(f"File deleted: {full_path}")

    def get_pending_path(self, relative_path: str) -> Path:
        """삭제 대기 파일 경로"""
        full_path = self.get_full_path(relative_path)
        return full_path.with_name(full_path.name + self.pending_suffix)

    def stage_delete(self, relative_path: str) -> None:
        """
        삭제 대기 상태로 이동

        커밋 전까지는 restore_file 로 되돌릴 수 있다.
        파일이 없으면 OSError 를 그대로 올린다.
        """
        self.get_full_path(relative_path).rename(self.get_pending_path(relative_path))

    def restore_file(self, relative_path: str) -> None:
        """삭제 대기 파일을 원래 경로로 복구"""
        self.get_pending_path(relative_path).rename(self.get_full_path(relative_path))
        logger.info(f"File restored: {relative_path}")

    def purge_file(self, relative_path: str) -> None:
        """삭제 대기 파일 영구 삭제"""
        pending_path = self.get_pending_path(relative_path)
        pending_path.unlink()
        logger.info(f"File deleted: {self.get_full_path(relative_path)}")

    def file_exists(self, relative_path: str) -> bool:
        """파일 존재 여부 확인"""
        return self.get_full_path(relative_path).exists()

    def get_file_url(self, relative_path: str, base_url: str = "/uploads") -> str:
        """파일 접근 URL 생성"""
        return f"{base_url}/{relative_path}"

# 싱글톤 인스턴스
file_storage = FileStorage()
