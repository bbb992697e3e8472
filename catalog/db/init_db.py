import logging

from catalog.db.database import Base, engine
import catalog.models  # noqa: F401

logger = logging.getLogger(__name__)

def init_db() -> None:
    """데이터베이스 초기화"""
    # 테이블 생성 (이미 존재하면 무시)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
