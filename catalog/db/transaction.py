"""
요청 단위 트랜잭션 관리

세션 핸들을 명시적으로 받아 begin/commit/rollback 을 감싼다.
요청당 하나의 트랜잭션만 허용한다 (중첩 불가).
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session, SessionTransaction

logger = logging.getLogger(__name__)


class TransactionError(RuntimeError):
    """트랜잭션 사용 순서 오류"""


class Transaction:
    def __init__(self, session: Session):
        self.session = session
        self._tx: Optional[SessionTransaction] = None

    @property
    def is_active(self) -> bool:
        return self._tx is not None and self._tx.is_active

    def begin(self) -> "Transaction":
        if self._tx is not None or self.session.in_transaction():
            raise TransactionError("Nested transactions are not supported")
        self._tx = self.session.begin()
        return self

    def commit(self) -> None:
        if self._tx is None:
            raise TransactionError("No transaction in progress")
        tx, self._tx = self._tx, None
        tx.commit()

    def rollback(self) -> None:
        """열린 트랜잭션이 없으면 아무것도 하지 않음"""
        tx, self._tx = self._tx, None
        if tx is None:
            return
        # flush 실패로 비활성화된 트랜잭션도 세션 단위로 정리
        self.session.rollback()
        logger.info("Transaction rolled back")

    def __enter__(self) -> "Transaction":
        return self.begin()

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
        return False
