"""
카탈로그 도메인 예외 및 공통 에러 응답 변환
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from catalog.core.responses import send_response
from catalog.schemas.messages import collect_errors

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """카탈로그 API 기본 예외"""
    status_code = 500

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data


class BadRequestError(CatalogError):
    """잘못된 입력 또는 비즈니스 규칙 위반 (중복 상품명, 이미지 누락 등)"""
    status_code = 400


class NotFoundError(CatalogError):
    """참조 대상(상품, 카테고리)이 존재하지 않음"""
    status_code = 404


class ValidationFailed(BadRequestError):
    """필드별 검증 오류 묶음"""

    def __init__(self, errors: dict):
        first_message = next(iter(errors.values()), "Invalid request")
        super().__init__(first_message, data=errors)
        self.errors = errors


async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return send_response(exc.status_code, exc.message, exc.data)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # FastAPI 기본 검증(JSON 바디, 경로 파라미터) 오류도 같은 메시지 카탈로그로 변환
    errors = collect_errors(exc.errors())
    first_message = next(iter(errors.values()), "Invalid request")
    return send_response(400, first_message, errors)


def register_exception_handlers(app: FastAPI) -> None:
    """공통 에러 응답 핸들러 등록"""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
