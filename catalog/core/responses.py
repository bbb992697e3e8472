"""
공통 응답 포맷 {status, message, data}
"""
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def send_response(status_code: int, message: str, data: Optional[Any] = None) -> JSONResponse:
    """표준 응답 봉투 생성"""
    return JSONResponse(
        status_code=status_code,
        content={
            "status": status_code,
            "message": message,
            "data": jsonable_encoder(data, by_alias=True),
        },
    )


def paginated_response(items: list, page: int, limit: int, total: int) -> dict:
    """페이지네이션 결과 포맷"""
    return {
        "items": items,
        "page": page,
        "limit": limit,
        "total": total,
    }
