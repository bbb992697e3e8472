"""
목록 조회용 페이지네이션/정렬/검색 헬퍼
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from catalog.core.config import settings


@dataclass
class Pagination:
    page: int
    limit: int
    sort_by: str
    sort_order: str

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def pagination_and_sorting(query, default_sort: str = "id") -> Pagination:
    """검증된 쿼리 파라미터에서 페이지/정렬 옵션 추출"""
    return Pagination(
        page=query.page or 1,
        limit=query.limit or settings.DEFAULT_PAGE_SIZE,
        sort_by=query.sort_by or default_sort,
        sort_order=query.sort_order or "asc",
    )


def search(term: Optional[str], columns: Sequence) -> Optional[ColumnElement]:
    """검색어를 컬럼들에 대한 OR 부분일치 조건으로 변환 (대소문자 무시)"""
    if not term:
        return None
    pattern = f"%{term}%"
    return or_(*[column.ilike(pattern) for column in columns])
