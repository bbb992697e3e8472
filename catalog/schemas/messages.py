"""
검증 오류 메시지 카탈로그

필드명(요청 키) -> pydantic 오류 타입 -> 사용자 메시지
"""
from typing import Iterable

# 요청 섹션 접두어 (FastAPI 기본 검증 오류의 loc 첫 요소)
_LOCATION_PREFIXES = {"body", "query", "path", "form", "header", "cookie"}

_IMAGE_MESSAGES = {
    "missing": "Image is required",
    "too_short": "At least one image is required",
    "too_long": "At most 5 images are allowed",
    "image_type": "Invalid image type, only jpeg, png, or gif are allowed",
    "image_truncated": "Image exceeds the maximum allowed size",
    "*": "Invalid image data",
}

MESSAGES = {
    "productName": {
        "missing": "Product name is required",
        "string_too_short": "Product name cannot be empty",
        "string_type": "Product name should be a string",
    },
    "description": {
        "missing": "Description is required",
        "string_too_short": "Description cannot be empty",
        "string_too_long": "Description length should not exceed 255 characters",
        "string_type": "Description should be a string",
    },
    "productDetails": {
        "missing": "Product details are required",
        "string_too_short": "Product details cannot be empty",
        "string_too_long": "Product details length should not exceed 255 characters",
        "string_type": "Product details should be a string",
    },
    "price": {
        "missing": "Price is required",
        "float_parsing": "Price should be a number",
        "float_type": "Price should be a number",
        "finite_number": "Price should be a number",
        "greater_than": "Price should be a positive number",
    },
    "color": {
        "missing": "Color is required",
        "string_too_short": "Color cannot be empty",
        "string_pattern_mismatch": "Color should be in hexadecimal format like #ffffff",
        "string_type": "Color should be a string",
    },
    "rating": {
        "float_parsing": "Rating should be a number",
        "float_type": "Rating should be a number",
        "finite_number": "Rating should be a number",
        "greater_than": "Rating should be a positive number",
    },
    "reviews": {
        "string_type": "Review should be a string",
    },
    "brand": {
        "string_type": "Brand should be a string",
    },
    "categoryId": {
        "missing": "Category Id is required",
        "string_too_short": "Category Id cannot be empty",
        "too_short": "At least one Category Id is required",
        "list_type": "Category Id should be an array",
        "string_type": "Category Id must be in integer format",
        "string_pattern_mismatch": "Category Id must be in integer format",
    },
    "imageUrl": _IMAGE_MESSAGES,
    "id": {
        "missing": "Product ID is required",
        "string_too_short": "Product ID cannot be empty",
    },
    "search": {
        "string_too_long": "Search query length should not exceed 255 characters",
    },
    "page": {
        "int_parsing": "Page number must be an integer",
        "int_type": "Page number must be an integer",
        "int_from_float": "Page number must be an integer",
        "greater_than": "Page number must be a positive integer",
    },
    "limit": {
        "int_parsing": "Limit must be an integer",
        "int_type": "Limit must be an integer",
        "int_from_float": "Limit must be an integer",
        "greater_than": "Limit must be a positive integer",
    },
    "sortBy": {
        "string_too_long": "SortBy field length should not exceed 255 characters",
    },
    "sortOrder": {
        "literal_error": "SortOrder must be either 'asc' or 'desc'",
    },
    "categoryName": {
        "missing": "Category name is required",
        "string_too_short": "Category name cannot be empty",
        "string_too_long": "Category name length should not exceed 255 characters",
    },
}


def message_for(field: str, error_type: str, default: str) -> str:
    """필드/오류 타입에 해당하는 메시지 조회"""
    catalog = MESSAGES.get(field)
    if not catalog:
        return default
    return catalog.get(error_type) or catalog.get("*") or default


def collect_errors(errors: Iterable[dict]) -> dict:
    """
    pydantic 오류 목록을 {필드: 메시지}로 변환

    필드마다 처음 실패한 규칙의 메시지만 남긴다.
    """
    result = {}
    for error in errors:
        loc = [part for part in error.get("loc", ()) if not isinstance(part, int)]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = str(loc[0]) if loc else "__root__"
        if field in result:
            continue
        result[field] = message_for(field, error.get("type", ""), error.get("msg", "Invalid value"))
    return result
