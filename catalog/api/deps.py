"""
요청 검증 의존성

폼/쿼리/경로 값을 스키마로 검증하고, 실패하면 필드별 메시지를 담은
ValidationFailed 를 올린다.
"""
import hashlib
from functools import partial
from typing import List, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

from catalog.core.config import settings
from catalog.core.exceptions import ValidationFailed
from catalog.core.file_storage import write_bytes
from catalog.schemas.messages import collect_errors
from catalog.schemas.product import (
    ImageFile,
    ImageUpload,
    ProductListQuery,
    ProductParams,
    ProductPayload,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

PRODUCT_FIELDS = [
    "productName", "description", "productDetails", "price",
    "color", "rating", "reviews", "brand",
]


def validate_request(schema: Type[SchemaT], raw: dict) -> SchemaT:
    """스키마 검증, 실패 시 필드별 첫 번째 메시지로 변환"""
    try:
        return schema.model_validate(raw)
    except ValidationError as exc:
        raise ValidationFailed(collect_errors(exc.errors()))


async def describe_upload(upload: UploadFile) -> dict:
    """업로드 파일 -> 이미지 파일 정보"""
    data = await upload.read()
    return {
        "name": upload.filename or "",
        "data": data,
        "size": len(data),
        "encoding": upload.headers.get("content-transfer-encoding", "7bit"),
        "truncated": len(data) > settings.MAX_FILE_SIZE,
        "mimetype": upload.content_type or "",
        "md5": hashlib.md5(data).hexdigest(),
        "move_to": partial(write_bytes, data),
    }


async def product_form(request: Request) -> tuple[ProductPayload, List[ImageFile]]:
    """multipart 폼 바디 + imageUrl 파일 검증"""
    form = await request.form()

    raw = {field: form[field] for field in PRODUCT_FIELDS if field in form}
    category_ids = form.getlist("categoryId")
    if category_ids:
        raw["categoryId"] = category_ids[0] if len(category_ids) == 1 else list(category_ids)

    files = {}
    uploads = form.getlist("imageUrl")
    if uploads:
        described = [
            await describe_upload(item) if isinstance(item, UploadFile) else item
            for item in uploads
        ]
        files["imageUrl"] = described[0] if len(described) == 1 else described

    errors = {}
    payload = None
    try:
        payload = ProductPayload.model_validate(raw)
    except ValidationError as exc:
        errors.update(collect_errors(exc.errors()))

    images = []
    try:
        images = ImageUpload.model_validate(files).images
    except ValidationError as exc:
        errors.update(collect_errors(exc.errors()))

    if errors:
        raise ValidationFailed(errors)

    return payload, images


def product_list_query(request: Request) -> ProductListQuery:
    """목록 조회 쿼리 파라미터 검증"""
    return validate_request(ProductListQuery, dict(request.query_params))


def product_id_param(id: str) -> str:
    """경로 파라미터 id 검증"""
    return validate_request(ProductParams, {"id": id}).id
