from typing import Optional, List, Callable, Literal, Annotated
from datetime import datetime
from pathlib import Path
from pydantic import BaseModel, Field, StringConstraints, field_validator, model_validator
from pydantic_core import PydanticCustomError

from catalog.core.config import settings
from catalog.schemas.category import Category

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"
CATEGORY_ID_PATTERN = r"^[0-9]+$"

CategoryId = Annotated[str, StringConstraints(pattern=CATEGORY_ID_PATTERN)]


def _blank_to_none(v):
    # multipart 폼에서 빈 값은 null 로 취급
    if isinstance(v, str) and v == "":
        return None
    return v


class ProductPayload(BaseModel):
    """상품 생성/수정 요청 바디"""
    product_name: str = Field(..., alias="productName", min_length=1)
    description: str = Field(..., min_length=1, max_length=255)
    product_details: str = Field(..., alias="productDetails", min_length=1, max_length=255)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    color: str = Field(..., min_length=1, pattern=HEX_COLOR_PATTERN)
    rating: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    reviews: Optional[str] = None
    brand: Optional[str] = None
    category_ids: List[CategoryId] = Field(..., alias="categoryId", min_length=1)

    @field_validator('rating', 'reviews', 'brand', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)

    @field_validator('rating')
    @classmethod
    def round_rating(cls, v):
        if v is None:
            return v
        return round(v, 3)

    @field_validator('category_ids', mode='before')
    @classmethod
    def normalize_category_ids(cls, v):
        # 단일 값 또는 목록 -> 순서 있는 목록
        if isinstance(v, str):
            if v == "":
                raise PydanticCustomError('string_too_short', 'Category Id cannot be empty')
            return [v]
        return v

    def to_row(self) -> dict:
        """products 테이블 컬럼 값"""
        return self.model_dump(exclude={'category_ids'})

    class Config:
        populate_by_name = True


class ImageFile(BaseModel):
    """업로드된 이미지 파일 정보"""
    name: str
    data: bytes
    size: int
    encoding: str
    temp_file_path: str = ""
    truncated: bool
    mimetype: str
    md5: str
    move_to: Callable[[Path], None]

    @field_validator('mimetype')
    @classmethod
    def check_mimetype(cls, v):
        if v not in settings.ALLOWED_IMAGE_TYPES:
            raise PydanticCustomError('image_type', 'Invalid image type, only jpeg, png, or gif are allowed')
        return v

    @model_validator(mode='after')
    def check_truncated(self):
        if self.truncated:
            raise PydanticCustomError('image_truncated', 'Image exceeds the maximum allowed size')
        return self


class ImageUpload(BaseModel):
    """imageUrl 업로드 필드 (단일 파일 또는 1개 이상 목록)"""
    images: List[ImageFile] = Field(
        ...,
        alias="imageUrl",
        min_length=1,
        max_length=settings.MAX_IMAGES_PER_PRODUCT
    )

    @field_validator('images', mode='before')
    @classmethod
    def normalize_images(cls, v):
        if isinstance(v, (list, tuple)):
            return list(v)
        return [v]

    class Config:
        populate_by_name = True


class ProductListQuery(BaseModel):
    search: Optional[str] = Field(None, max_length=255)
    page: Optional[int] = Field(None, gt=0)
    limit: Optional[int] = Field(None, gt=0)
    sort_by: Optional[str] = Field(None, alias="sortBy", max_length=255)
    sort_order: Optional[Literal["asc", "desc"]] = Field(None, alias="sortOrder")

    class Config:
        populate_by_name = True


class ProductParams(BaseModel):
    id: str = Field(..., min_length=1)


# 응답 스키마
class ProductImage(BaseModel):
    id: int
    image_url: str = Field(..., alias="imageUrl")

    class Config:
        from_attributes = True
        populate_by_name = True


class Product(BaseModel):
    id: int
    product_name: str = Field(..., alias="productName")
    description: str
    product_details: str = Field(..., alias="productDetails")
    price: float
    color: str
    rating: Optional[float] = None
    reviews: Optional[str] = None
    brand: Optional[str] = None
    images: List[ProductImage] = []
    categories: List[Category] = []
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True
