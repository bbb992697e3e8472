from typing import List
from datetime import datetime
from pydantic import BaseModel, Field

class CategoryCreate(BaseModel):
    category_name: str = Field(..., alias="categoryName", min_length=1, max_length=255)

    class Config:
        populate_by_name = True

class Category(BaseModel):
    id: int
    category_name: str = Field(..., alias="categoryName")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True

class CategoryList(BaseModel):
    total: int
    items: List[Category]
