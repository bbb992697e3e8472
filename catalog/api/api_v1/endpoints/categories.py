from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from catalog.db.database import get_db
from catalog.core.exceptions import BadRequestError, NotFoundError
from catalog.core.responses import send_response
from catalog.crud import crud_category
from catalog.schemas.category import (
    Category as CategorySchema,
    CategoryList,
    CategoryCreate
)

router = APIRouter()

@router.get("/")
def get_categories(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    """카테고리 목록 조회"""
    total = crud_category.count_categories(db)
    categories = crud_category.get_categories(db, skip=skip, limit=limit)

    data = CategoryList(
        total=total,
        items=[CategorySchema.model_validate(category) for category in categories]
    )
    return send_response(200, "Category listing successfully", data)

@router.get("/{category_id}")
def get_category(
    category_id: str,
    db: Session = Depends(get_db)
):
    """카테고리 상세 조회"""
    category = crud_category.get_category(db, category_id)
    if not category:
        raise NotFoundError("Category not found")

    return send_response(200, "Found category detail", CategorySchema.model_validate(category))

@router.post("/")
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db)
):
    """카테고리 등록"""
    # 중복 카테고리명 체크
    if crud_category.get_category_by_name(db, category_data.category_name):
        raise BadRequestError("Category already exists.")

    category = crud_category.create_category(db, category_data.category_name)
    return send_response(200, "Category created successfully", CategorySchema.model_validate(category))

@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    db: Session = Depends(get_db)
):
    """카테고리 삭제"""
    category = crud_category.get_category(db, category_id)
    if not category:
        raise NotFoundError("Category not found")

    crud_category.delete_category(db, category)
    return send_response(200, "Category successfully deleted")
