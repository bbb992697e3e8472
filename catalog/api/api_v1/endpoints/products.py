from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from catalog.api.deps import product_form, product_id_param, product_list_query
from catalog.db.database import get_db
from catalog.core.responses import send_response
from catalog.schemas.product import ImageFile, ProductListQuery, ProductPayload
from catalog.services import product_service

router = APIRouter()


@router.post("/")
def create_product(
    form: tuple[ProductPayload, List[ImageFile]] = Depends(product_form),
    db: Session = Depends(get_db)
):
    """상품 등록 (이미지 1~5장, 카테고리 1개 이상)"""
    payload, images = form
    product = product_service.create_product(db, payload, images)
    return send_response(200, "Product created successfully", product)


@router.get("/")
def list_products(
    query: ProductListQuery = Depends(product_list_query),
    db: Session = Depends(get_db)
):
    """상품 목록 조회 (검색/정렬/페이지네이션)"""
    data = product_service.list_products(db, query)
    return send_response(200, "Product listing successfully", data)


@router.get("/{id}")
def get_product(
    product_id: str = Depends(product_id_param),
    db: Session = Depends(get_db)
):
    """상품 상세 조회"""
    product = product_service.get_product(db, product_id)
    return send_response(200, "Found product detail", product)


@router.put("/{id}")
def update_product(
    product_id: str = Depends(product_id_param),
    form: tuple[ProductPayload, List[ImageFile]] = Depends(product_form),
    db: Session = Depends(get_db)
):
    """상품 정보 수정 (이미지/카테고리 전체 교체)"""
    payload, images = form
    product_service.update_product(db, product_id, payload, images)
    return send_response(200, "Product updated successfully")


@router.delete("/{id}")
def delete_product(
    product_id: str = Depends(product_id_param),
    db: Session = Depends(get_db)
):
    """상품 삭제"""
    product_service.delete_product(db, product_id)
    return send_response(200, "Product successfully deleted")
