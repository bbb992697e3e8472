"""
상품 CRUD 함수

트랜잭션 안에서 호출되므로 commit 하지 않고 flush 까지만 수행한다.
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from catalog.core.file_storage import file_storage
from catalog.models.category import Category
from catalog.models.product import Product, ProductImage, ProductCategory
from catalog.schemas.product import ImageFile
from catalog.utils.identifiers import parse_id
from catalog.utils.pagination import Pagination

logger = logging.getLogger(__name__)

# 정렬 가능한 필드 (요청 키 -> 컬럼)
SORT_COLUMNS = {
    "id": Product.id,
    "productName": Product.product_name,
    "price": Product.price,
    "rating": Product.rating,
    "color": Product.color,
    "brand": Product.brand,
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
}

# 검색 대상 필드
SEARCH_COLUMNS = {
    "productName": Product.product_name,
    "description": Product.description,
    "color": Product.color,
    "categoryName": Category.category_name,
}


def get_products(db: Session, filters: dict) -> List[Product]:
    """조건(id, product_name)에 맞는 상품 조회"""
    query = db.query(Product).options(
        selectinload(Product.images),
        selectinload(Product.categories)
    )

    if "id" in filters:
        product_id = parse_id(filters["id"])
        if product_id is None:
            return []
        query = query.filter(Product.id == product_id)

    if "product_name" in filters:
        query = query.filter(Product.product_name == filters["product_name"])

    return query.order_by(Product.id).all()


def create_new_product(db: Session, data: dict) -> Optional[Product]:
    """상품 생성"""
    db_product = Product(**data)
    db.add(db_product)
    db.flush()
    return db_product


def update_product(db: Session, filters: dict, data: dict) -> int:
    """상품 필드 업데이트, 변경된 상품 수 반환"""
    products = get_products(db, filters)
    for product in products:
        for key, value in data.items():
            setattr(product, key, value)
    db.flush()
    return len(products)


def delete_product(db: Session, filters: dict) -> int:
    """상품 삭제 (이미지/카테고리 관계 행은 cascade)"""
    products = get_products(db, filters)
    for product in products:
        db.delete(product)
    db.flush()
    return len(products)


def product_images(db: Session, product_id: int) -> List[ProductImage]:
    """상품의 이미지 레코드 조회"""
    return db.query(ProductImage).filter(
        ProductImage.product_id == product_id
    ).order_by(ProductImage.id).all()


def upload_image(db: Session, files: Iterable[ImageFile], product_id: int) -> List[ProductImage]:
    """
    이미지 파일 저장 후 레코드 생성

    Args:
        db: DB 세션
        files: 검증된 업로드 이미지 목록
        product_id: 상품 ID

    Returns:
        생성된 이미지 레코드 목록
    """
    saved_paths = []
    images = []
    try:
        for image in files:
            relative_path = file_storage.save_image(image)
            saved_paths.append(relative_path)

            db_image = ProductImage(product_id=product_id, image_url=relative_path)
            db.add(db_image)
            images.append(db_image)

        db.flush()
    except Exception:
        # 이번 호출에서 기록한 파일은 되돌림
        for path in saved_paths:
            if file_storage.file_exists(path):
                file_storage.delete_file(path)
        raise

    return images


def update_image(db: Session, files: Iterable[ImageFile], product_id: int) -> List[ProductImage]:
    """상품 이미지 레코드 교체"""
    for image in product_images(db, product_id):
        db.delete(image)
    db.flush()
    return upload_image(db, files, product_id)


def get_product_category(db: Session, ids: Iterable[str]) -> List[Category]:
    """카테고리 ID 목록 조회 (존재하는 것만 반환)"""
    category_ids = [cid for cid in (parse_id(i) for i in ids) if cid is not None]
    if not category_ids:
        return []
    return db.query(Category).filter(Category.id.in_(category_ids)).order_by(Category.id).all()


def product_relation(db: Session, category_ids: Iterable[str], product_id: int) -> List[ProductCategory]:
    """상품-카테고리 관계 생성"""
    relations = [
        ProductCategory(product_id=product_id, category_id=int(category_id))
        for category_id in category_ids
    ]
    db.add_all(relations)
    db.flush()
    return relations


def update_product_relation(db: Session, category_ids: Iterable[str], product_id: int) -> List[ProductCategory]:
    """상품-카테고리 관계 전체 교체 (병합하지 않음)"""
    existing = db.query(ProductCategory).filter(ProductCategory.product_id == product_id).all()
    for relation in existing:
        db.delete(relation)
    db.flush()
    return product_relation(db, category_ids, product_id)


def _filtered(db: Session, search_query):
    query = db.query(Product)
    if search_query is not None:
        # 카테고리명 검색을 위해 관계 테이블과 조인한 ID 서브쿼리
        matching_ids = (
            select(Product.id)
            .outerjoin(ProductCategory, ProductCategory.product_id == Product.id)
            .outerjoin(Category, Category.id == ProductCategory.category_id)
            .where(search_query)
        )
        query = query.filter(Product.id.in_(matching_ids))
    return query


def filter_pagination(db: Session, search_query) -> int:
    """검색 조건에 맞는 전체 상품 수"""
    return _filtered(db, search_query).count()


def paginate_filtered_results(db: Session, pagination: Pagination, search_query) -> List[Product]:
    """검색 조건에 맞는 상품 페이지 조회"""
    sort_column = SORT_COLUMNS.get(pagination.sort_by, Product.id)
    order = sort_column.desc() if pagination.sort_order == "desc" else sort_column.asc()

    return _filtered(db, search_query).options(
        selectinload(Product.images),
        selectinload(Product.categories)
    ).order_by(order, Product.id.asc()).offset(pagination.offset).limit(pagination.limit).all()
