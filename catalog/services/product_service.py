"""
상품 워크플로우 (생성/목록/조회/수정/삭제)

생성과 수정은 하나의 트랜잭션 안에서 상품 행, 이미지 파일/레코드,
카테고리 관계를 함께 기록하고, 어느 단계에서든 실패하면 롤백한다.
"""
import logging
from typing import List, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.core.exceptions import BadRequestError, NotFoundError
from catalog.core.file_storage import file_storage
from catalog.core.responses import paginated_response
from catalog.crud import crud_product
from catalog.db.transaction import Transaction
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.schemas.product import (
    ImageFile,
    ProductListQuery,
    ProductPayload,
    Product as ProductSchema,
)
from catalog.utils.pagination import pagination_and_sorting, search

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ["productName", "description", "color", "categoryName"]


def _resolve_categories(db: Session, category_ids: Sequence[str], missing_message: str) -> List[Category]:
    found = crud_product.get_product_category(db, category_ids)
    if len(found) != len(category_ids):
        raise NotFoundError(missing_message)
    return found


def _stage_image_files(db: Session, product: Product, staged: List[str]) -> None:
    # 파일 삭제 실패는 전체 작업 중단, 커밋 전까지는 복구 가능한 상태로 둔다
    for image in crud_product.product_images(db, product.id):
        try:
            file_storage.stage_delete(image.image_url)
        except OSError as exc:
            logger.error(f"Failed to delete image file {image.image_url}: {exc}")
            raise BadRequestError("Error deleting file") from exc
        staged.append(image.image_url)


def _restore_staged_files(paths: Sequence[str]) -> None:
    # 롤백된 요청의 기존 이미지 파일 복구
    for path in paths:
        try:
            file_storage.restore_file(path)
        except OSError as exc:
            logger.error(f"Could not restore image {path}: {exc}")


def _purge_staged_files(paths: Sequence[str]) -> None:
    for path in paths:
        try:
            file_storage.purge_file(path)
        except OSError as exc:
            logger.warning(f"Could not remove replaced image {path}: {exc}")


def _discard_written_files(paths: Sequence[str]) -> None:
    # 롤백된 요청에서 새로 기록한 이미지 파일 정리
    for path in paths:
        try:
            if file_storage.file_exists(path):
                file_storage.delete_file(path)
        except OSError as exc:
            logger.warning(f"Could not remove orphaned image {path}: {exc}")


def create_product(db: Session, payload: ProductPayload, images: Sequence[ImageFile]) -> ProductSchema:
    """상품 생성"""
    tx = Transaction(db)
    written = []
    try:
        tx.begin()

        # 중복 상품명 체크
        existing = crud_product.get_products(db, {"product_name": payload.product_name})
        if existing:
            raise BadRequestError("Product already exists.")

        product = crud_product.create_new_product(db, payload.to_row())
        if not product:
            raise BadRequestError("Product Not Found")

        if not images:
            raise BadRequestError("Image is required")
        new_images = crud_product.upload_image(db, images, product.id)
        written = [image.image_url for image in new_images]

        if not payload.category_ids:
            raise BadRequestError("Category is required")
        _resolve_categories(db, payload.category_ids, "Some category IDs are not found")
        crud_product.product_relation(db, payload.category_ids, product.id)

        tx.commit()
    except IntegrityError as exc:
        # 동시 요청으로 상품명 유니크 제약에 걸린 경우
        tx.rollback()
        _discard_written_files(written)
        raise BadRequestError("Product already exists.") from exc
    except Exception:
        tx.rollback()
        _discard_written_files(written)
        raise

    logger.info(f"Product created: id={product.id}, name={payload.product_name}")
    return ProductSchema.model_validate(product)


def list_products(db: Session, query: ProductListQuery) -> dict:
    """상품 목록 조회 (검색 + 페이지네이션)"""
    pagination = pagination_and_sorting(query)
    search_query = search(query.search, [crud_product.SEARCH_COLUMNS[field] for field in SEARCH_FIELDS])

    total = crud_product.filter_pagination(db, search_query)
    products = crud_product.paginate_filtered_results(db, pagination, search_query)
    if not products:
        raise NotFoundError("Product not found.")

    return paginated_response(
        [ProductSchema.model_validate(product) for product in products],
        pagination.page,
        pagination.limit,
        total
    )


def get_product(db: Session, product_id: str) -> ProductSchema:
    """상품 상세 조회"""
    products = crud_product.get_products(db, {"id": product_id})
    if not products:
        raise NotFoundError("Product not found.")
    return ProductSchema.model_validate(products[0])


def update_product(
    db: Session,
    product_id: str,
    payload: ProductPayload,
    images: Sequence[ImageFile]
) -> None:
    """상품 수정 (이미지와 카테고리 관계는 전체 교체)"""
    tx = Transaction(db)
    staged = []
    written = []
    try:
        tx.begin()

        products = crud_product.get_products(db, {"id": product_id})
        if not products:
            raise NotFoundError("Product not found.")
        product = products[0]

        crud_product.update_product(db, {"id": product_id}, payload.to_row())

        _stage_image_files(db, product, staged)

        if not images:
            raise BadRequestError("Image is required")
        new_images = crud_product.update_image(db, images, product.id)
        written = [image.image_url for image in new_images]

        if not payload.category_ids:
            raise BadRequestError("Category is required")
        _resolve_categories(db, payload.category_ids, "Category not found")
        crud_product.update_product_relation(db, payload.category_ids, product.id)

        tx.commit()
    except IntegrityError as exc:
        tx.rollback()
        _discard_written_files(written)
        _restore_staged_files(staged)
        raise BadRequestError("Product already exists.") from exc
    except Exception:
        tx.rollback()
        _discard_written_files(written)
        _restore_staged_files(staged)
        raise

    _purge_staged_files(staged)
    logger.info(f"Product updated: id={product_id}")


def delete_product(db: Session, product_id: str) -> None:
    """상품 삭제 (이미지 파일 포함)"""
    products = crud_product.get_products(db, {"id": product_id})
    if not products:
        raise NotFoundError("Product not found.")

    staged = []
    try:
        _stage_image_files(db, products[0], staged)
        crud_product.delete_product(db, {"id": product_id})
        db.commit()
    except Exception:
        db.rollback()
        _restore_staged_files(staged)
        raise

    _purge_staged_files(staged)
    logger.info(f"Product deleted: id={product_id}")
