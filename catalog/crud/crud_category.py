"""
카테고리 CRUD 함수
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from catalog.models.category import Category
from catalog.utils.identifiers import parse_id


def get_categories(db: Session, skip: int = 0, limit: int = 100) -> List[Category]:
    """카테고리 목록 조회"""
    return db.query(Category).order_by(Category.id).offset(skip).limit(limit).all()


def count_categories(db: Session) -> int:
    return db.query(Category).count()


def get_category(db: Session, category_id: str) -> Optional[Category]:
    """카테고리 상세 조회"""
    category_id = parse_id(category_id)
    if category_id is None:
        return None
    return db.query(Category).filter(Category.id == category_id).first()


def get_category_by_name(db: Session, category_name: str) -> Optional[Category]:
    return db.query(Category).filter(Category.category_name == category_name).first()


def create_category(db: Session, category_name: str) -> Category:
    """카테고리 생성"""
    db_category = Category(category_name=category_name)
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


def delete_category(db: Session, category: Category) -> None:
    """카테고리 삭제 (상품 관계 행 포함)"""
    db.delete(category)
    db.commit()
