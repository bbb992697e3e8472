from sqlalchemy import Column, String, Text, Float, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import BaseModel

class Product(BaseModel):
    __tablename__ = "products"

    product_name = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=False)
    product_details = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    color = Column(String(7), nullable=False)
    rating = Column(Float)
    reviews = Column(Text)
    brand = Column(String(255))

    # 관계 설정
    images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.id"
    )
    category_links = relationship(
        "ProductCategory",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductCategory.id"
    )
    categories = relationship(
        "Category",
        secondary="product_categories",
        viewonly=True,
        order_by="Category.id"
    )


class ProductImage(BaseModel):
    __tablename__ = "product_images"

    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String(500), nullable=False)

    product = relationship("Product", back_populates="images")


class ProductCategory(BaseModel):
    __tablename__ = "product_categories"
    __table_args__ = (
        UniqueConstraint("product_id", "category_id", name="uq_product_category"),
    )

    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)

    product = relationship("Product", back_populates="category_links")
    category = relationship("Category", back_populates="product_links")
