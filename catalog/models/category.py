from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import BaseModel

class Category(BaseModel):
    __tablename__ = "categories"

    category_name = Column(String(255), unique=True, nullable=False, index=True)

    product_links = relationship("ProductCategory", back_populates="category", cascade="all, delete-orphan")
