# SQLAlchemy 모델들을 여기에서 import
from .category import Category
from .product import Product, ProductImage, ProductCategory
