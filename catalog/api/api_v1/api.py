from fastapi import APIRouter

from catalog.api.api_v1.endpoints import products, categories

api_router = APIRouter()
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
