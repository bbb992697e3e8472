"""
공통 테스트 픽스처

in-memory SQLite + 임시 업로드 디렉토리로 앱을 구동한다.
"""
import hashlib
import os
import tempfile
from functools import partial

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="catalog-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import main
from catalog.core.file_storage import file_storage, write_bytes
from catalog.db.database import Base, get_db
from catalog.models import Category, Product, ProductImage, ProductCategory
from catalog.schemas.product import ImageFile, ProductPayload

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
API = "/api/v1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage_root(tmp_path, monkeypatch):
    root = tmp_path / "uploads"
    root.mkdir()
    monkeypatch.setattr(file_storage, "root_path", root)
    return root


@pytest.fixture
def client(session_factory, storage_root):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    main.app.dependency_overrides[get_db] = override_get_db
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def categories(session_factory):
    """id 1, 2, 3 카테고리"""
    session = session_factory()
    items = [Category(category_name=name) for name in ("Lighting", "Furniture", "Office")]
    session.add_all(items)
    session.commit()
    ids = [category.id for category in items]
    session.close()
    return ids


@pytest.fixture
def counts(session_factory):
    """products / images / relations 행 수"""
    def _counts():
        session = session_factory()
        try:
            return (
                session.query(Product).count(),
                session.query(ProductImage).count(),
                session.query(ProductCategory).count(),
            )
        finally:
            session.close()
    return _counts


def stored_files(root):
    return sorted(path for path in root.rglob("*") if path.is_file())


def product_fields(**overrides):
    fields = {
        "productName": "Desk Lamp",
        "description": "Adjustable LED desk lamp",
        "productDetails": "Aluminium arm, 3 brightness levels",
        "price": "19.99",
        "color": "#A1B2C3",
        "categoryId": ["1"],
    }
    fields.update(overrides)
    return {key: value for key, value in fields.items() if value is not None}


def image_files(count=1, mimetype="image/png", content=PNG_BYTES):
    extension = mimetype.split("/")[-1]
    return [
        ("imageUrl", (f"photo{index}.{extension}", content, mimetype))
        for index in range(count)
    ]


def image_descriptor(name="photo.png", content=PNG_BYTES, mimetype="image/png"):
    return {
        "name": name,
        "data": content,
        "size": len(content),
        "encoding": "7bit",
        "truncated": False,
        "mimetype": mimetype,
        "md5": hashlib.md5(content).hexdigest(),
        "move_to": partial(write_bytes, content),
    }


def make_image(**overrides):
    return ImageFile(**image_descriptor(**overrides))


def make_payload(**overrides):
    return ProductPayload.model_validate(product_fields(**overrides))
