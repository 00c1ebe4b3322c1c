import itertools
import os
from decimal import Decimal

# settings are read on import, configure before anything from retech is loaded
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import retech.data.models  # noqa: F401
from retech.api import create_app
from retech.client import JsonStorage, StorefrontClient, StorefrontContext
from retech.data.database import Base, get_db
from retech.data.models.product import ProductModel
from retech.repos.user_repo import UserRepo

ADMIN_ID = 1


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def api(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_id(db):
    UserRepo(db).grant_role(ADMIN_ID, "admin")
    return ADMIN_ID


@pytest.fixture
def make_product(db):
    counter = itertools.count(1)

    def _make(**overrides) -> ProductModel:
        n = next(counter)
        data = dict(
            title=f"Device {n}",
            slug=f"device-{n}",
            category="smartphones",
            brand="Apple",
            price=Decimal("1000.00"),
            stock_count=5,
            location_city="Kyiv",
        )
        data.update(overrides)
        product = ProductModel(**data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def stock_of(db):
    def _stock(product_id: int) -> int:
        db.expire_all()
        return db.get(ProductModel, product_id).stock_count

    return _stock


@pytest.fixture
def device_storage(tmp_path):
    return JsonStorage(str(tmp_path / "device"))


@pytest.fixture
def storefront(api, device_storage):
    """Client-side session talking to the in-process API."""
    client = StorefrontClient(base_url="http://testserver", session=api)
    return StorefrontContext(api=client, storage=device_storage)
