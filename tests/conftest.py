import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault(
    "AZURE_STORAGE_CONNECTION_STRING",
    "DefaultEndpointsProtocol=https;AccountName=teststore;"
    "AccountKey=dGVzdGtleQ==;EndpointSuffix=core.windows.net",
)
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import app.data.models  # noqa: F401
from app.data.database import Base, get_db, make_engine
from app.data.models.customer import CustomerModel
from app.data.models.user import ROLE_ADMIN, ROLE_CUSTOMER, UserModel
from app.storage.blobs import BlobStore
from app.storage.clients import StorageGateway
from app.storage.files import FileShareStore
from app.storage.queues import QueueStore
from app.storage.tables import CustomerProfileTable, ProductTable


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def make_user(db, email: str, role: str = ROLE_CUSTOMER) -> UserModel:
    user = UserModel(
        username=email.split("@")[0],
        email=email,
        password_hash="not-a-real-hash",
        role=role,
    )
    db.add(user)
    db.flush()
    customer = CustomerModel(user_id=user.id, first_name="Test", last_name=role)
    db.add(customer)
    db.commit()
    return user


@pytest.fixture
def customer(db) -> CustomerModel:
    user = make_user(db, "anna@example.com")
    return user.customer


@pytest.fixture
def other_customer(db) -> CustomerModel:
    user = make_user(db, "piotr@example.com")
    return user.customer


@pytest.fixture
def admin(db) -> UserModel:
    return make_user(db, "boss@example.com", role=ROLE_ADMIN)


@pytest.fixture
def second_admin(db) -> UserModel:
    return make_user(db, "deputy@example.com", role=ROLE_ADMIN)


@pytest.fixture
def storage() -> StorageGateway:
    return StorageGateway(
        products=ProductTable(MagicMock()),
        profiles=CustomerProfileTable(MagicMock()),
        blobs=BlobStore(MagicMock()),
        queues=QueueStore(MagicMock()),
        files=FileShareStore(MagicMock()),
    )


@pytest.fixture
def client(session_factory, storage):
    from app.main import create_app

    app = create_app(storage=storage)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
