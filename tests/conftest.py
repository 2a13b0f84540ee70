import pytest
from product_catalog import create_app
from product_catalog.extensions import get_store
from product_catalog.services.storage_service import ObjectNotFound, StorageError


class FakeStorage:
    """Dict-backed stand-in for StorageService."""

    def __init__(self):
        self.bucket = "test-bucket"
        self.bucket_exists = False
        self.objects = {}
        self.content_types = {}
        self.deleted = []
        self.fail_deletes = False
        self.healthy = True

    def upload(self, storage_key, stream, content_type):
        self.objects[storage_key] = stream.read()
        self.content_types[storage_key] = content_type
        return self.url_for(storage_key)

    def download(self, storage_key):
        if storage_key not in self.objects:
            raise ObjectNotFound(storage_key)
        return self.objects[storage_key]

    def delete(self, storage_key):
        self.deleted.append(storage_key)
        if self.fail_deletes:
            raise StorageError(f"delete of {storage_key} failed")
        self.objects.pop(storage_key, None)

    def url_for(self, storage_key):
        return f"http://localhost:4566/test-bucket/{storage_key}"

    def check(self):
        if not self.healthy:
            raise StorageError("bucket test-bucket unreachable")

    def ensure_bucket(self):
        created = not self.bucket_exists
        self.bucket_exists = True
        return created


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def app(storage):
    """Create application for testing with in-memory storage."""
    app = create_app("testing", storage=storage)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return get_store()
