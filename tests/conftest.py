import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client

User = get_user_model()

# Smallest valid PNG header; content is never decoded.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def upload_root(settings, tmp_path):
    root = tmp_path / "uploads"
    settings.UPLOAD_ROOT = root
    return root


@pytest.fixture
def client():
    return Client()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username='admin',
        email='user@nextmail.com',
        password='123456'
    )


@pytest.fixture
def authenticated_client(client, user):
    client.login(username='admin', password='123456')
    return client


@pytest.fixture
def make_image():
    def _make(name="avatar.png", content=PNG_BYTES, content_type="image/png"):
        return SimpleUploadedFile(name, content, content_type=content_type)
    return _make
