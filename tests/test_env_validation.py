import pytest
from django.core.exceptions import ImproperlyConfigured

from admindash.env_validation import validate_env

PRODUCTION_ENV = {
    "PRODUCTION": "true",
    "SECRET_KEY": "k" * 64,
    "DATABASE_URL": "postgres://app:secret@db/app",
    "ALLOWED_HOSTS": "dash.example.com",
    "REDIS_URL": "redis://cache:6379/0",
    "UPLOAD_ROOT": "/srv/uploads",
}


@pytest.fixture
def production_env(monkeypatch):
    for name, value in PRODUCTION_ENV.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


class TestValidateEnv:
    def test_complete_production_env_passes(self, production_env):
        validate_env()

    def test_production_requires_shared_cache(self, production_env):
        production_env.delenv("REDIS_URL")
        with pytest.raises(ImproperlyConfigured, match="REDIS_URL"):
            validate_env()

    def test_production_rejects_short_secret(self, production_env):
        production_env.setenv("SECRET_KEY", "short")
        with pytest.raises(ImproperlyConfigured, match="SECRET_KEY"):
            validate_env()

    def test_production_rejects_relative_upload_root(self, production_env):
        production_env.setenv("UPLOAD_ROOT", "public/uploads")
        with pytest.raises(ImproperlyConfigured, match="UPLOAD_ROOT"):
            validate_env()

    def test_development_needs_nothing(self, monkeypatch):
        monkeypatch.setenv("PRODUCTION", "false")
        monkeypatch.delenv("REDIS_URL", raising=False)
        validate_env()
