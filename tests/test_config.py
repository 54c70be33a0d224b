from taskapi.core.config import get_settings
from taskapi.core.security import hash_password, verify_password


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("REDIS_DSN", "redis://cache:6380/1")
    monkeypatch.setenv("REDIS_POOL_SIZE", "12")
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.redis_dsn == "redis://cache:6380/1"
    assert settings.redis_pool_size == 12
    assert settings.api_prefix == "/api"


def test_password_hash_round_trip():
    hashed = hash_password("secret")
    assert hashed.startswith("$2b$04$")
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)
