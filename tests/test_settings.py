"""
Tests for Settings.
"""

import pytest

from config.settings import Settings
from utils.errors import ConfigurationError


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestDatabaseUrl:
    def test_full_url_wins(self):
        s = _settings(database_url="postgresql+asyncpg://u:p@db:5432/shop", db_host="ignored")
        assert s.resolved_database_url() == "postgresql+asyncpg://u:p@db:5432/shop"

    @pytest.mark.parametrize("scheme", ["postgres://", "postgresql://"])
    def test_plain_postgres_url_gets_async_driver(self, scheme):
        s = _settings(database_url=f"{scheme}u:p@db:5432/shop")
        assert s.resolved_database_url() == "postgresql+asyncpg://u:p@db:5432/shop"

    def test_composed_from_parts(self):
        s = _settings(
            database_url="",
            db_host="pg",
            db_port=6543,
            db_user="shop",
            db_password="pw",
            db_name="store",
        )
        assert s.resolved_database_url() == "postgresql+asyncpg://shop:pw@pg:6543/store"


class TestTrustedProxies:
    def test_defaults_to_private_ranges(self):
        proxies = _settings(trusted_proxies="").trusted_proxy_list()
        assert "127.0.0.1" in proxies
        assert "10.0.0.0/8" in proxies

    def test_comma_separated(self):
        s = _settings(trusted_proxies=" 1.2.3.4 , 10.0.0.0/8,, ")
        assert s.trusted_proxy_list() == ["1.2.3.4", "10.0.0.0/8"]


class TestStartupValidation:
    @pytest.mark.parametrize("secret", ["", "   "])
    def test_empty_secret_fails_fast(self, secret):
        with pytest.raises(ConfigurationError):
            _settings(jwt_secret=secret).validate_for_startup()

    def test_non_positive_expiry(self):
        with pytest.raises(ConfigurationError):
            _settings(jwt_secret="s3cret", jwt_expiry_seconds=0).validate_for_startup()

    def test_valid(self):
        _settings(jwt_secret="s3cret").validate_for_startup()
