"""
Anekazoo Animals API - Settings Tests
======================================

What:  Tests for environment-driven Settings parsing and validation.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from anekazoo.config import Settings


class TestSettings:

    def test_defaults_target_local_postgres(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        s = Settings(_env_file=None)

        assert s.database_url.startswith("postgresql+asyncpg://")
        assert s.backend_port == 8080
        assert s.log_level == "INFO"

    def test_env_override_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("backend_port", "9090")

        assert Settings(_env_file=None).backend_port == 9090

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_log_level_rejects_unknown(self):
        with pytest.raises(PydanticValidationError, match="Invalid log_level"):
            Settings(_env_file=None, log_level="verbose")

    def test_pool_size_bounds(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, db_pool_size=0)

    def test_cors_origins_list(self):
        s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")

        assert s.cors_origins_list == ["http://a.test", "http://b.test"]
