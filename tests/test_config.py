"""Settings validation."""

import pytest
from pydantic import ValidationError

from notekeeper.config import Settings


def test_log_level_is_normalised():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")


@pytest.mark.parametrize("code", [401, 403])
def test_forbidden_status_accepts_401_and_403(code):
    assert Settings(forbidden_status_code=code).forbidden_status_code == code


def test_forbidden_status_rejects_other_codes():
    with pytest.raises(ValidationError):
        Settings(forbidden_status_code=404)


def test_missing_jwt_secret_reported():
    with pytest.raises(ValueError, match="JWT_SECRET"):
        Settings(jwt_secret="").validate_required_for_production()


def test_sqlite_detection():
    assert Settings(database_url="sqlite+aiosqlite:///x.db").is_sqlite
    assert not Settings(database_url="postgresql+asyncpg://u:p@h/db").is_sqlite
