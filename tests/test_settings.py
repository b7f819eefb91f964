import pytest
from pydantic import ValidationError

from core.settings import Settings


def test_log_level_normalized():
    assert Settings(database_url="sqlite:///x.db", log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite:///x.db", log_level="loud")


def test_invalid_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite:///x.db", log_format="xml")


def test_chat_history_limit_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite:///x.db", chat_history_limit=0)


def test_defaults():
    s = Settings(database_url="sqlite:///x.db")
    assert s.session_cookie_name == "connect.sid"
    assert s.chat_history_limit == 50
