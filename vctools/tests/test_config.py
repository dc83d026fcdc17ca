import logging

import pytest

from vctools.config import Settings, load_settings
from vctools.main import configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("VCTOOLS_LOG_LEVEL", "VCTOOLS_LOG_FILE", "VCTOOLS_MEMO_SIZE"):
        # registered first so values loaded from .env files are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults(tmp_path):
    settings = load_settings(tmp_path / "missing.env")
    assert settings == Settings()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("VCTOOLS_LOG_LEVEL", "debug")
    monkeypatch.setenv("VCTOOLS_MEMO_SIZE", "16")
    settings = load_settings()
    assert settings.log_level == "DEBUG"
    assert settings.memo_size == 16
    assert settings.log_file is None


def test_settings_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("VCTOOLS_MEMO_SIZE=7\nVCTOOLS_LOG_FILE=vctools.log\n")
    settings = load_settings(env_file)
    assert settings.memo_size == 7
    assert settings.log_file == "vctools.log"


def test_negative_memo_size_disables_cache(monkeypatch):
    monkeypatch.setenv("VCTOOLS_MEMO_SIZE", "-3")
    assert load_settings().memo_size == 0


def test_bad_memo_size(monkeypatch):
    monkeypatch.setenv("VCTOOLS_MEMO_SIZE", "lots")
    with pytest.raises(ValueError, match="VCTOOLS_MEMO_SIZE") as exc_info:
        load_settings()
    assert exc_info.value.__cause__ is None
    assert exc_info.value.__suppress_context__


def test_configure_logging_adds_file_handler(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    log_file = tmp_path / "vctools.log"
    configure_logging(Settings(log_level="DEBUG", log_file=str(log_file)))
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
    assert root.level == logging.DEBUG
    for handler in root.handlers:
        handler.close()
