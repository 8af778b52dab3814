import logging

from khakhra_dashboard import config
from khakhra_dashboard.logging_config import ColoredFormatter, LOG_FORMAT, setup_logging


def test_env_flag(monkeypatch):
    monkeypatch.setenv("KHAKHRA_TEST_FLAG", "Yes")
    assert config._env_flag("KHAKHRA_TEST_FLAG", False) is True
    monkeypatch.setenv("KHAKHRA_TEST_FLAG", "0")
    assert config._env_flag("KHAKHRA_TEST_FLAG", True) is False
    monkeypatch.delenv("KHAKHRA_TEST_FLAG")
    assert config._env_flag("KHAKHRA_TEST_FLAG", True) is True


def test_default_data_file_lives_under_data_dir():
    assert config.DATA_FILE.endswith("khakhra-business-state-v1.json")


def test_colored_formatter_restores_levelname():
    record = logging.LogRecord("khakhra", logging.WARNING, __file__, 10, "low stock", None, None)
    text = ColoredFormatter(LOG_FORMAT).format(record)
    assert "low stock" in text
    assert "\033[33m" in text
    assert record.levelname == "WARNING"


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug")
        setup_logging("debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("werkzeug").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
