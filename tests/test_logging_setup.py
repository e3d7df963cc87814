import json
import logging

from monsterinc.logging_setup import LogConfig, create_logger


def _read_lines(path):
    return path.read_text(encoding="utf-8").splitlines()


def test_json_file_output(tmp_path):
    log_path = tmp_path / "app.log"
    logger = create_logger(LogConfig(log_level="info", log_format="json", log_file=str(log_path)))
    logger.info("hello", extra={"url": "https://example.com"})
    entry = json.loads(_read_lines(log_path)[-1])
    assert entry["message"] == "hello"
    assert entry["url"] == "https://example.com"
    assert entry["level"] == "info"


def test_level_filters_lower_messages(tmp_path):
    log_path = tmp_path / "app.log"
    logger = create_logger(LogConfig(log_level="error", log_format="json", log_file=str(log_path)))
    logger.warning("quiet")
    logger.error("loud")
    text = log_path.read_text(encoding="utf-8")
    assert "loud" in text
    assert "quiet" not in text


def test_invalid_level_defaults_to_info(tmp_path, capsys):
    log_path = tmp_path / "app.log"
    logger = create_logger(LogConfig(log_level="verbose", log_format="json", log_file=str(log_path)))
    assert logger.level == logging.INFO
    logger.debug("hidden")
    logger.info("shown")
    text = log_path.read_text(encoding="utf-8")
    assert "shown" in text and "hidden" not in text
    assert "Invalid log level, defaulting to 'info'" in capsys.readouterr().err


def test_level_is_case_insensitive():
    logger = create_logger(LogConfig(log_level="DEBUG", log_format="json"))
    assert logger.level == logging.DEBUG


def test_text_format_file_has_no_colour(tmp_path):
    log_path = tmp_path / "app.log"
    logger = create_logger(LogConfig(log_format="text", log_file=str(log_path)))
    logger.info("plain message", extra={"count": 3})
    line = _read_lines(log_path)[-1]
    assert "plain message" in line
    assert "INF" in line
    assert "count=3" in line
    assert "\x1b" not in line


def test_console_writes_to_stderr(capsys):
    logger = create_logger(LogConfig(log_format="console"))
    logger.info("to stderr")
    assert "to stderr" in capsys.readouterr().err


def test_json_console_is_parseable(capsys):
    logger = create_logger(LogConfig(log_format="json"))
    logger.warning("careful")
    last = capsys.readouterr().err.strip().splitlines()[-1]
    assert json.loads(last)["message"] == "careful"


def test_unknown_format_falls_back_to_console(capsys, tmp_path):
    log_path = tmp_path / "app.log"
    logger = create_logger(LogConfig(log_format="xml", log_file=str(log_path)))
    logger.info("fallback works")
    err = capsys.readouterr().err
    assert "Unknown log format, defaulting to 'console'" in err
    assert "fallback works" in err
    line = _read_lines(log_path)[-1]
    assert "fallback works" in line
    assert not line.startswith("{")


def test_log_file_directory_created(tmp_path):
    log_path = tmp_path / "nested" / "dir" / "app.log"
    logger = create_logger(LogConfig(log_format="json", log_file=str(log_path)))
    logger.info("created")
    assert log_path.exists()
    assert json.loads(_read_lines(log_path)[-1])["message"] == "created"


def test_reconfiguring_replaces_handlers(tmp_path):
    create_logger(LogConfig(log_format="json", log_file=str(tmp_path / "a.log")))
    logger = create_logger(LogConfig(log_format="json"))
    assert len(logger.handlers) == 1
    assert logger.propagate is False