# tests/test_logging.py
import pytest
import structlog
import json
from mock_interview.config import Settings, EnvironmentType
from mock_interview.core.logging import setup_logging

def test_logging_setup(settings, capsys):
    """Test logging configuration."""
    setup_logging(settings)
    logger = structlog.get_logger()
    assert logger is not None

    # Log a test message
    logger.info("test message", session_id="abc")

    # Capture the output
    captured = capsys.readouterr()
    output = captured.out.strip()

    # Testing environment renders JSON
    try:
        log_dict = json.loads(output)
    except json.JSONDecodeError:
        pytest.fail(f"Log output is not valid JSON: {output}")
    assert log_dict["event"] == "test message"
    assert log_dict["level"] == "info"
    assert log_dict["session_id"] == "abc"
    assert "timestamp" in log_dict

def test_development_logging_uses_console_renderer(capsys):
    setup_logging(Settings(ENVIRONMENT=EnvironmentType.DEVELOPMENT, _env_file=None))
    structlog.get_logger().info("console message")
    output = capsys.readouterr().out
    assert "console message" in output
    with pytest.raises(json.JSONDecodeError):
        json.loads(output.strip())

def test_production_filters_debug(capsys):
    setup_logging(Settings(ENVIRONMENT=EnvironmentType.PRODUCTION, LOG_LEVEL="DEBUG", _env_file=None))
    logger = structlog.get_logger()
    logger.debug("hidden")
    logger.info("shown")
    output = capsys.readouterr().out
    assert "hidden" not in output
    assert "shown" in output
