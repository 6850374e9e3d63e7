import logging
import os
import subprocess
import sys

import pytest
from loguru import logger

from imgproxy_url.core.logging import LogConfig, get_logger, setup_logging
from imgproxy_url.services.imgproxy import Imgproxy

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def library_logging():
    """Turn the package's own log records on for the duration of a test."""
    logger.enable("imgproxy_url")
    yield
    logger.disable("imgproxy_url")


def capture(level="DEBUG"):
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record), level=level)
    return messages, handler_id


def run_python(code, **env):
    return subprocess.run(
        [sys.executable, "-c", code],
        cwd=PROJECT_ROOT,
        env={**os.environ, "PYTHONPATH": PROJECT_ROOT, **env},
        capture_output=True,
        text=True,
    )


def test_log_config_reads_prefixed_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    assert LogConfig().LEVEL == "WARNING"


def test_get_logger_binds_name():
    messages, handler_id = capture()
    try:
        get_logger("tests").info("hello")
    finally:
        logger.remove(handler_id)
    assert messages[0]["extra"]["name"] == "tests"
    assert messages[0]["message"] == "hello"


def test_package_is_silent_by_default():
    messages, handler_id = capture()
    try:
        Imgproxy("http://localhost", b"key".hex(), b"salt".hex(), 15).builder().width(1).generate("a.png")
    finally:
        logger.remove(handler_id)
    assert messages == []


def test_no_stderr_output_without_setup_logging():
    result = run_python(
        "from imgproxy_url import Imgproxy\n"
        "print(Imgproxy('http://localhost', '6b6579', '73616c74', 15).builder().width(1).generate('a.png'))\n"
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().startswith("http://localhost/")
    assert result.stderr == ""


def test_generation_never_logs_secrets(library_logging):
    messages, handler_id = capture()
    try:
        imgproxy = Imgproxy("http://localhost", b"secretkey".hex(), b"secretsalt".hex(), 15)
        imgproxy.builder().width(10).generate("my/image.jpg")
    finally:
        logger.remove(handler_id)

    text = " ".join(record["message"] for record in messages)
    assert "http://localhost/" in text
    assert b"secretkey".hex() not in text
    assert b"secretsalt".hex() not in text


def test_setup_logging_enables_package_and_intercepts_stdlib(capsys):
    setup_logging(level="DEBUG")
    try:
        logging.getLogger("stdlib.test").warning("from stdlib")
        Imgproxy("http://localhost").builder().generate("a.png")
        out = capsys.readouterr().out
        assert "from stdlib" in out
        assert "http://localhost/insecure/plain/a.png" in out
    finally:
        logger.remove()
        logger.add(sys.stderr)
        logger.disable("imgproxy_url")
