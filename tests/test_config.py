import pytest

from imgproxy_url.core.config import Settings, get_settings
from imgproxy_url.core.errors import InvalidSignatureSizeError
from tests.test_logging import run_python


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("IMGPROXY_BASE_URL", "IMGPROXY_KEY", "IMGPROXY_SALT",
                 "IMGPROXY_SIGNATURE_SIZE", "IMGPROXY_ENCODE_PATH"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()
    assert settings.imgproxy_base_url == ""
    assert settings.imgproxy_signature_size == 32
    assert settings.imgproxy_encode_path is True


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("IMGPROXY_BASE_URL", "http://localhost:8080")
    monkeypatch.setenv("IMGPROXY_KEY", "6b6579")
    monkeypatch.setenv("IMGPROXY_SALT", "73616c74")
    monkeypatch.setenv("IMGPROXY_SIGNATURE_SIZE", "8")
    monkeypatch.setenv("IMGPROXY_ENCODE_PATH", "false")

    settings = get_settings()
    assert settings.imgproxy_base_url == "http://localhost:8080"
    assert settings.imgproxy_key == "6b6579"
    assert settings.imgproxy_signature_size == 8
    assert settings.imgproxy_encode_path is False
    assert get_settings() is settings


def test_encode_path_truthy_values(monkeypatch):
    for value in ("true", "1", "t", "TRUE"):
        monkeypatch.setenv("IMGPROXY_ENCODE_PATH", value)
        assert Settings().imgproxy_encode_path is True


def test_non_numeric_signature_size(monkeypatch):
    monkeypatch.setenv("IMGPROXY_SIGNATURE_SIZE", "abc")
    with pytest.raises(InvalidSignatureSizeError) as exc_info:
        get_settings()
    assert exc_info.value.size == "abc"


def test_bad_environment_does_not_break_import():
    result = run_python(
        "import imgproxy_url\n"
        "print(imgproxy_url.Imgproxy('http://localhost', signature_size=15).builder().generate('a.png'))\n",
        IMGPROXY_SIGNATURE_SIZE="abc",
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "http://localhost/insecure/YS5wbmc"
