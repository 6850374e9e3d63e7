import os
from functools import lru_cache

from pydantic import BaseModel, Field, ConfigDict, ValidationError
from dotenv import load_dotenv

from imgproxy_url.core.errors import InvalidSignatureSizeError

# Load environment variables from .env file if it exists
load_dotenv()


class Settings(BaseModel):
    """Application settings."""
    # imgproxy Configuration
    imgproxy_base_url: str = Field(
        default_factory=lambda: os.getenv("IMGPROXY_BASE_URL", "")
    )
    imgproxy_key: str = Field(
        default_factory=lambda: os.getenv("IMGPROXY_KEY", "")
    )
    imgproxy_salt: str = Field(
        default_factory=lambda: os.getenv("IMGPROXY_SALT", "")
    )
    imgproxy_signature_size: int = Field(
        default_factory=lambda: os.getenv("IMGPROXY_SIGNATURE_SIZE", "32"),  # full HMAC-SHA256 digest
        validate_default=True,
    )
    imgproxy_encode_path: bool = Field(
        default_factory=lambda: os.getenv("IMGPROXY_ENCODE_PATH", "true").lower() in ("true", "1", "t")
    )

    model_config = ConfigDict()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings read from the environment on first use."""
    try:
        return Settings()
    except ValidationError as e:
        # imgproxy_signature_size is the only field parsed from a raw string
        raise InvalidSignatureSizeError(os.getenv("IMGPROXY_SIGNATURE_SIZE")) from e
