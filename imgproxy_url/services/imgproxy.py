from functools import lru_cache
from typing import Optional

from imgproxy_url.core.config import Settings, get_settings
from imgproxy_url.core.errors import InvalidHexEncodingError
from imgproxy_url.core.logging import get_logger
from imgproxy_url.services.builder import ImgproxyURLBuilder
from imgproxy_url.services.signer import MAX_SIGNATURE_SIZE, sign, validate_signature_size

logger = get_logger("imgproxy")

INSECURE_SIGNATURE = "insecure"


def _decode_hex(value: str, field: str) -> bytes:
    try:
        decoded = bytes.fromhex(value)
    except (TypeError, ValueError):
        raise InvalidHexEncodingError(field) from None

    # bytes.fromhex skips whitespace, imgproxy keys are plain hex digits
    if len(decoded) * 2 != len(value):
        raise InvalidHexEncodingError(field)
    return decoded


class Imgproxy:
    """Endpoint configuration for building imgproxy URLs.

    Holds the base URL, the decoded signing key and salt, the signature
    truncation length and the source encoding mode. Instances are read-only
    and can be shared by any number of concurrent builds.
    """

    __slots__ = ("_base_url", "_key", "_salt", "_signature_size", "_encode_path")

    def __init__(self, base_url: str, key: str = "", salt: str = "",
                 signature_size: int = MAX_SIGNATURE_SIZE, encode_path: bool = True):
        validate_signature_size(signature_size)

        if not base_url.endswith("/"):
            base_url += "/"

        object.__setattr__(self, "_base_url", base_url)
        object.__setattr__(self, "_key", _decode_hex(key, "key"))
        object.__setattr__(self, "_salt", _decode_hex(salt, "salt"))
        object.__setattr__(self, "_signature_size", signature_size)
        object.__setattr__(self, "_encode_path", bool(encode_path))

        logger.debug(
            f"imgproxy configured for {self._base_url} "
            f"(mode={'insecure' if self.insecure else 'signed'}, "
            f"signature_size={signature_size}, encode_path={self._encode_path})"
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(base_url={self._base_url!r}, "
            f"signature_size={self._signature_size}, encode_path={self._encode_path}, "
            f"insecure={self.insecure})"
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Imgproxy":
        """Create an instance from the environment-backed settings."""
        settings = settings or get_settings()
        return cls(
            base_url=settings.imgproxy_base_url,
            key=settings.imgproxy_key,
            salt=settings.imgproxy_salt,
            signature_size=settings.imgproxy_signature_size,
            encode_path=settings.imgproxy_encode_path,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def signature_size(self) -> int:
        return self._signature_size

    @property
    def encode_path(self) -> bool:
        return self._encode_path

    @property
    def insecure(self) -> bool:
        """True when neither a key nor a salt is configured."""
        return not self._key and not self._salt

    def builder(self) -> ImgproxyURLBuilder:
        """Start a new URL with an empty set of options."""
        return ImgproxyURLBuilder(self)

    def sign_path(self, path: str) -> str:
        """Return the signature segment for a path, or the insecure marker."""
        if self.insecure:
            return INSECURE_SIGNATURE
        return sign(self._key, self._salt, self._signature_size, path)


@lru_cache(maxsize=1)
def get_imgproxy() -> Imgproxy:
    """Shared instance built from the global settings."""
    return Imgproxy.from_settings()
