import base64
import hashlib
import hmac
from typing import Union

from imgproxy_url.core.errors import InvalidSignatureSizeError, SignatureError

# HMAC-SHA256 digest length in bytes
DIGEST_SIZE = hashlib.sha256().digest_size
MIN_SIGNATURE_SIZE = 1
MAX_SIGNATURE_SIZE = DIGEST_SIZE


def validate_signature_size(size) -> int:
    """Check that a truncation length keeps between 1 and 32 digest bytes."""
    if (isinstance(size, bool) or not isinstance(size, int)
            or not MIN_SIGNATURE_SIZE <= size <= MAX_SIGNATURE_SIZE):
        raise InvalidSignatureSizeError(size, MIN_SIGNATURE_SIZE, MAX_SIGNATURE_SIZE)
    return size


def urlsafe_b64encode_nopad(data: bytes) -> str:
    """Encode bytes with the URL-safe base64 alphabet, without '=' padding."""
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode()


def sign(key: bytes, salt: bytes, size: int, payload: Union[str, bytes]) -> str:
    """Sign a URL path the way imgproxy verifies it.

    The MAC is computed over the salt followed by the payload, truncated to
    ``size`` bytes and encoded as unpadded base64url.

    Args:
        key: Raw signing key
        salt: Raw signing salt
        size: Number of leading digest bytes to keep
        payload: Path to sign, starting with '/'

    Returns:
        Base64url-encoded signature
    """
    validate_signature_size(size)

    if isinstance(payload, str):
        payload = payload.encode()

    try:
        h = hmac.new(key, digestmod=hashlib.sha256)
        h.update(salt)
        h.update(payload)
        digest = h.digest()
    except (TypeError, ValueError) as e:
        raise SignatureError(context={"signature_size": size}, original_exception=e) from e

    return urlsafe_b64encode_nopad(digest[:size])
