import traceback
from typing import Dict, Any, Optional


# Context keys that must never leave the process in an error payload
SENSITIVE_CONTEXT_KEYS = ("password", "token", "secret", "key", "salt")


class ImgproxyError(Exception):
    """Base exception class for the imgproxy URL builder.

    This provides a standardized way to handle errors with detailed context.
    """
    def __init__(self,
                 message: str,
                 error_code: str = "imgproxy_error",
                 context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.original_exception = original_exception
        self.traceback = traceback.format_exc() if original_exception else None

        # Add original exception details to context if available
        if original_exception:
            self.context.update({
                "original_error_type": type(original_exception).__name__,
                "original_error": str(original_exception)
            })

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary suitable for structured logs or API responses."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }

        safe_context = {}
        for key, value in self.context.items():
            if key not in SENSITIVE_CONTEXT_KEYS and value is not None:
                safe_context[key] = value

        if safe_context:
            result["details"] = safe_context

        return result


# Configuration errors, raised while constructing an Imgproxy instance
class ConfigurationError(ImgproxyError):
    """Error for an endpoint configuration that cannot be used."""
    def __init__(self, message: str, error_code: str = "configuration_error",
                 context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        super().__init__(
            message=message,
            error_code=error_code,
            context=context,
            original_exception=original_exception
        )


class InvalidHexEncodingError(ConfigurationError, ValueError):
    """Error when the signing key or salt is not a valid hex string."""
    def __init__(self, field: str, original_exception: Optional[Exception] = None):
        # The offending value is secret material, only the field name is reported
        super().__init__(
            message=f"Invalid hex encoding for '{field}': expected two hex digits (0-9, a-f) per byte",
            error_code="invalid_hex_encoding",
            context={"field": field},
            original_exception=original_exception
        )
        self.field = field


class InvalidSignatureSizeError(ConfigurationError, ValueError):
    """Error when the signature truncation length is outside [1, 32]."""
    def __init__(self, size: Any, min_size: int = 1, max_size: int = 32):
        super().__init__(
            message=f"Invalid signature size {size!r}: must be an integer between {min_size} and {max_size}",
            error_code="invalid_signature_size",
            context={"signature_size": size, "min_size": min_size, "max_size": max_size}
        )
        self.size = size


# Signing errors
class SignatureError(ImgproxyError):
    """Error while computing the URL signature."""
    def __init__(self, message: str = "Failed to sign imgproxy URL",
                 context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        super().__init__(
            message=message,
            error_code="signature_error",
            context=context,
            original_exception=original_exception
        )
