"""Build signed imgproxy URLs."""

from loguru import logger

from imgproxy_url.core.errors import (
    ConfigurationError,
    ImgproxyError,
    InvalidHexEncodingError,
    InvalidSignatureSizeError,
    SignatureError,
)
from imgproxy_url.services.builder import ImgproxyURLBuilder
from imgproxy_url.services.imgproxy import Imgproxy, get_imgproxy
from imgproxy_url.services.options import (
    FocusPoint,
    Gravity,
    HexColor,
    OffsetGravity,
    ResizingType,
    RGBColor,
    WatermarkOffset,
    WatermarkPosition,
)
from imgproxy_url.services.signer import sign

__version__ = "1.0.0"

# Silent until the application opts in through setup_logging()
logger.disable("imgproxy_url")

__all__ = [
    "ConfigurationError",
    "FocusPoint",
    "Gravity",
    "HexColor",
    "Imgproxy",
    "ImgproxyError",
    "ImgproxyURLBuilder",
    "InvalidHexEncodingError",
    "InvalidSignatureSizeError",
    "OffsetGravity",
    "ResizingType",
    "RGBColor",
    "SignatureError",
    "WatermarkOffset",
    "WatermarkPosition",
    "get_imgproxy",
    "sign",
]
