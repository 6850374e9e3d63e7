from typing import TYPE_CHECKING, Dict, Optional, Union

from imgproxy_url.core.logging import get_logger
from imgproxy_url.services.options import (
    BackgroundOption,
    GravityOption,
    ResizingType,
    WatermarkOffset,
    WatermarkPosition,
    background_value,
    bool_flag,
    gravity_value,
)
from imgproxy_url.services.signer import urlsafe_b64encode_nopad

if TYPE_CHECKING:
    from imgproxy_url.services.imgproxy import Imgproxy

logger = get_logger("imgproxy_builder")

PLAIN_PREFIX = "plain/"


class ImgproxyURLBuilder:
    """Collects processing options for a single imgproxy URL.

    Every option method stores one serialized value and returns the builder,
    so calls can be chained. Setting the same option twice keeps the last value.
    """

    def __init__(self, imgproxy: "Imgproxy"):
        self._imgproxy = imgproxy
        self._options: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, key: str) -> bool:
        return key in self._options

    @property
    def options(self) -> Dict[str, str]:
        """A copy of the options collected so far."""
        return dict(self._options)

    def set_option(self, key: str, value) -> "ImgproxyURLBuilder":
        """Set a raw option value."""
        self._options[key] = str(value)
        return self

    def resize(self, resizing_type: Union[ResizingType, str], width: int, height: int,
               enlarge: bool = False, extend: bool = False) -> "ImgproxyURLBuilder":
        """Resize the image with the given resizing type and dimensions."""
        return self.set_option("rs", (
            f"{ResizingType(resizing_type).value}:{width}:{height}:"
            f"{bool_flag(enlarge)}:{bool_flag(extend)}"
        ))

    def size(self, width: int, height: int, enlarge: bool = False) -> "ImgproxyURLBuilder":
        return self.set_option("s", f"{width}:{height}:{bool_flag(enlarge)}")

    def resizing_type(self, resizing_type: Union[ResizingType, str]) -> "ImgproxyURLBuilder":
        return self.set_option("rs", ResizingType(resizing_type).value)

    def width(self, width: int) -> "ImgproxyURLBuilder":
        """Width of the resulting image.

        0 lets imgproxy derive it from the height and the source aspect ratio.
        """
        return self.set_option("w", width)

    def height(self, height: int) -> "ImgproxyURLBuilder":
        """Height of the resulting image.

        0 lets imgproxy derive it from the width and the source aspect ratio.
        """
        return self.set_option("h", height)

    def dpr(self, dpr: int) -> "ImgproxyURLBuilder":
        """Output density. Values of zero or below leave the option unset."""
        if dpr > 0:
            return self.set_option("dpr", dpr)
        return self

    def enlarge(self, enlarge: Union[int, bool]) -> "ImgproxyURLBuilder":
        if isinstance(enlarge, bool):
            return self.set_option("el", bool_flag(enlarge))
        return self.set_option("el", enlarge)

    def gravity(self, gravity: GravityOption) -> "ImgproxyURLBuilder":
        """Guide imgproxy when it needs to cut some parts of the image."""
        return self.set_option("g", gravity_value(gravity))

    def quality(self, quality: int) -> "ImgproxyURLBuilder":
        return self.set_option("q", quality)

    def background(self, background: BackgroundOption) -> "ImgproxyURLBuilder":
        """Fill the background, useful when converting images with alpha to JPEG."""
        return self.set_option("bg", background_value(background))

    def blur(self, sigma: int) -> "ImgproxyURLBuilder":
        return self.set_option("bl", sigma)

    def sharpen(self, sigma: int) -> "ImgproxyURLBuilder":
        return self.set_option("sh", sigma)

    def watermark(self, opacity: int, position: Union[WatermarkPosition, str],
                  offset: Optional[WatermarkOffset], scale: int) -> "ImgproxyURLBuilder":
        """Place a watermark on the processed image.

        The offset fields are left out entirely when no offset is given.
        """
        if offset is not None and not isinstance(offset, WatermarkOffset):
            raise TypeError(f"offset must be WatermarkOffset or None, not {type(offset).__name__}")
        offset_str = f":{offset.x}:{offset.y}" if offset is not None else ""
        return self.set_option(
            "wm", f"{opacity}:{WatermarkPosition(position).value}{offset_str}:{scale}"
        )

    def preset(self, *presets: str) -> "ImgproxyURLBuilder":
        # Order matters to imgproxy, keep it as given
        return self.set_option("pr", ":".join(presets))

    def cache_buster(self, buster: str) -> "ImgproxyURLBuilder":
        """Change the URL to bypass CDN and browser caches without affecting processing."""
        return self.set_option("cb", buster)

    def format(self, extension: str) -> "ImgproxyURLBuilder":
        return self.set_option("f", extension)

    def crop(self, width: int, height: int,
             gravity: Optional[GravityOption] = None) -> "ImgproxyURLBuilder":
        crop = f"{width}:{height}"
        if gravity is not None:
            crop += ":" + gravity_value(gravity)
        return self.set_option("c", crop)

    def _encode_source(self, source_url: str) -> str:
        if self._imgproxy.encode_path:
            return urlsafe_b64encode_nopad(source_url.encode())
        return PLAIN_PREFIX + source_url

    def _serialize_options(self) -> str:
        # Sorted once here so the signed path does not depend on call order
        return "/" + "".join(f"{key}:{self._options[key]}/" for key in sorted(self._options))

    def generate(self, source_url: str) -> str:
        """Generate the imgproxy URL for a source image.

        Args:
            source_url: Location of the original image

        Returns:
            Signed imgproxy URL, or an insecure one when no key and salt are configured
        """
        path = self._serialize_options() + self._encode_source(source_url)

        signature = self._imgproxy.sign_path(path)

        url = f"{self._imgproxy.base_url}{signature}{path}"
        logger.debug(f"Generated imgproxy URL with {len(self._options)} option(s): {url}")
        return url
