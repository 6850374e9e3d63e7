"""
Option value types for imgproxy processing options.

Each closed family (resizing type, gravity, background, watermark position)
knows how to render itself into the colon-delimited form imgproxy parses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ResizingType(str, Enum):
    """Resizing types supported by the rs option."""
    FIT = "fit"              # keep aspect ratio, fit the given size
    FILL = "fill"            # keep aspect ratio, fill the given size and crop projecting parts
    FILL_DOWN = "fill-down"  # like fill, but crops a smaller result to keep the requested aspect ratio
    FORCE = "force"          # ignore aspect ratio
    AUTO = "auto"            # fill when source and result share orientation, fit otherwise


class Gravity(str, Enum):
    """Directional gravity codes."""
    CENTER = "ce"
    NORTH = "no"
    SOUTH = "so"
    EAST = "ea"
    WEST = "we"
    NORTH_EAST = "noea"
    NORTH_WEST = "nowe"
    SOUTH_EAST = "soea"
    SOUTH_WEST = "sowe"
    SMART = "sm"  # libvips picks the most "interesting" section of the image

    def option_value(self) -> str:
        return self.value


@dataclass(frozen=True)
class OffsetGravity:
    """Directional gravity shifted by a pixel offset."""
    type: Gravity
    x_offset: int = 0
    y_offset: int = 0

    def option_value(self) -> str:
        return f"{Gravity(self.type).value}:{self.x_offset}:{self.y_offset}"


@dataclass(frozen=True)
class FocusPoint:
    """Absolute focus point, coordinates in the caller's unit convention."""
    x: int
    y: int

    def option_value(self) -> str:
        return f"fp:{self.x}:{self.y}"


GravityOption = Union[Gravity, OffsetGravity, FocusPoint]


def gravity_value(gravity: GravityOption) -> str:
    """Render a gravity variant for the g option or the crop gravity field."""
    if not isinstance(gravity, (Gravity, OffsetGravity, FocusPoint)):
        raise TypeError(
            f"gravity must be Gravity, OffsetGravity or FocusPoint, not {type(gravity).__name__}"
        )
    return gravity.option_value()


@dataclass(frozen=True)
class HexColor:
    """Hex-coded background color, passed to imgproxy unchanged."""
    value: str

    def option_value(self) -> str:
        return self.value


@dataclass(frozen=True)
class RGBColor:
    """Background color as red, green and blue channel values (0-255)."""
    r: int
    g: int
    b: int

    def option_value(self) -> str:
        return f"{self.r}:{self.g}:{self.b}"


BackgroundOption = Union[HexColor, RGBColor]


def background_value(background: BackgroundOption) -> str:
    """Render a background variant for the bg option."""
    if not isinstance(background, (HexColor, RGBColor)):
        raise TypeError(
            f"background must be HexColor or RGBColor, not {type(background).__name__}"
        )
    return background.option_value()


class WatermarkPosition(str, Enum):
    """Watermark placement codes."""
    CENTER = "ce"
    NORTH = "no"
    SOUTH = "so"
    EAST = "ea"
    WEST = "we"
    NORTH_EAST = "noea"
    NORTH_WEST = "nowe"
    SOUTH_EAST = "soea"
    SOUTH_WEST = "sowe"
    REPLICATE = "re"  # tile the watermark over the whole image


@dataclass(frozen=True)
class WatermarkOffset:
    x: int
    y: int


def bool_flag(value: bool) -> str:
    """Render a boolean the way imgproxy expects it."""
    return "1" if value else "0"
