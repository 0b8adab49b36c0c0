"""Color conversions used by the Yeelight protocol.

Colors travel on the wire as packed 24-bit integers (``0xRRGGBB``). LED
strip frames use a compact text form: each color becomes four symbols of
a 64-symbol alphabet, concatenated in strip order.
"""
from __future__ import annotations

import io
import logging
import string
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from yeelight_lan.exceptions import ColorParseError, YeelightError

_LOGGER = logging.getLogger(__name__)

COLOR_MAX = 0xFFFFFF

COMPACT_ALPHABET = (
    string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
)


@dataclass(frozen=True, slots=True)
class Color:
    """A packed 24-bit RGB color."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= COLOR_MAX:
            raise ValueError(
                f"Color value must be 0x000000-0xFFFFFF, got {self.value:#x}"
            )

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse ``#rrggbb`` / ``rrggbb`` text."""
        cleaned = text.strip().lstrip("#")
        if not cleaned:
            raise ColorParseError(f"Empty hex color: {text!r}")
        # int() alone would also accept "0x", "_" and sign prefixes
        if any(char not in string.hexdigits for char in cleaned):
            raise ColorParseError(f"Invalid hex color: {text!r}")
        value = int(cleaned, 16)
        if value > COLOR_MAX:
            raise ColorParseError(f"Hex color out of range: {text!r}")
        return cls(value)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Color:
        """Pack three 8-bit components.

        Components are masked to 8 bits so that negative (signed byte)
        inputs do not bleed into neighbouring fields.
        """
        return cls(((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF))

    def to_hex(self) -> str:
        """Return 6-digit lowercase hex text."""
        return f"{self.value:06x}"

    def to_rgb(self) -> tuple[int, int, int]:
        """Return the (r, g, b) components."""
        return (
            (self.value >> 16) & 0xFF,
            (self.value >> 8) & 0xFF,
            self.value & 0xFF,
        )

    def to_compact_text(self) -> str:
        """Return the 4-symbol compact encoding used by ``update_leds``."""
        hi, lo = divmod(self.value, 64)
        return (
            COMPACT_ALPHABET[hi // 4096]
            + COMPACT_ALPHABET[(hi % 4096) // 64]
            + COMPACT_ALPHABET[hi % 64]
            + COMPACT_ALPHABET[lo]
        )

    def __int__(self) -> int:
        return self.value


@dataclass(slots=True)
class ColorMatrix:
    """An ordered LED strip frame."""

    colors: list[Color] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)

    @classmethod
    def from_hex_list(cls, values: Iterable[str]) -> ColorMatrix:
        """Build a frame from hex color strings."""
        return cls([Color.from_hex(value) for value in values])

    @classmethod
    def from_rgb_bytes(cls, data: bytes) -> ColorMatrix:
        """Build a frame from flat RGB bytes (3 bytes per LED)."""
        if len(data) % 3 != 0:
            raise ValueError(
                f"RGB data length must be a multiple of 3, got {len(data)}"
            )
        return cls(
            [
                Color.from_rgb(data[i], data[i + 1], data[i + 2])
                for i in range(0, len(data), 3)
            ]
        )

    @classmethod
    def from_image(cls, data: bytes, width: int) -> ColorMatrix:
        """Sample an encoded image down to a ``width`` LED frame.

        Requires Pillow.
        """
        if width <= 0:
            raise ValueError(f"Frame width must be positive, got {width}")
        image_mod = _require_pillow()
        img = image_mod.open(io.BytesIO(data)).convert("RGB")
        img = img.resize((width, 1), resample=_resample_filter(image_mod, "BOX"))
        return cls.from_rgb_bytes(img.tobytes())

    def to_compact_text(self) -> str:
        """Concatenate each color's compact encoding in order."""
        return "".join(color.to_compact_text() for color in self.colors)

    def to_jpeg(self, height: int = 20) -> bytes:
        """Render the frame as a JPEG preview strip.

        Requires Pillow.
        """
        if not self.colors:
            raise ValueError("Cannot render an empty frame")
        image_mod = _require_pillow()
        raw = b"".join(bytes(color.to_rgb()) for color in self.colors)
        img = image_mod.frombytes("RGB", (len(self.colors), 1), raw)
        img = img.resize(
            (len(self.colors), height),
            resample=_resample_filter(image_mod, "NEAREST"),
        )
        img_byte_arr = io.BytesIO()
        img.save(img_byte_arr, format="JPEG")
        return img_byte_arr.getvalue()


def _require_pillow():
    try:
        from PIL import Image  # type: ignore[import-not-found]
    except ImportError as err:  # pragma: no cover - optional dependency
        raise YeelightError(
            "Pillow is required for image frames. "
            "Install it with `pip install yeelight-lan[image]`."
        ) from err
    return Image


def _resample_filter(image_mod, name: str):
    if hasattr(image_mod, "Resampling"):
        return getattr(image_mod.Resampling, name)
    _LOGGER.debug("Pillow without Resampling enum; using Image.%s", name)
    return getattr(image_mod, name)
