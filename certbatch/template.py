"""Template image decoding and loading."""

import io
import logging
import threading
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageOps

from .errors import DecodeError, InvalidDimensionsError
from .models import Position, TemplateImage

logger = logging.getLogger(__name__)

# Colors considered when suggesting a text color, most frequent first
TOP_COLORS = 20
MIN_CONTRAST = 30


def decode_template(data: bytes) -> TemplateImage:
    """Decode image bytes into a TemplateImage."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
        fmt = image.format
        # dimensions are those of the upright image
        image = ImageOps.exif_transpose(image)
    except Exception as e:
        raise DecodeError("Failed to load image. Please try a different file.") from e

    width, height = image.size
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(width, height)

    logger.info("Decoded %s template %dx%d", fmt or "image", width, height)
    return TemplateImage(image=image, width=width, height=height, format=fmt)


class TemplateLoader:
    """
    Holds the current template and arbitrates overlapping uploads.

    Every upload takes a token from begin(); only the newest token may
    publish its result. A decode that finishes after a newer upload started
    is dropped instead of replacing the newer template.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest = 0
        self._current: Optional[TemplateImage] = None

    @property
    def current(self) -> Optional[TemplateImage]:
        with self._lock:
            return self._current

    def begin(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def finish(self, token: int, data: bytes) -> Optional[TemplateImage]:
        """Decode data for token. Returns None if a newer upload superseded it."""
        template = decode_template(data)
        with self._lock:
            if token != self._latest:
                logger.debug("Discarding stale template decode (token %d, latest %d)", token, self._latest)
                return None
            self._current = template
        return template

    def load(self, data: bytes) -> Optional[TemplateImage]:
        return self.finish(self.begin(), data)

    def clear(self):
        with self._lock:
            self._latest += 1
            self._current = None


def _to_hex(color: Tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


def suggest_font_color(
    template: TemplateImage,
    position: Position,
    region_width: Optional[int] = None,
    region_height: int = 100,
) -> str:
    """
    Pick a text color that stands out against the template around position.

    The most frequent color in the sampled region is taken as the background;
    the text color is the frequent color furthest from it. Falls back to black
    or white by background brightness when nothing contrasts enough.
    """
    half_w = (region_width or int(template.width * 0.6)) // 2
    cx, cy = int(position.x), int(position.y)
    box = (
        max(0, cx - half_w),
        max(0, cy - region_height),
        min(template.width, cx + half_w),
        min(template.height, cy + region_height),
    )
    if box[0] >= box[2] or box[1] >= box[3]:
        return "#000000"

    region = template.image.convert("RGB").crop(box)
    pixels = np.asarray(region).reshape(-1, 3)
    unique_colors, counts = np.unique(pixels, axis=0, return_counts=True)
    frequent = unique_colors[np.argsort(-counts, kind="stable")[:TOP_COLORS]].astype(int)
    background = frequent[0]

    distances = np.linalg.norm(frequent - background, axis=1)
    best = int(np.argmax(distances))
    if distances[best] <= MIN_CONTRAST:
        return "#000000" if background.mean() > 128 else "#ffffff"
    return _to_hex(tuple(int(c) for c in frequent[best]))
