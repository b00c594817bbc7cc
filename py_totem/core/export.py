"""
PNG serialisation of rendered pixel buffers.

Encoding never feeds back into generation; it only reads the buffer.
"""

import asyncio
import base64
import io
from typing import Callable, Optional

import numpy as np
import structlog
from PIL import Image

logger = structlog.get_logger()

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


def to_image(pixels: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def to_png_bytes(pixels: np.ndarray) -> bytes:
    """Encode an RGB buffer as PNG."""
    stream = io.BytesIO()
    to_image(pixels).save(stream, format="PNG")
    return stream.getvalue()


def to_data_url(pixels: np.ndarray) -> str:
    return PNG_DATA_URL_PREFIX + base64.b64encode(to_png_bytes(pixels)).decode("ascii")


def data_url_to_bytes(data_url: str) -> bytes:
    """Decode a ``data:image/png;base64,...`` URL back to PNG bytes."""
    if "," in data_url:
        _, data_url = data_url.split(",", 1)
    return base64.b64decode(data_url)


def export_png(
    pixels: np.ndarray, on_ready: Optional[Callable[[str], None]] = None
) -> str:
    """
    Encode ``pixels`` as a PNG data URL and hand it to ``on_ready``.

    Returns the data URL.
    """
    data_url = to_data_url(pixels)
    logger.debug("PNG exported", width=pixels.shape[1], height=pixels.shape[0])
    if on_ready is not None:
        on_ready(data_url)
    return data_url


async def export_png_deferred(
    pixels: np.ndarray, on_ready: Optional[Callable[[str], None]] = None
) -> str:
    """Same as ``export_png`` after yielding one event-loop tick."""
    await asyncio.sleep(0)
    return export_png(pixels, on_ready)
