"""
Image optimization for uploaded case pictures.

Uploads are re-oriented from their EXIF data, cropped to fill a fixed box
and re-encoded as WebP before they reach storage.
"""
import io
import logging
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from app.config import settings
from app.core.errors import FormValidationError

logger = logging.getLogger(__name__)

WEBP_CONTENT_TYPE = "image/webp"
WEBP_EXTENSION = "webp"


def optimize_image(
    image_bytes: bytes,
    size: Tuple[int, int] = None,
    quality: int = None,
) -> bytes:
    """
    Re-encode an uploaded image for storage.

    Args:
        image_bytes: Original file bytes
        size: Target (width, height) box, defaults to settings
        quality: Lossy WebP quality (0-100), defaults to settings

    Returns:
        bytes: WebP encoded image exactly `size` pixels large

    Raises:
        FormValidationError: If the upload is not a readable image
    """
    size = size or (settings.image_width, settings.image_height)
    quality = settings.image_quality if quality is None else quality

    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Cannot identify uploaded image: {str(e)}")
        raise FormValidationError({"image": "File is not a valid image"})

    image = ImageOps.exif_transpose(image)

    if image.mode == "P":
        image = image.convert("RGBA")
    elif image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGB")

    image = ImageOps.fit(
        image,
        size,
        method=Image.Resampling.LANCZOS,
        centering=(0.5, 0.5),
    )

    buffer = io.BytesIO()
    image.save(buffer, format="WEBP", quality=quality)
    webp_bytes = buffer.getvalue()

    logger.info(
        "Optimized image %s bytes -> %s bytes (%sx%s, quality=%s)",
        len(image_bytes), len(webp_bytes), size[0], size[1], quality,
    )
    return webp_bytes
