"""Uploaded image checks"""
from io import BytesIO
import logging

from PIL import Image, UnidentifiedImageError

from errors import InvalidRoomImage

logger = logging.getLogger(__name__)


def inspect_room_image(data: bytes) -> str:
    """Make sure the upload decodes as an image and return its format (JPEG, PNG, ...)"""
    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        logger.warning(f"Rejected room image ({len(data)} bytes): {str(e)}")
        raise InvalidRoomImage("roomImage no es una imagen válida") from e

    logger.info(f"Room image accepted: format={image_format}, {len(data)} bytes")
    return image_format
