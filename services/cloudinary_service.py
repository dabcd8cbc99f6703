"""Cloudinary upload service"""
from io import BytesIO
from typing import Optional
import logging

import cloudinary
import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from config import Settings
from errors import UploadFailed

logger = logging.getLogger(__name__)


async def upload_room_image(data: bytes, settings: Settings, folder: Optional[str] = None) -> str:
    """Upload the customer's room photo to Cloudinary and return its secure URL"""
    if not settings.cloudinary_configured:
        logger.error("Cloudinary credentials not configured")
        raise UploadFailed("Cloudinary credentials are not configured")

    folder = folder or settings.cloudinary_folder
    logger.info(f"Uploading to Cloudinary: folder={folder}, {len(data)} bytes")
    try:
        # The SDK call is blocking, keep it off the event loop
        response = await run_in_threadpool(
            cloudinary.uploader.upload,
            BytesIO(data),
            folder=folder,
            resource_type="image",
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    except Exception as e:
        logger.error(f"Error uploading to Cloudinary: {str(e)}")
        raise UploadFailed(str(e)) from e

    secure_url = (response or {}).get("secure_url")
    if not secure_url:
        logger.error(f"Cloudinary response without secure_url: {response}")
        raise UploadFailed("response did not include secure_url")

    logger.info(f"Uploaded to Cloudinary: {secure_url}")
    return secure_url
