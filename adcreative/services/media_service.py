"""
MediaService - validation pass for generated media.

Images are decoded with Pillow to make sure the bytes are a real image;
no resizing or re-encoding happens here, the bytes are returned as-is.
"""

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from ..core.errors import InvalidMediaData
from ..core.models import AdPlatform, CreativeType

logger = logging.getLogger(__name__)


class MediaService:
    """Checks and prepares generated media before it becomes a creative."""

    async def process_media(self, data: bytes, type: CreativeType) -> bytes:
        """
        Validate media bytes for a creative type.

        Args:
            data: Raw media bytes
            type: Creative type the media belongs to

        Returns:
            The unchanged bytes

        Raises:
            InvalidMediaData: If the bytes are empty or not a decodable image
        """
        if not data:
            raise InvalidMediaData("Media payload is empty")

        if CreativeType(type) == CreativeType.VIDEO:
            return data

        # Image, carousel and collection media are all image payloads
        try:
            with Image.open(BytesIO(data)) as image:
                image.verify()
                logger.info(f"Validated {image.format} image ({image.width}x{image.height})")
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InvalidMediaData(f"Invalid media data: {e}") from e

        return data

    async def optimize_for_platform(self, data: bytes, platform: AdPlatform) -> bytes:
        """Platform-specific optimization hook; currently returns the bytes unchanged."""
        logger.debug(f"No {AdPlatform(platform).label} optimizations configured")
        return data
