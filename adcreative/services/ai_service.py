"""
AIService - prompt construction and orchestration of generation calls.

Builds prompts from product and style data, sends each through a
GenerationBackend in a single round-trip, and maps the raw results into
concepts, media and structured ad copy. There are no retries: backend and
transport errors reach the caller unchanged.
"""

import base64
import binascii
import logging
from typing import List, Sequence
from uuid import UUID

from ..core.errors import InvalidImageData, NoGeneratedContent
from ..core.models import (
    AdCopy,
    AdPlatform,
    CampaignPerformance,
    CreativeFormat,
    CreativeStyle,
    CreativeType,
    MediaGeneration,
    Product,
)
from .analytics_service import PerformanceSource
from .copy_parser import parse_ad_copy
from .generation_backend import GenerationBackend

logger = logging.getLogger(__name__)


# ============================================================================
# Prompt builders
# ============================================================================

def build_concept_prompt(
    product: Product,
    style: CreativeStyle,
    platforms: Sequence[AdPlatform],
) -> str:
    """Prompt asking for creative concepts for a product."""
    platform_names = ", ".join(AdPlatform(p).label for p in platforms)

    style_lines = [
        f"- Visual Style: {style.visual_style.label}",
        f"- Tone: {style.tone.label}",
        f"- Hook Style: {style.hook_style.label}",
    ]
    if style.custom_style:
        style_lines.append(f"- Custom Style: {style.custom_style}")
    style_block = "\n".join(style_lines)

    return f"""Create advertising concepts for the following product:

Product: {product.title}
Description: {product.description}
Price: ${product.price}
Target Platforms: {platform_names}

Style Guidelines:
{style_block}

Generate creative concepts that:
1. Highlight key product benefits
2. Appeal to the target audience
3. Follow platform-specific best practices
4. Incorporate the specified style guidelines"""


def build_media_prompt(concept: str, product: Product, style: CreativeStyle) -> str:
    """Prompt asking for an ad image that realizes a concept."""
    return f"""Create an advertisement image based on this concept:
{concept}

Product Details:
- Name: {product.title}
- Type: {product.type}

Style:
- Visual Style: {style.visual_style.label}
- Tone: {style.tone.label}

Requirements:
- Professional quality
- Clear product focus
- Engaging visual composition
- Brand appropriate"""


def build_ad_copy_prompt(product: Product, style: CreativeStyle, platform: AdPlatform) -> str:
    """Prompt asking for headline, description and call-to-action separated by blank lines."""
    features = "\n".join(product.features or [])

    return f"""Write advertising copy for:

Product: {product.title}
Platform: {AdPlatform(platform).label}
Price: ${product.price}

Style:
- Tone: {style.tone.label}
- Hook: {style.hook_style.label}

Include:
1. Attention-grabbing headline
2. Compelling description
3. Clear call-to-action

Key Features:
{features}"""


def decode_image_payload(payload: str) -> bytes:
    """
    Decode a base64 image payload.

    Raises:
        InvalidImageData: If the payload is not valid base64 or is empty
    """
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageData(f"Invalid image data received: {e}") from e

    if not data:
        raise InvalidImageData("Image payload decoded to zero bytes")
    return data


# ============================================================================
# Service
# ============================================================================

class AIService(PerformanceSource):
    """
    Orchestrates concept, media and copy generation.

    Args:
        backend: Text/image generation backend
        performance_source: Where campaign analytics snapshots come from
    """

    def __init__(self, backend: GenerationBackend, performance_source: PerformanceSource):
        self.backend = backend
        self.performance_source = performance_source

    async def generate_concepts(
        self,
        product: Product,
        style: CreativeStyle,
        platforms: Sequence[AdPlatform],
        variation_count: int,
    ) -> List[str]:
        """
        Generate creative concepts for a product.

        Args:
            product: Product to advertise
            style: Style guidelines for the prompt
            platforms: Target platforms, named in the prompt
            variation_count: Number of independent completions to request

        Returns:
            Concepts in the order the backend returned them

        Raises:
            ValueError: If variation_count is less than 1
            NoGeneratedContent: If the backend returned no completions
        """
        if variation_count < 1:
            raise ValueError("variation_count must be at least 1")

        prompt = build_concept_prompt(product, style, platforms)
        logger.info(f"Generating {variation_count} concept(s) for product: {product.title}")

        concepts = await self.backend.generate_text(prompt, variation_count)
        if not concepts:
            raise NoGeneratedContent()

        logger.info(f"Received {len(concepts)} concept(s)")
        return list(concepts)

    async def generate_media(
        self,
        concept: str,
        product: Product,
        style: CreativeStyle,
    ) -> MediaGeneration:
        """
        Generate a square ad image for a chosen concept.

        Raises:
            InvalidImageData: If the backend payload cannot be decoded
        """
        prompt = build_media_prompt(concept, product, style)
        logger.info(f"Generating media for product: {product.title}")

        payload = await self.backend.generate_image(prompt)
        data = decode_image_payload(payload)

        logger.info(f"Received image ({len(data)} bytes)")
        return MediaGeneration(data=data, type=CreativeType.IMAGE, format=CreativeFormat.SQUARE)

    async def generate_ad_copy(
        self,
        product: Product,
        style: CreativeStyle,
        platform: AdPlatform,
    ) -> AdCopy:
        """
        Generate structured ad copy for one platform.

        Raises:
            NoGeneratedContent: If the backend returned no completions
        """
        prompt = build_ad_copy_prompt(product, style, platform)
        logger.info(f"Generating {AdPlatform(platform).label} ad copy for product: {product.title}")

        completions = await self.backend.generate_text(prompt, 1)
        if not completions:
            raise NoGeneratedContent()

        copy_text = completions[0]
        if not copy_text.strip():
            logger.warning("Ad copy completion was blank; returning empty copy")

        return parse_ad_copy(copy_text)

    async def fetch_campaign_performance(self, campaign_id: UUID) -> CampaignPerformance:
        """Fetch a performance snapshot for a campaign."""
        return await self.performance_source.fetch_campaign_performance(campaign_id)
