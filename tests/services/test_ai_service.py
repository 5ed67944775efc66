"""
Tests for AIService - prompt construction and orchestration over a mocked backend.
"""

import base64

import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from adcreative.core.errors import InvalidImageData, NoGeneratedContent
from adcreative.core.models import (
    AdPlatform,
    CampaignPerformance,
    CreativeFormat,
    CreativeStyle,
    CreativeType,
    HookStyle,
    Product,
    ToneStyle,
    VisualStyle,
)
from adcreative.services.ai_service import (
    AIService,
    build_ad_copy_prompt,
    build_concept_prompt,
    build_media_prompt,
    decode_image_payload,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def _make_product(**overrides):
    defaults = {
        "title": "Trail Shoe",
        "description": "Lightweight trail runner",
        "price": 89.99,
        "type": "Footwear",
        "features": ["Breathable mesh", "Grippy sole"],
    }
    defaults.update(overrides)
    return Product(**defaults)


def _make_service(texts=None, image=None):
    backend = MagicMock()
    backend.generate_text = AsyncMock(return_value=texts if texts is not None else [])
    backend.generate_image = AsyncMock(return_value=image)
    performance_source = MagicMock()
    performance_source.fetch_campaign_performance = AsyncMock(
        return_value=CampaignPerformance(impressions=10)
    )
    return AIService(backend=backend, performance_source=performance_source), backend


class TestPrompts:

    def test_concept_prompt_uses_labels(self):
        style = CreativeStyle(
            visual_style=VisualStyle.BOLD,
            tone=ToneStyle.CASUAL,
            hook_style=HookStyle.URGENCY,
        )
        prompt = build_concept_prompt(_make_product(), style, [AdPlatform.FACEBOOK, AdPlatform.TIKTOK])

        assert "Product: Trail Shoe" in prompt
        assert "Price: $89.99" in prompt
        assert "Target Platforms: Facebook, TikTok" in prompt
        assert "- Visual Style: Bold & Dynamic" in prompt
        assert "- Tone: Casual" in prompt
        assert "- Hook Style: Urgency" in prompt

    def test_concept_prompt_omits_empty_custom_style(self):
        prompt = build_concept_prompt(_make_product(), CreativeStyle(), [AdPlatform.FACEBOOK])
        assert "Custom Style" not in prompt

    def test_concept_prompt_includes_custom_style(self):
        style = CreativeStyle(custom_style="Pastel colors")
        prompt = build_concept_prompt(_make_product(), style, [AdPlatform.FACEBOOK])
        assert "- Custom Style: Pastel colors" in prompt

    def test_media_prompt(self):
        prompt = build_media_prompt("Runner at dawn", _make_product(), CreativeStyle())
        assert "Runner at dawn" in prompt
        assert "- Name: Trail Shoe" in prompt
        assert "- Type: Footwear" in prompt
        assert "- Visual Style: Minimal & Clean" in prompt

    def test_ad_copy_prompt_lists_features(self):
        prompt = build_ad_copy_prompt(_make_product(), CreativeStyle(), AdPlatform.TIKTOK)
        assert "Platform: TikTok" in prompt
        assert "- Hook: Direct Benefit" in prompt
        assert "Breathable mesh\nGrippy sole" in prompt

    def test_ad_copy_prompt_without_features(self):
        prompt = build_ad_copy_prompt(_make_product(features=None), CreativeStyle(), AdPlatform.FACEBOOK)
        assert prompt.endswith("Key Features:\n")


class TestDecodeImagePayload:

    def test_valid_payload(self):
        assert decode_image_payload(base64.b64encode(PNG_BYTES).decode()) == PNG_BYTES

    def test_invalid_base64(self):
        with pytest.raises(InvalidImageData):
            decode_image_payload("not base64!!")

    def test_empty_payload(self):
        with pytest.raises(InvalidImageData):
            decode_image_payload("")


class TestGenerateConcepts:

    @pytest.mark.asyncio
    async def test_returns_backend_completions(self):
        service, backend = _make_service(texts=["A", "B", "C"])

        concepts = await service.generate_concepts(
            product=_make_product(),
            style=CreativeStyle(),
            platforms=[AdPlatform.FACEBOOK],
            variation_count=3,
        )

        assert concepts == ["A", "B", "C"]
        prompt, variations = backend.generate_text.call_args.args
        assert variations == 3
        assert "Trail Shoe" in prompt

    @pytest.mark.asyncio
    async def test_empty_result_raises(self):
        service, _ = _make_service(texts=[])
        with pytest.raises(NoGeneratedContent):
            await service.generate_concepts(
                product=_make_product(),
                style=CreativeStyle(),
                platforms=[AdPlatform.FACEBOOK],
                variation_count=2,
            )

    @pytest.mark.asyncio
    async def test_rejects_zero_variations(self):
        service, backend = _make_service(texts=["A"])
        with pytest.raises(ValueError):
            await service.generate_concepts(
                product=_make_product(),
                style=CreativeStyle(),
                platforms=[AdPlatform.FACEBOOK],
                variation_count=0,
            )
        backend.generate_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_backend_errors_propagate(self):
        service, backend = _make_service()
        backend.generate_text.side_effect = ConnectionError("down")
        with pytest.raises(ConnectionError):
            await service.generate_concepts(
                product=_make_product(),
                style=CreativeStyle(),
                platforms=[AdPlatform.TIKTOK],
                variation_count=1,
            )
        assert backend.generate_text.call_count == 1


class TestGenerateMedia:

    @pytest.mark.asyncio
    async def test_decodes_square_image(self):
        service, _ = _make_service(image=base64.b64encode(PNG_BYTES).decode())

        media = await service.generate_media("Concept", _make_product(), CreativeStyle())

        assert media.data == PNG_BYTES
        assert media.type == CreativeType.IMAGE
        assert media.format == CreativeFormat.SQUARE

    @pytest.mark.asyncio
    async def test_invalid_payload(self):
        service, _ = _make_service(image="%%%")
        with pytest.raises(InvalidImageData):
            await service.generate_media("Concept", _make_product(), CreativeStyle())


class TestGenerateAdCopy:

    @pytest.mark.asyncio
    async def test_parses_first_completion(self):
        service, backend = _make_service(texts=["Headline!\n\nBody text here\n\nBuy Now"])

        copy = await service.generate_ad_copy(_make_product(), CreativeStyle(), AdPlatform.FACEBOOK)

        assert copy.headline == "Headline!"
        assert copy.description == "Body text here"
        assert copy.call_to_action == "Buy Now"
        assert backend.generate_text.call_args.args[1] == 1

    @pytest.mark.asyncio
    async def test_blank_completion_gives_empty_copy(self):
        service, _ = _make_service(texts=["   "])
        copy = await service.generate_ad_copy(_make_product(), CreativeStyle(), AdPlatform.TIKTOK)
        assert copy.call_to_action == ""
        assert copy.keywords == []

    @pytest.mark.asyncio
    async def test_no_completion_raises(self):
        service, _ = _make_service(texts=[])
        with pytest.raises(NoGeneratedContent):
            await service.generate_ad_copy(_make_product(), CreativeStyle(), AdPlatform.TIKTOK)


class TestFetchCampaignPerformance:

    @pytest.mark.asyncio
    async def test_delegates_to_source(self):
        service, _ = _make_service()
        campaign_id = uuid4()

        performance = await service.fetch_campaign_performance(campaign_id)

        assert performance.impressions == 10
        service.performance_source.fetch_campaign_performance.assert_awaited_once_with(campaign_id)
