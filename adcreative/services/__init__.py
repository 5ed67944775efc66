"""
Services layer for AdCreative.

Separates transport (GenerationBackend), analytics (PerformanceSource),
orchestration (AIService) and state (CampaignStore).
"""

from .ai_service import AIService
from .analytics_service import MockPerformanceSource, PerformanceSource
from .campaign_store import CampaignStore
from .copy_parser import extract_keywords, parse_ad_copy
from .generation_backend import GenerationBackend, OpenAIGenerationBackend
from .media_service import MediaService

__all__ = [
    'AIService',
    'CampaignStore',
    'GenerationBackend',
    'MediaService',
    'MockPerformanceSource',
    'OpenAIGenerationBackend',
    'PerformanceSource',
    'extract_keywords',
    'parse_ad_copy',
]
