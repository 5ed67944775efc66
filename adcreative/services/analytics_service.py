"""
Campaign analytics sources.

No analytics backend is integrated; MockPerformanceSource returns plausible
random snapshots so the campaign views have something to show.
"""

import logging
import random
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..core.models import CampaignPerformance

logger = logging.getLogger(__name__)


class PerformanceSource(ABC):
    """Supplies performance snapshots by campaign id."""

    @abstractmethod
    async def fetch_campaign_performance(self, campaign_id: UUID) -> CampaignPerformance:
        ...


class MockPerformanceSource(PerformanceSource):
    """
    Random performance snapshots.

    Counts are drawn from fixed ranges and the ratio fields are derived from
    them, so ctr/cpc/roas stay consistent with the counts.

    Args:
        seed: Optional seed for reproducible snapshots
    """

    IMPRESSIONS_RANGE = (1000, 10000)
    CLICKS_RANGE = (50, 500)
    SPEND_RANGE = (100.0, 1000.0)
    CONVERSIONS_RANGE = (10, 100)
    REVENUE_RANGE = (200.0, 2000.0)

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    async def fetch_campaign_performance(self, campaign_id: UUID) -> CampaignPerformance:
        logger.debug(f"Generating mock performance for campaign {campaign_id}")
        rng = self._random
        return CampaignPerformance.from_counts(
            impressions=rng.randint(*self.IMPRESSIONS_RANGE),
            clicks=rng.randint(*self.CLICKS_RANGE),
            spend=round(rng.uniform(*self.SPEND_RANGE), 2),
            conversions=rng.randint(*self.CONVERSIONS_RANGE),
            revenue=round(rng.uniform(*self.REVENUE_RANGE), 2),
        )
