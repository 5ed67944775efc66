"""
CampaignStore - in-memory campaign collection.

Campaigns are kept in insertion order, keyed by id. Reads hand out deep
copies so a caller can only change stored state through update(); every
mutation notifies subscribers with the current campaign list.

The store is meant to be driven from a single event loop; it does no
locking and concurrent writers to the same id resolve as last-writer-wins.
"""

import logging
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Union
from uuid import UUID

from ..core.errors import NotFound
from ..core.models import (
    AdPlatform,
    Campaign,
    CampaignFilter,
    CampaignObjective,
    CampaignStatus,
    Creative,
    TargetAudience,
)
from .analytics_service import PerformanceSource

logger = logging.getLogger(__name__)

CampaignRef = Union[Campaign, UUID]
CampaignObserver = Callable[[List[Campaign]], None]


def _campaign_id(ref: CampaignRef) -> UUID:
    return ref.id if isinstance(ref, Campaign) else ref


class CampaignStore:
    """
    Owns the campaigns for one session.

    Args:
        performance_source: Where refreshed snapshots come from, normally
            the AIService so analytics go through the orchestration layer
    """

    def __init__(self, performance_source: PerformanceSource):
        self.performance_source = performance_source
        self._campaigns: Dict[UUID, Campaign] = {}
        self._observers: List[CampaignObserver] = []

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, callback: CampaignObserver) -> Callable[[], None]:
        """
        Register a callback run after every mutation.

        Returns:
            A function that removes the callback
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.list()
        for callback in list(self._observers):
            callback(snapshot)

    # =========================================================================
    # CRUD
    # =========================================================================

    def create(
        self,
        name: str,
        objective: CampaignObjective,
        platform: AdPlatform,
        budget: float,
        start_date: date,
        end_date: date,
        target_audience: Optional[TargetAudience] = None,
    ) -> Campaign:
        """
        Create a draft campaign with no creatives and append it.

        Raises:
            pydantic.ValidationError: If budget or dates are invalid
        """
        campaign = Campaign(
            name=name,
            objective=objective,
            platform=platform,
            budget=budget,
            start_date=start_date,
            end_date=end_date,
            status=CampaignStatus.DRAFT,
            creatives=[],
            target_audience=target_audience or TargetAudience(),
        )
        self._campaigns[campaign.id] = campaign.model_copy(deep=True)
        logger.info(f"Created campaign {campaign.id}: {name}")
        self._notify()
        return campaign

    def get(self, campaign_id: UUID) -> Campaign:
        """
        Raises:
            NotFound: If no campaign has this id
        """
        campaign = self._campaigns.get(campaign_id)
        if campaign is None:
            raise NotFound(campaign_id)
        return campaign.model_copy(deep=True)

    def list(self, status_filter: CampaignFilter = CampaignFilter.ALL) -> List[Campaign]:
        """Campaigns in insertion order, optionally filtered by status."""
        status_filter = CampaignFilter(status_filter)
        return [
            c.model_copy(deep=True)
            for c in self._campaigns.values()
            if status_filter.matches(c.status)
        ]

    def __len__(self) -> int:
        return len(self._campaigns)

    def __contains__(self, campaign_id: object) -> bool:
        return campaign_id in self._campaigns

    def update(self, campaign: Campaign) -> None:
        """
        Replace the stored campaign with the same id, keeping its position.

        The campaign is re-validated from its field values before it is stored.

        Raises:
            NotFound: If no campaign has this id
            pydantic.ValidationError: If the campaign breaks a model constraint
        """
        if campaign.id not in self._campaigns:
            raise NotFound(campaign.id)
        self._campaigns[campaign.id] = Campaign.model_validate(campaign.model_dump())
        logger.debug(f"Updated campaign {campaign.id}")
        self._notify()

    def delete(self, campaign: CampaignRef) -> None:
        """Remove a campaign; unknown ids are ignored."""
        campaign_id = _campaign_id(campaign)
        if self._campaigns.pop(campaign_id, None) is not None:
            logger.info(f"Deleted campaign {campaign_id}")
            self._notify()

    def update_status(self, campaign: CampaignRef, status: CampaignStatus) -> Campaign:
        """
        Change a campaign's status, leaving every other field as stored.

        Raises:
            NotFound: If no campaign has this id
        """
        updated = self.get(_campaign_id(campaign))
        updated.status = CampaignStatus(status)
        self.update(updated)
        return updated

    def attach_creative(self, campaign: CampaignRef, creative: Creative) -> Campaign:
        """
        Append a creative to a campaign.

        Raises:
            NotFound: If no campaign has this id
        """
        updated = self.get(_campaign_id(campaign))
        updated.creatives.append(creative.model_copy(deep=True))
        self.update(updated)
        logger.info(f"Attached creative {creative.id} to campaign {updated.id}")
        return updated

    async def refresh_performance(self, campaign: CampaignRef) -> Campaign:
        """
        Fetch a fresh performance snapshot and store it in place of the old one.

        Raises:
            NotFound: If the campaign is unknown before or after the fetch
        """
        campaign_id = _campaign_id(campaign)
        if campaign_id not in self._campaigns:
            raise NotFound(campaign_id)

        performance = await self.performance_source.fetch_campaign_performance(campaign_id)

        # The campaign may have been deleted while the fetch was in flight
        stored = self._campaigns.get(campaign_id)
        if stored is None:
            raise NotFound(campaign_id)

        stored.performance = performance
        self._notify()
        return stored.model_copy(deep=True)

    # =========================================================================
    # Sample data
    # =========================================================================

    def load_sample_campaigns(self, today: Optional[date] = None) -> List[Campaign]:
        """Seed the store with two example campaigns and return them."""
        today = today or date.today()
        samples = [
            Campaign(
                name="Summer Sale",
                objective=CampaignObjective.SALES,
                platform=AdPlatform.FACEBOOK,
                budget=1000.0,
                start_date=today,
                end_date=today + timedelta(days=30),
                status=CampaignStatus.ACTIVE,
            ),
            Campaign(
                name="Brand Awareness Q2",
                objective=CampaignObjective.AWARENESS,
                platform=AdPlatform.TIKTOK,
                budget=2000.0,
                start_date=today,
                end_date=today + timedelta(days=60),
                status=CampaignStatus.DRAFT,
            ),
        ]
        for campaign in samples:
            self._campaigns[campaign.id] = campaign
        logger.info(f"Loaded {len(samples)} sample campaigns")
        self._notify()
        return [c.model_copy(deep=True) for c in samples]
