"""
Campaign commands for the AdCreative CLI
"""

import asyncio
from typing import Optional

import click

from ..core.models import CampaignFilter
from ..services.analytics_service import MockPerformanceSource
from ..services.campaign_store import CampaignStore


async def _refresh_all(store: CampaignStore) -> None:
    for campaign in store.list():
        await store.refresh_performance(campaign)


@click.command('campaigns')
@click.option('--status', type=click.Choice([f.value for f in CampaignFilter]),
              default=CampaignFilter.ALL.value, show_default=True, help='Only show campaigns with this status')
@click.option('--with-performance', is_flag=True, help='Attach a mock performance snapshot')
@click.option('--seed', type=int, default=None, help='Seed for reproducible mock performance')
def campaigns_command(status: str, with_performance: bool, seed: Optional[int]):
    """List the sample campaigns."""
    store = CampaignStore(performance_source=MockPerformanceSource(seed=seed))
    store.load_sample_campaigns()

    if with_performance:
        asyncio.run(_refresh_all(store))

    campaigns = store.list(CampaignFilter(status))
    if not campaigns:
        click.echo("No campaigns found")
        return

    for campaign in campaigns:
        click.echo(
            f"{str(campaign.id)[:8]}  {campaign.name:<24} {campaign.status.label:<10} "
            f"{campaign.platform.label:<9} {campaign.objective.label:<20} ${campaign.budget:,.2f}"
        )
        if campaign.performance:
            perf = campaign.performance
            click.echo(
                f"          impressions={perf.impressions:,} clicks={perf.clicks:,} "
                f"ctr={perf.ctr:.2f}% spend=${perf.spend:,.2f} roas={perf.roas:.2f}"
            )
