"""
Creative generation commands for the AdCreative CLI
"""

import asyncio
import json
from datetime import date, timedelta
from pathlib import Path
from typing import List, Tuple

import click

from ..core.models import (
    AdPlatform,
    CampaignObjective,
    CreativeStyle,
    HookStyle,
    Product,
    ToneStyle,
    VisualStyle,
)
from ..pipelines.creative_wizard import CreativeWizard
from ..services.ai_service import AIService
from ..services.analytics_service import MockPerformanceSource
from ..services.campaign_store import CampaignStore
from ..services.generation_backend import OpenAIGenerationBackend
from ..services.media_service import MediaService


def _choices(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls])


def product_options(func):
    """Options describing the product being advertised."""
    options = [
        click.option('--title', required=True, help='Product title'),
        click.option('--description', required=True, help='Product description'),
        click.option('--price', required=True, type=float, help='Product price'),
        click.option('--product-type', default='General', show_default=True, help='Product type tag'),
        click.option('--feature', 'features', multiple=True, help='Key feature (repeatable)'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def style_options(func):
    """Options describing the creative style."""
    options = [
        click.option('--visual-style', type=_choices(VisualStyle), default=VisualStyle.MINIMAL.value, show_default=True),
        click.option('--tone', type=_choices(ToneStyle), default=ToneStyle.PROFESSIONAL.value, show_default=True),
        click.option('--hook', type=_choices(HookStyle), default=HookStyle.BENEFIT.value, show_default=True),
        click.option('--custom-style', default='', help='Free-text style instructions'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_product(title: str, description: str, price: float, product_type: str, features: Tuple[str, ...]) -> Product:
    return Product(
        title=title,
        description=description,
        price=price,
        type=product_type,
        features=list(features) or None,
    )


def _build_style(visual_style: str, tone: str, hook: str, custom_style: str) -> CreativeStyle:
    return CreativeStyle(
        visual_style=VisualStyle(visual_style),
        tone=ToneStyle(tone),
        hook_style=HookStyle(hook),
        custom_style=custom_style,
    )


def _build_ai_service() -> AIService:
    return AIService(
        backend=OpenAIGenerationBackend(),
        performance_source=MockPerformanceSource(),
    )


@click.command('concepts')
@product_options
@style_options
@click.option('--platform', 'platforms', multiple=True, required=True, type=_choices(AdPlatform),
              help='Target platform (repeatable)')
@click.option('--variations', default=3, show_default=True, type=int, help='Number of concepts')
def concepts_command(title, description, price, product_type, features,
                     visual_style, tone, hook, custom_style, platforms, variations):
    """
    Generate creative concepts for a product.

    Examples:
        adcreative concepts --title "Trail Shoe" --description "Light runner" --price 89 --platform facebook
    """
    try:
        product = _build_product(title, description, price, product_type, features)
        style = _build_style(visual_style, tone, hook, custom_style)
        service = _build_ai_service()

        concepts = asyncio.run(service.generate_concepts(
            product=product,
            style=style,
            platforms=[AdPlatform(p) for p in platforms],
            variation_count=variations,
        ))
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)

    for i, concept in enumerate(concepts, 1):
        click.echo(f"\n💡 Concept {i}")
        click.echo(concept.strip())


@click.command('ad-copy')
@product_options
@style_options
@click.option('--platform', required=True, type=_choices(AdPlatform), help='Target platform')
def ad_copy_command(title, description, price, product_type, features,
                    visual_style, tone, hook, custom_style, platform):
    """Generate structured ad copy (printed as JSON)."""
    try:
        product = _build_product(title, description, price, product_type, features)
        style = _build_style(visual_style, tone, hook, custom_style)
        service = _build_ai_service()

        ad_copy = asyncio.run(service.generate_ad_copy(
            product=product,
            style=style,
            platform=AdPlatform(platform),
        ))
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(ad_copy.model_dump_json(indent=2))


async def _run_wizard(
    wizard: CreativeWizard,
    store: CampaignStore,
    product: Product,
    style: CreativeStyle,
    platforms: List[AdPlatform],
    concept_index: int,
    campaign_name: str,
    objective: CampaignObjective,
    budget: float,
    days: int,
):
    """Walk every wizard step and attach the resulting creative to a new campaign."""
    wizard.set_product(product)
    wizard.advance()

    wizard.set_style(style)
    # toggle_platform flips membership; collapse repeated --platform values
    for platform in dict.fromkeys(platforms):
        wizard.toggle_platform(platform)
    wizard.advance()

    click.echo("⏳ Generating concepts...")
    concepts = await wizard.generate_concepts()
    if concept_index >= len(concepts):
        raise click.BadParameter(
            f"only {len(concepts)} concept(s) generated", param_hint='--concept-index'
        )
    wizard.select_concept(concepts[concept_index])
    wizard.advance()

    click.echo("⏳ Generating media...")
    await wizard.generate_media()
    wizard.advance()

    click.echo("⏳ Generating ad copy...")
    await wizard.generate_ad_copy()
    creative = wizard.create_creative()

    start = date.today()
    campaign = store.create(
        name=campaign_name,
        objective=objective,
        platform=platforms[0],
        budget=budget,
        start_date=start,
        end_date=start + timedelta(days=days),
    )
    return store.attach_creative(campaign, creative)


@click.command('wizard')
@product_options
@style_options
@click.option('--platform', 'platforms', multiple=True, required=True, type=_choices(AdPlatform),
              help='Target platform (repeatable); the first one is used for copy and the campaign')
@click.option('--concept-index', default=0, show_default=True, type=int, help='Which generated concept to use')
@click.option('--campaign-name', required=True, help='Name of the campaign to create')
@click.option('--objective', type=_choices(CampaignObjective), default=CampaignObjective.SALES.value, show_default=True)
@click.option('--budget', required=True, type=float, help='Campaign budget')
@click.option('--days', default=30, show_default=True, type=int, help='Campaign length in days')
@click.option('--output-image', required=True, type=click.Path(dir_okay=False), help='Where to write the generated image')
def wizard_command(title, description, price, product_type, features,
                   visual_style, tone, hook, custom_style, platforms, concept_index,
                   campaign_name, objective, budget, days, output_image):
    """
    Run the full creative wizard and attach the creative to a new campaign.

    Examples:
        adcreative wizard --title "Trail Shoe" --description "Light runner" --price 89 \\
            --platform tiktok --campaign-name "Spring Launch" --budget 500 --output-image ad.png
    """
    try:
        product = _build_product(title, description, price, product_type, features)
        style = _build_style(visual_style, tone, hook, custom_style)
        service = _build_ai_service()
        wizard = CreativeWizard(ai_service=service, media_service=MediaService())
        store = CampaignStore(performance_source=service)

        campaign = asyncio.run(_run_wizard(
            wizard=wizard,
            store=store,
            product=product,
            style=style,
            platforms=[AdPlatform(p) for p in platforms],
            concept_index=concept_index,
            campaign_name=campaign_name,
            objective=CampaignObjective(objective),
            budget=budget,
            days=days,
        ))

        Path(output_image).write_bytes(wizard.state.generated_media.data)
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"\n🖼  Image written to: {output_image}")
    click.echo(json.dumps(campaign.model_dump(mode='json'), indent=2))
