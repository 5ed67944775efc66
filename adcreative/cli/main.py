"""
Main CLI entry point for AdCreative
"""

import logging

import click

from .. import __version__
from ..core.observability import setup_logfire
from .campaign import campaigns_command
from .creative import ad_copy_command, concepts_command, wizard_command


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """
    AdCreative - AI-assisted ad creative generation

    Generate concepts, images and ad copy for Facebook and TikTok campaigns.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    setup_logfire()


# Register commands
cli.add_command(concepts_command)
cli.add_command(ad_copy_command)
cli.add_command(wizard_command)
cli.add_command(campaigns_command)


if __name__ == '__main__':
    cli()
