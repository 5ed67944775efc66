"""
Logfire observability configuration for AdCreative.

Provides tracing for:
- Pydantic model validation
- OpenAI calls made by the generation backend

Usage:
    # At app startup (e.g., in the CLI entry point)
    from adcreative.core.observability import setup_logfire
    setup_logfire()

Environment Variables:
    LOGFIRE_TOKEN: Your Logfire write token (required for production)
    LOGFIRE_ENVIRONMENT: Environment name (development, staging, production)
"""

import logging
import os
from typing import Optional

import logfire

logger = logging.getLogger(__name__)

_logfire_configured = False


def setup_logfire(
    environment: Optional[str] = None,
    service_name: str = "adcreative"
) -> bool:
    """
    Configure Logfire for observability.

    Args:
        environment: Environment name (or LOGFIRE_ENVIRONMENT env var)
        service_name: Service name for tracing

    Returns:
        True if Logfire was configured, False if skipped (no token)
    """
    global _logfire_configured

    if _logfire_configured:
        logger.debug("Logfire already configured")
        return True

    token = os.environ.get("LOGFIRE_TOKEN")
    if not token:
        logger.info("LOGFIRE_TOKEN not set, skipping Logfire configuration")
        return False

    env = environment or os.environ.get("LOGFIRE_ENVIRONMENT", "development")

    logfire.configure(
        token=token,
        service_name=service_name,
        environment=env,
        send_to_logfire=True,
    )

    # Validation tracing for the domain models
    logfire.instrument_pydantic()

    # Prompt/response tracing for every AsyncOpenAI client
    logfire.instrument_openai()

    _logfire_configured = True
    logger.info(f"Logfire configured: environment={env}")
    return True
