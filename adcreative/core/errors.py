"""
Error types raised across AdCreative.

Every fallible operation surfaces one of these (or an unmodified transport
error from the generation backend) to its direct caller.
"""

from typing import Any


class AdCreativeError(Exception):
    """Base class for all AdCreative errors."""


class MissingRequiredData(AdCreativeError):
    """Raised when a wizard operation runs before its inputs are set."""

    def __init__(self, message: str = "Missing required data for creative generation"):
        super().__init__(message)


class NotFound(AdCreativeError):
    """Raised when a store operation targets an unknown campaign id."""

    def __init__(self, entity_id: Any, entity: str = "Campaign"):
        self.entity_id = entity_id
        self.entity = entity
        super().__init__(f"{entity} not found: {entity_id}")


class NoGeneratedContent(AdCreativeError):
    """Raised when the generation backend returns an empty result set."""

    def __init__(self, message: str = "No content was generated"):
        super().__init__(message)


class InvalidResponse(AdCreativeError):
    """Raised when a backend payload cannot be interpreted."""

    def __init__(self, message: str = "Invalid response from AI service"):
        super().__init__(message)


class InvalidImageData(InvalidResponse):
    """Raised when an image payload is missing or is not valid base64."""

    def __init__(self, message: str = "Invalid image data received"):
        super().__init__(message)


class InvalidMediaData(AdCreativeError):
    """Raised when media bytes cannot be decoded for processing."""

    def __init__(self, message: str = "Invalid media data"):
        super().__init__(message)


class MissingAPIKey(AdCreativeError):
    """Raised when no API key is configured for a service."""

    def __init__(self, service: str):
        self.service = service
        super().__init__(f"No API key configured for {service}")
