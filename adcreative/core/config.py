"""
Configuration management for AdCreative
"""

import logging
import os
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv

from .errors import MissingAPIKey

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Application configuration"""

    # OpenAI
    OPENAI_API_KEY: str = os.getenv('OPENAI_API_KEY', '')

    # Generation
    TEXT_MODEL: str = os.getenv('TEXT_MODEL', 'gpt-4o')
    IMAGE_MODEL: str = os.getenv('IMAGE_MODEL', 'dall-e-3')
    IMAGE_SIZE: str = os.getenv('IMAGE_SIZE', '1024x1024')
    MAX_TOKENS: int = int(os.getenv('MAX_TOKENS', '1000'))
    TEMPERATURE: float = float(os.getenv('TEMPERATURE', '0.7'))
    CONCEPT_VARIATIONS: int = int(os.getenv('CONCEPT_VARIATIONS', '3'))

    # Optional YAML file with extra settings (ADCREATIVE_CONFIG_FILE)
    CONFIG_FILE: str = os.getenv('ADCREATIVE_CONFIG_FILE', '')

    @classmethod
    def validate(cls) -> bool:
        """Validate required configuration"""
        required = {
            'OPENAI_API_KEY': cls.OPENAI_API_KEY,
        }

        missing = [k for k, v in required.items() if not v]

        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")

        return True

    @classmethod
    def get(cls, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get configuration value"""
        return getattr(cls, key, default)


class APIKeyType(str, Enum):
    """Services that need credentials or a base URL"""
    OPENAI = "openai"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"


DEFAULT_BASE_URLS: Dict[APIKeyType, str] = {
    APIKeyType.OPENAI: "https://api.openai.com/v1",
    APIKeyType.FACEBOOK: "https://graph.facebook.com",
    APIKeyType.TIKTOK: "https://business-api.tiktok.com",
}


class SecretStore(ABC):
    """Key-value store for per-service API keys."""

    @abstractmethod
    def get_api_key(self, service: APIKeyType) -> str:
        """Return the key for ``service`` or raise MissingAPIKey."""
        ...

    @abstractmethod
    def set_api_key(self, key: str, service: APIKeyType) -> None:
        ...


class EnvSecretStore(SecretStore):
    """
    Secret store backed by environment variables (``<SERVICE>_API_KEY``).

    Keys set at runtime are kept in-process and take precedence over the
    environment. Nothing is written back to disk.
    """

    def __init__(self):
        self._overrides: Dict[APIKeyType, str] = {}

    def get_api_key(self, service: APIKeyType) -> str:
        service = APIKeyType(service)
        if service in self._overrides:
            return self._overrides[service]

        value = os.getenv(f"{service.name}_API_KEY", '')
        if not value:
            raise MissingAPIKey(service.value)
        return value

    def set_api_key(self, key: str, service: APIKeyType) -> None:
        self._overrides[APIKeyType(service)] = key


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML settings file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed mapping, or an empty dict when the file does not exist

    Raises:
        ValueError: If the file does not contain a mapping at the top level
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.debug(f"Config file not found at {config_path}, using empty config")
        return {}

    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return raw_config


class ConfigService:
    """
    API keys, base URLs and free-form settings for the service layer.

    Args:
        secret_store: Where API keys live (defaults to EnvSecretStore)
        config_path: Optional YAML file for ``get_value`` lookups
    """

    def __init__(
        self,
        secret_store: Optional[SecretStore] = None,
        config_path: Optional[Union[str, Path]] = None,
    ):
        self.secret_store = secret_store or EnvSecretStore()
        path = config_path or Config.CONFIG_FILE
        self._values: Dict[str, Any] = load_config_file(path) if path else {}

    def get_api_key(self, service: APIKeyType) -> str:
        return self.secret_store.get_api_key(service)

    def set_api_key(self, key: str, service: APIKeyType) -> None:
        self.secret_store.set_api_key(key, service)

    def get_base_url(self, service: APIKeyType) -> str:
        """Base URL for ``service``; ``<SERVICE>_BASE_URL`` overrides the default."""
        service = APIKeyType(service)
        return os.getenv(f"{service.name}_BASE_URL") or DEFAULT_BASE_URLS[service]

    def get_value(self, key: str) -> Optional[str]:
        value = self._values.get(key)
        return value if isinstance(value, str) else None
