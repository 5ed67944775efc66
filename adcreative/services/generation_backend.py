"""
Generation backends - text completions and image generation.

GenerationBackend is the seam the AI service depends on. The production
implementation talks to OpenAI through AsyncOpenAI; each call is a single
request/response round-trip and transport errors propagate unchanged.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from openai import AsyncOpenAI

from ..core.config import APIKeyType, Config, ConfigService
from ..core.errors import InvalidImageData

logger = logging.getLogger(__name__)


class GenerationBackend(ABC):
    """Text and image generation API."""

    @abstractmethod
    async def generate_text(self, prompt: str, variations: int) -> List[str]:
        """
        Request ``variations`` independent completions for ``prompt``.

        Returns:
            Completion strings in the order the backend returned them
        """
        ...

    @abstractmethod
    async def generate_image(self, prompt: str) -> str:
        """
        Request a single image for ``prompt``.

        Returns:
            Base64-encoded image payload
        """
        ...


class OpenAIGenerationBackend(GenerationBackend):
    """
    GenerationBackend backed by the OpenAI API.

    Text uses chat completions with ``n`` choices; images use the images
    endpoint with ``response_format="b64_json"``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config_service: Optional[ConfigService] = None,
        client: Optional[AsyncOpenAI] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
        image_size: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        """
        Initialize the backend.

        Args:
            api_key: OpenAI API key (if None, looked up through config_service)
            config_service: Source for the API key and base URL
            client: Pre-built AsyncOpenAI client (skips key lookup)
            text_model: Chat model (default: Config.TEXT_MODEL)
            image_model: Image model (default: Config.IMAGE_MODEL)
            image_size: Image size (default: Config.IMAGE_SIZE)
            max_tokens: Completion token cap (default: Config.MAX_TOKENS)
            temperature: Sampling temperature (default: Config.TEMPERATURE)

        Raises:
            MissingAPIKey: If no client is given and no key is configured
        """
        self.text_model = text_model or Config.TEXT_MODEL
        self.image_model = image_model or Config.IMAGE_MODEL
        self.image_size = image_size or Config.IMAGE_SIZE
        self.max_tokens = max_tokens if max_tokens is not None else Config.MAX_TOKENS
        self.temperature = temperature if temperature is not None else Config.TEMPERATURE

        if client is None:
            config_service = config_service or ConfigService()
            key = api_key or config_service.get_api_key(APIKeyType.OPENAI)
            client = AsyncOpenAI(
                api_key=key,
                base_url=config_service.get_base_url(APIKeyType.OPENAI),
            )
        self.client = client

        logger.info(f"OpenAIGenerationBackend initialized: text={self.text_model}, image={self.image_model}")

    async def generate_text(self, prompt: str, variations: int) -> List[str]:
        logger.debug(f"Requesting {variations} completion(s) from {self.text_model}")
        response = await self.client.chat.completions.create(
            model=self.text_model,
            messages=[{"role": "user", "content": prompt}],
            n=variations,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        return [choice.message.content or "" for choice in response.choices]

    async def generate_image(self, prompt: str) -> str:
        logger.debug(f"Requesting image from {self.image_model} ({self.image_size})")
        response = await self.client.images.generate(
            model=self.image_model,
            prompt=prompt,
            n=1,
            size=self.image_size,
            response_format="b64_json",
        )
        if not response.data or not response.data[0].b64_json:
            raise InvalidImageData()
        return response.data[0].b64_json
