"""
Tests for OpenAIGenerationBackend - request shape and response mapping.

The AsyncOpenAI client is mocked; no network calls are made.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from adcreative.core.config import APIKeyType, ConfigService, EnvSecretStore
from adcreative.core.errors import InvalidImageData, MissingAPIKey
from adcreative.services.generation_backend import OpenAIGenerationBackend


def _make_client(choices=None, image_data=None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=MagicMock(choices=choices or [])
    )
    client.images.generate = AsyncMock(
        return_value=MagicMock(data=image_data if image_data is not None else [])
    )
    return client


def _choice(content):
    choice = MagicMock()
    choice.message.content = content
    return choice


class TestGenerateText:

    @pytest.mark.asyncio
    async def test_requests_n_choices(self):
        client = _make_client(choices=[_choice("one"), _choice("two")])
        backend = OpenAIGenerationBackend(client=client, text_model="gpt-test", max_tokens=50, temperature=0.2)

        result = await backend.generate_text("Prompt", 2)

        assert result == ["one", "two"]
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["n"] == 2
        assert kwargs["max_tokens"] == 50
        assert kwargs["temperature"] == 0.2
        assert kwargs["messages"] == [{"role": "user", "content": "Prompt"}]

    @pytest.mark.asyncio
    async def test_none_content_becomes_empty_string(self):
        client = _make_client(choices=[_choice(None)])
        backend = OpenAIGenerationBackend(client=client)

        assert await backend.generate_text("Prompt", 1) == [""]


class TestGenerateImage:

    @pytest.mark.asyncio
    async def test_returns_b64_payload(self):
        client = _make_client(image_data=[MagicMock(b64_json="aGVsbG8=")])
        backend = OpenAIGenerationBackend(client=client, image_model="img-test", image_size="512x512")

        assert await backend.generate_image("Prompt") == "aGVsbG8="
        kwargs = client.images.generate.call_args.kwargs
        assert kwargs["model"] == "img-test"
        assert kwargs["size"] == "512x512"
        assert kwargs["n"] == 1
        assert kwargs["response_format"] == "b64_json"

    @pytest.mark.asyncio
    async def test_missing_payload_raises(self):
        client = _make_client(image_data=[MagicMock(b64_json=None)])
        backend = OpenAIGenerationBackend(client=client)

        with pytest.raises(InvalidImageData):
            await backend.generate_image("Prompt")

    @pytest.mark.asyncio
    async def test_empty_data_raises(self):
        backend = OpenAIGenerationBackend(client=_make_client(image_data=[]))

        with pytest.raises(InvalidImageData):
            await backend.generate_image("Prompt")


class TestClientConstruction:

    def test_builds_client_from_config_service(self, monkeypatch):
        monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
        store = EnvSecretStore()
        store.set_api_key("sk-test", APIKeyType.OPENAI)

        with patch("adcreative.services.generation_backend.AsyncOpenAI") as mock_openai:
            OpenAIGenerationBackend(config_service=ConfigService(secret_store=store))

        mock_openai.assert_called_once_with(
            api_key="sk-test",
            base_url="https://api.openai.com/v1",
        )

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(MissingAPIKey):
            OpenAIGenerationBackend(config_service=ConfigService(secret_store=EnvSecretStore()))
