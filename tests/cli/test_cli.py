"""
Tests for the adcreative CLI. The OpenAI backend is replaced with mocks.
"""

import base64
import json
from io import BytesIO

import pytest
from click.testing import CliRunner
from PIL import Image
from unittest.mock import AsyncMock, MagicMock, patch

from adcreative.cli.main import cli

PRODUCT_ARGS = [
    '--title', 'Trail Shoe',
    '--description', 'Lightweight trail runner',
    '--price', '89.99',
    '--feature', 'Breathable mesh',
]


def _png_b64():
    buffer = BytesIO()
    Image.new("RGB", (4, 4)).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode()


def _fake_backend():
    async def generate_text(prompt, variations):
        if prompt.startswith("Write advertising copy"):
            return ["Run Further\n\nFeather-light comfort\n\nShop Now"]
        return [f"Concept {i}" for i in range(1, variations + 1)]

    backend = MagicMock()
    backend.generate_text = AsyncMock(side_effect=generate_text)
    backend.generate_image = AsyncMock(return_value=_png_b64())
    return backend


@pytest.fixture(autouse=True)
def no_logfire(monkeypatch):
    monkeypatch.delenv("LOGFIRE_TOKEN", raising=False)


class TestHelp:

    def test_group_help(self):
        result = CliRunner().invoke(cli, ['--help'])
        assert result.exit_code == 0
        for command in ('concepts', 'ad-copy', 'wizard', 'campaigns'):
            assert command in result.output

    def test_concepts_help(self):
        result = CliRunner().invoke(cli, ['concepts', '--help'])
        assert result.exit_code == 0
        assert '--platform' in result.output
        assert '--variations' in result.output


class TestConceptsCommand:

    def test_prints_concepts(self):
        with patch("adcreative.cli.creative.OpenAIGenerationBackend", return_value=_fake_backend()):
            result = CliRunner().invoke(cli, [
                'concepts', *PRODUCT_ARGS, '--platform', 'facebook', '--variations', '2',
            ])

        assert result.exit_code == 0
        assert 'Concept 1' in result.output
        assert 'Concept 2' in result.output
        assert 'Concept 3' not in result.output

    def test_backend_error_exits_nonzero(self):
        backend = _fake_backend()
        backend.generate_text.side_effect = ConnectionError("network down")
        with patch("adcreative.cli.creative.OpenAIGenerationBackend", return_value=backend):
            result = CliRunner().invoke(cli, ['concepts', *PRODUCT_ARGS, '--platform', 'tiktok'])

        assert result.exit_code == 1
        assert 'network down' in result.output

    def test_rejects_unknown_platform(self):
        result = CliRunner().invoke(cli, ['concepts', *PRODUCT_ARGS, '--platform', 'myspace'])
        assert result.exit_code != 0


class TestAdCopyCommand:

    def test_prints_json(self):
        with patch("adcreative.cli.creative.OpenAIGenerationBackend", return_value=_fake_backend()):
            result = CliRunner().invoke(cli, ['ad-copy', *PRODUCT_ARGS, '--platform', 'tiktok'])

        assert result.exit_code == 0
        payload = json.loads(result.output[result.output.index("{\n"):])
        assert payload['headline'] == 'Run Further'
        assert payload['description'] == 'Feather-light comfort'
        assert payload['call_to_action'] == 'Shop Now'
        assert payload['keywords'] == ['Further', 'Feather-light', 'comfort']


class TestWizardCommand:

    def test_runs_all_steps(self, tmp_path):
        output_image = tmp_path / "ad.png"
        with patch("adcreative.cli.creative.OpenAIGenerationBackend", return_value=_fake_backend()):
            result = CliRunner().invoke(cli, [
                'wizard', *PRODUCT_ARGS,
                '--platform', 'facebook',
                '--concept-index', '1',
                '--campaign-name', 'Spring Launch',
                '--budget', '500',
                '--output-image', str(output_image),
            ])

        assert result.exit_code == 0, result.output
        assert output_image.read_bytes() == base64.b64decode(_png_b64())

        campaign = json.loads(result.output[result.output.index("{\n"):])
        assert campaign['name'] == 'Spring Launch'
        assert campaign['status'] == 'draft'
        assert campaign['platform'] == 'facebook'
        assert len(campaign['creatives']) == 1
        assert campaign['creatives'][0]['headline'] == 'Run Further'
        assert campaign['creatives'][0]['media_url'] == ''

    def test_repeated_platform_is_selected_once(self, tmp_path):
        with patch("adcreative.cli.creative.OpenAIGenerationBackend", return_value=_fake_backend()):
            result = CliRunner().invoke(cli, [
                'wizard', *PRODUCT_ARGS,
                '--platform', 'tiktok',
                '--platform', 'tiktok',
                '--campaign-name', 'Spring Launch',
                '--budget', '500',
                '--output-image', str(tmp_path / "ad.png"),
            ])

        assert result.exit_code == 0, result.output
        campaign = json.loads(result.output[result.output.index("{\n"):])
        assert campaign['platform'] == 'tiktok'
        assert len(campaign['creatives']) == 1

    def test_concept_index_out_of_range(self, tmp_path):
        with patch("adcreative.cli.creative.OpenAIGenerationBackend", return_value=_fake_backend()):
            result = CliRunner().invoke(cli, [
                'wizard', *PRODUCT_ARGS,
                '--platform', 'tiktok',
                '--concept-index', '10',
                '--campaign-name', 'Spring Launch',
                '--budget', '500',
                '--output-image', str(tmp_path / "ad.png"),
            ])

        assert result.exit_code == 1
        assert not (tmp_path / "ad.png").exists()


class TestCampaignsCommand:

    def test_lists_samples(self):
        result = CliRunner().invoke(cli, ['campaigns'])
        assert result.exit_code == 0
        assert 'Summer Sale' in result.output
        assert 'Brand Awareness Q2' in result.output

    def test_status_filter(self):
        result = CliRunner().invoke(cli, ['campaigns', '--status', 'active'])
        assert result.exit_code == 0
        assert 'Summer Sale' in result.output
        assert 'Brand Awareness Q2' not in result.output

    def test_no_matches(self):
        result = CliRunner().invoke(cli, ['campaigns', '--status', 'paused'])
        assert result.exit_code == 0
        assert 'No campaigns found' in result.output

    def test_with_performance(self):
        result = CliRunner().invoke(cli, ['campaigns', '--with-performance', '--seed', '3'])
        assert result.exit_code == 0
        assert result.output.count('impressions=') == 2
