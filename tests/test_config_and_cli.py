"""
Configuration and CLI Tests

Covers:
1. Environment parsing (port, origins, credential, model)
2. Config validation messages
3. main.py generate/status helpers

Run with:
    python -m pytest tests/test_config_and_cli.py -v
"""

import os
import sys
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.genai import types

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import DEFAULT_ALLOWED_ORIGINS, Config, get_config, reload_config

ENV_VARS = ["GEMINI_API_KEY", "VEO_MODEL", "PORT", "HOST", "ALLOWED_ORIGINS", "SERVICE_NAME", "LOG_LEVEL"]


class TestConfig:
    """Test environment-driven configuration."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ENV_VARS:
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        config = Config.from_env()

        assert config.server.port == 3001
        assert config.server.allowed_origins == DEFAULT_ALLOWED_ORIGINS
        assert config.server.service_name == "video-worker"
        assert config.api.gemini_api_key == ""
        assert config.api.video_model == "veo-3.1-generate-preview"
        assert config.log_level == "INFO"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,,")
        monkeypatch.setenv("VEO_MODEL", "veo-3.0-generate-001")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.api.gemini_api_key == "secret"
        assert config.api.video_model == "veo-3.0-generate-001"
        assert config.server.port == 8080
        assert config.server.allowed_origins == ["https://a.example", "https://b.example"]
        assert config.log_level == "DEBUG"

    def test_default_origins_are_copied(self):
        config = Config.from_env()
        config.server.allowed_origins.append("https://other.example")

        assert "https://other.example" not in DEFAULT_ALLOWED_ORIGINS

    def test_validate_reports_missing_credential(self):
        issues = Config.from_env().validate()

        assert any("GEMINI_API_KEY" in issue for issue in issues)

    def test_validate_clean(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "secret")

        assert Config.from_env().validate() == []

    def test_reload_config(self, monkeypatch):
        monkeypatch.setenv("PORT", "4000")
        assert reload_config().server.port == 4000
        assert get_config().server.port == 4000

        monkeypatch.setenv("PORT", "5000")
        assert get_config().server.port == 4000
        assert reload_config().server.port == 5000


class TestCli:
    """Test main.py helpers."""

    @pytest.mark.asyncio
    async def test_poll_status(self):
        import main

        client = MagicMock()
        client.poll_operation = AsyncMock(
            return_value=types.GenerateVideosOperation(name="op-1", done=False)
        )

        assert await main.poll_status(client, "op-1") == {"status": "processing"}

    @pytest.mark.asyncio
    async def test_generate_and_wait(self, capsys):
        import main

        client = MagicMock()
        client.start_generation = AsyncMock(return_value="op-1")
        client.poll_operation = AsyncMock(side_effect=[
            types.GenerateVideosOperation(name="op-1", done=False),
            types.GenerateVideosOperation(
                name="op-1",
                done=True,
                response=types.GenerateVideosResponse(
                    generated_videos=[types.GeneratedVideo(video=types.Video(uri="https://example.com/v.mp4"))],
                ),
            ),
        ])

        with patch.object(main, "VeoClient", return_value=client):
            result = await main.generate_video("a cat surfing", style="commercial", wait=True, interval=0)

        assert result == {"status": "done", "videoUrl": "https://example.com/v.mp4"}
        assert client.poll_operation.await_count == 2
        assert client.start_generation.await_args.args[0].endswith("vibrant colors")
        assert '"operationName": "op-1"' in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_generate_without_wait(self):
        import main

        client = MagicMock()
        client.start_generation = AsyncMock(return_value="op-1")
        client.poll_operation = AsyncMock()

        with patch.object(main, "VeoClient", return_value=client):
            result = await main.generate_video("a cat surfing")

        assert result is None
        client.poll_operation.assert_not_awaited()
