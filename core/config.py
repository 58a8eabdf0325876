"""
Configuration management for the Veo relay.

Centralizes all configuration including:
- Upstream API credential and model selection
- HTTP server binding and CORS origins
- Logging level
"""

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "https://marketing-studio-gold.vercel.app",
]


def _split_origins(raw: Optional[str]) -> list[str]:
    """Parse a comma-separated origin list, falling back to the defaults when unset."""
    if not raw:
        return list(DEFAULT_ALLOWED_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class APIConfig:
    """Upstream generative video API configuration."""

    gemini_api_key: str = field(default_factory=lambda: os.getenv("GEMINI_API_KEY", ""))
    video_model: str = field(
        default_factory=lambda: os.getenv("VEO_MODEL", "veo-3.1-generate-preview")
    )


@dataclass
class ServerConfig:
    """HTTP server configuration."""

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3001")))
    allowed_origins: list[str] = field(
        default_factory=lambda: _split_origins(os.getenv("ALLOWED_ORIGINS"))
    )
    service_name: str = field(default_factory=lambda: os.getenv("SERVICE_NAME", "video-worker"))


@dataclass
class Config:
    """Main configuration class."""

    api: APIConfig = field(default_factory=APIConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration and return list of issues."""
        issues = []

        if not self.api.gemini_api_key:
            issues.append("GEMINI_API_KEY not configured (video generation will fail until set)")

        if not self.server.allowed_origins:
            issues.append("ALLOWED_ORIGINS is set but contains no origins")

        return issues


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment."""
    global _config
    _config = Config.from_env()
    return _config
