"""
Video Generation Service

Provides access to Google Veo text-to-video generation:
- Job submission and operation polling through the GenAI SDK
- Fixed style presets appended to prompts
"""

from .client import (
    ConfigurationError,
    GenerationStatus,
    OperationStatus,
    VeoClient,
    VideoGenerationError,
    interpret_operation,
)
from .presets import DEFAULT_STYLE, StylePreset, build_prompt

__all__ = [
    "ConfigurationError",
    "GenerationStatus",
    "OperationStatus",
    "VeoClient",
    "VideoGenerationError",
    "interpret_operation",
    "DEFAULT_STYLE",
    "StylePreset",
    "build_prompt",
]
