"""
Veo Video Generation Client

Thin adapter over the Google GenAI SDK for long-running video generation:
- start_generation: submit one text-to-video job, return its operation name
- poll_operation: fetch the current state of a job by operation name
- interpret_operation: map an upstream operation to a local status

The SDK client is created lazily on first use and reused for the life of
the process. A missing credential only fails the calls that need it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from google import genai
from google.genai import types

from core.config import Config, get_config

logger = logging.getLogger(__name__)

RAW_DUMP_LIMIT = 300
RAW_LOG_LIMIT = 500


class VideoGenerationError(Exception):
    """Raised when video generation fails."""

    def __init__(self, message: str, error_code: str = None, provider: str = "veo"):
        self.error_code = error_code
        self.provider = provider
        super().__init__(message)


class ConfigurationError(VideoGenerationError):
    """Raised when the upstream credential is not configured."""

    def __init__(self, message: str):
        super().__init__(message, error_code="NOT_CONFIGURED")


class GenerationStatus(str, Enum):
    """Status of a video generation job as reported to callers."""
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


@dataclass
class OperationStatus:
    """Status derived from a single poll of an upstream operation."""
    status: GenerationStatus
    video_url: Optional[str] = None
    error: Optional[str] = None
    raw: Optional[str] = None

    def to_response(self) -> dict:
        if self.status == GenerationStatus.PROCESSING:
            return {"status": self.status.value}
        if self.status == GenerationStatus.ERROR:
            return {"status": self.status.value, "error": self.error}
        if self.video_url:
            return {"status": self.status.value, "videoUrl": self.video_url}
        return {"status": self.status.value, "videoUrl": None, "raw": self.raw}


def _first_video_uri(operation: Any) -> Optional[str]:
    """Return the URI of the first generated video, if any."""
    result = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(result, "generated_videos", None) if result else None
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) if video else None


def _error_message(error: Any) -> Optional[str]:
    if isinstance(error, dict):
        return error.get("message")
    return getattr(error, "message", None)


def dump_operation(operation: Any) -> str:
    """Serialize an upstream operation to compact JSON for diagnostics."""
    if hasattr(operation, "model_dump_json"):
        return operation.model_dump_json(exclude_none=True)
    return str(operation)


def interpret_operation(operation: Any) -> OperationStatus:
    """
    Map an upstream operation to a local status.

    Checked in order: still running, first video has a URI, operation
    error, and finally a done-without-video fallback carrying a truncated
    dump of the raw operation.
    """
    name = getattr(operation, "name", None)

    if not operation.done:
        return OperationStatus(status=GenerationStatus.PROCESSING)

    video_url = _first_video_uri(operation)
    if video_url:
        logger.info(f"Video ready: {name}")
        return OperationStatus(status=GenerationStatus.DONE, video_url=video_url)

    if operation.error:
        logger.error(f"Operation error for {name}: {operation.error}")
        return OperationStatus(
            status=GenerationStatus.ERROR,
            error=_error_message(operation.error) or "Video generation error",
        )

    raw = dump_operation(operation)
    logger.warning(f"Operation {name} done but no video. Raw: {raw[:RAW_LOG_LIMIT]}")
    return OperationStatus(
        status=GenerationStatus.DONE,
        video_url=None,
        raw=raw[:RAW_DUMP_LIMIT],
    )


class VeoClient:
    """
    Relay client for Veo text-to-video generation.

    Usage:
        client = VeoClient(config)

        operation_name = await client.start_generation(
            prompt="A golden retriever running through a field",
            aspect_ratio="16:9",
        )

        operation = await client.poll_operation(operation_name)
        status = interpret_operation(operation)
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()
        self._genai_client: Optional[genai.Client] = None

    @property
    def model(self) -> str:
        return self.config.api.video_model

    def _get_client(self) -> genai.Client:
        """Get or create the GenAI client."""
        if self._genai_client is None:
            api_key = self.config.api.gemini_api_key
            if not api_key:
                raise ConfigurationError("GEMINI_API_KEY not configured")
            self._genai_client = genai.Client(api_key=api_key)
        return self._genai_client

    async def start_generation(self, prompt: str, aspect_ratio: str = "16:9") -> str:
        """
        Submit a generation job for exactly one video.

        Args:
            prompt: Full prompt, style hint included
            aspect_ratio: Output aspect ratio (16:9, 9:16)

        Returns:
            The upstream operation name
        """
        client = self._get_client()

        operation = await client.aio.models.generate_videos(
            model=self.model,
            prompt=prompt,
            config=types.GenerateVideosConfig(
                aspect_ratio=aspect_ratio,
                number_of_videos=1,
            ),
        )

        if not operation.name:
            raise VideoGenerationError(
                "Upstream returned an operation without a name",
                error_code="MISSING_OPERATION_NAME",
            )

        logger.info(f"Operation started: {operation.name}")
        return operation.name

    async def poll_operation(self, operation_name: str) -> types.GenerateVideosOperation:
        """Fetch the current state of an operation by name."""
        client = self._get_client()
        return await client.aio.operations.get(
            types.GenerateVideosOperation(name=operation_name)
        )
