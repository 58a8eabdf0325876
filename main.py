#!/usr/bin/env python3
"""
Veo Relay - Main Entry Point

Starts the relay server or drives the upstream client directly.

Usage:
    # Start server mode (HTTP API)
    python main.py server

    # Start a generation and wait for the result
    python main.py generate --prompt "a cat surfing" --style documentary --wait

    # Poll an existing operation
    python main.py status models/veo-3.1-generate-preview/operations/abc123
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from core.config import get_config
from services.video_generation import (
    GenerationStatus,
    StylePreset,
    VeoClient,
    build_prompt,
    interpret_operation,
)

logger = logging.getLogger("veo_relay")


def configure_logging(level: str = "INFO"):
    """Configure root logging for the process."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )


def start_server(host: str, port: int, log_level: str = "INFO"):
    """Run the relay under uvicorn."""
    import uvicorn

    from services.relay import create_app

    app = create_app(get_config())
    logger.info(f"Veo relay running at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())


async def poll_status(client: VeoClient, operation_name: str) -> dict:
    """Poll an operation once and return the response payload."""
    operation = await client.poll_operation(operation_name)
    return interpret_operation(operation).to_response()


async def generate_video(
    prompt: str,
    style: str = "cinematico",
    aspect_ratio: str = "16:9",
    wait: bool = False,
    interval: float = 10.0,
) -> Optional[dict]:
    """
    Start a video generation and optionally wait for it to finish.

    Args:
        prompt: Video description
        style: Style preset key (unknown keys use the default)
        aspect_ratio: Output aspect ratio
        wait: Poll until the operation leaves the processing state
        interval: Seconds between polls
    """
    client = VeoClient(get_config())
    preset = StylePreset.resolve(style)

    operation_name = await client.start_generation(
        build_prompt(prompt, preset),
        aspect_ratio=aspect_ratio,
    )
    print(json.dumps({"operationName": operation_name, "status": "processing"}))

    if not wait:
        return None

    while True:
        await asyncio.sleep(interval)
        result = await poll_status(client, operation_name)
        if result["status"] != GenerationStatus.PROCESSING.value:
            return result
        logger.info(f"Still processing: {operation_name}")


def main():
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Veo Relay - video generation relay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Start HTTP server
    python main.py server --port 3001

    # Generate a video and wait for the URL
    python main.py generate --prompt "a cat surfing" --aspect-ratio 9:16 --wait

    # Check an operation
    python main.py status <operationName>
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Server command
    server_parser = subparsers.add_parser("server", help="Start HTTP server")
    server_parser.add_argument("--host", default=config.server.host, help="Host to bind")
    server_parser.add_argument("--port", type=int, default=config.server.port, help="Port to bind")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Start a video generation")
    gen_parser.add_argument("--prompt", "-p", required=True, help="Video description")
    gen_parser.add_argument(
        "--style",
        "-s",
        choices=[preset.value for preset in StylePreset],
        default=StylePreset.CINEMATICO.value,
        help="Style preset",
    )
    gen_parser.add_argument("--aspect-ratio", "-a", default="16:9", help="Aspect ratio")
    gen_parser.add_argument("--wait", "-w", action="store_true", help="Wait for the result")
    gen_parser.add_argument("--interval", type=float, default=10.0, help="Seconds between polls")

    # Status command
    status_parser = subparsers.add_parser("status", help="Check a generation operation")
    status_parser.add_argument("operation", help="Operation name returned by generate")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(config.log_level)

    if args.command == "server":
        start_server(host=args.host, port=args.port, log_level=config.log_level)
        return

    try:
        if args.command == "generate":
            result = asyncio.run(
                generate_video(
                    prompt=args.prompt,
                    style=args.style,
                    aspect_ratio=args.aspect_ratio,
                    wait=args.wait,
                    interval=args.interval,
                )
            )
        else:
            result = asyncio.run(poll_status(VeoClient(config), args.operation))
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)

    if result is not None:
        print(json.dumps(result))
        sys.exit(1 if result["status"] == GenerationStatus.ERROR.value else 0)


if __name__ == "__main__":
    main()
