#!/usr/bin/env python3
"""
Readiness probe for the AppBot API.

Exit codes:
- 0: AppBot API reachable (GET /health returned 2xx)
- 1: unreachable, or startup failed (e.g. APPBOT_API_KEY missing)

Run with: python -m mcp_appbot.health  (or the appbot-mcp-health script)
"""

import asyncio
import sys

from dotenv import load_dotenv

from appbot_client.client import AppBotClient
from appbot_client.config import Settings, load_settings
from mcp_appbot.logging_config import get_logger, setup_async_logging, shutdown_async_logging

logger = get_logger(__name__)

EXIT_HEALTHY = 0
EXIT_UNHEALTHY = 1


async def check(settings: Settings) -> bool:
    async with AppBotClient(settings) as client:
        return await client.health_check()


def main() -> int:
    """Run the health check and return the process exit code"""
    logger.info("Starting AppBot MCP Server health check...")
    try:
        settings = load_settings()
        setup_async_logging(settings.logging_level)
        healthy = asyncio.run(check(settings))
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return EXIT_UNHEALTHY

    if healthy:
        logger.info(f"AppBot API connection is healthy ({settings.api_url})")
        return EXIT_HEALTHY

    logger.error(f"AppBot API connection failed ({settings.api_url})")
    return EXIT_UNHEALTHY


def run() -> None:
    """Console-script entry point"""
    load_dotenv()
    setup_async_logging()
    try:
        code = main()
    finally:
        shutdown_async_logging()
    sys.exit(code)


if __name__ == "__main__":
    run()
