#!/usr/bin/env python3
"""
CLI for fetching a single Telegram file.

Usage:
    python -m tg_files FILE_ID [DESTINATION] [--url-only] [--verbose]

Options:
    --url-only  Print the download URL (or local path) and exit
    --verbose   Log every step

The bot token, API root and environment come from TELEGRAM_BOT_TOKEN,
TELEGRAM_API_ROOT and TELEGRAM_ENVIRONMENT (or a .env file).
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .api.telegram_api import TelegramApiClient
from .core.config import Settings, get_settings
from .core.services import build_transfer_engine
from .core.typed_config import FilesPluginOptions
from .domain.errors import DomainError
from .services.hydration import hydrate_files
from .utils.error_reporting import (
    classify_error,
    format_user_error_message,
    report_errors,
)
from .utils.logging import setup_logging


@report_errors("fetch_file")
async def fetch_file(
    settings: Settings,
    file_id: str,
    destination: Optional[str] = None,
    url_only: bool = False,
) -> str:
    """Call getFile through the hydrating client, then download or print the URL."""
    options = FilesPluginOptions(
        api_root=settings.telegram_api_root,
        environment=settings.telegram_environment,
    )
    engine = build_transfer_engine(settings)
    async with TelegramApiClient(
        settings.telegram_bot_token,
        api_root=settings.telegram_api_root,
        environment=settings.telegram_environment,
    ) as client:
        client.use(hydrate_files(settings.telegram_bot_token, options, engine=engine))
        file = await client.get_file(file_id)
        if url_only:
            return file.get_url()
        return await file.download(destination)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Download a Telegram file by file_id")
    parser.add_argument("file_id", help="file_id from an incoming message")
    parser.add_argument("destination", nargs="?", help="Where to store the file")
    parser.add_argument(
        "--url-only", action="store_true", help="Print the URL/path, don't download"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level, log_to_file=False)

    if not settings.telegram_bot_token:
        print("TELEGRAM_BOT_TOKEN is not set", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(
            fetch_file(settings, args.file_id, args.destination, args.url_only)
        )
    except DomainError as e:
        print(format_user_error_message(classify_error(e)), file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
