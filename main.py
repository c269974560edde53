#!/usr/bin/env python3
"""Log Enricher - Entry point"""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from log_enricher import (
    VERSION,
    IpApiTransport,
    LogEnricher,
    LogEnricherError,
    OutputEncoding,
    Settings,
    print_summary,
)

# stdout is reserved for --stdout output
console = Console(stderr=True)

FORMAT_CHOICES = {
    'splunk': OutputEncoding.KEYVALUE,
    'json': OutputEncoding.JSON,
}


def fail(error: Exception):
    console.print(f"[red]Error:[/] {escape(str(error))}")
    sys.exit(1)


async def enrich(logfile: str, encoding: OutputEncoding, settings: Settings, progress):
    async with IpApiTransport(settings.api_url, timeout=settings.timeout) as transport:
        enricher = LogEnricher(transport, progress=progress)
        return await enricher.enrich_file(logfile, encoding)


def main():
    parser = argparse.ArgumentParser(
        description="Log Enricher - SSH/HTTP log parsing with IP geolocation",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("logfile", help="Log file to enrich")
    parser.add_argument("-f", "--format", choices=list(FORMAT_CHOICES), default='splunk',
                        help="Output format: Splunk key-value pairs or JSON lines")
    parser.add_argument("-o", "--output", help="Output file (default: enriched_logs.txt/.json)")
    parser.add_argument("--stdout", action="store_true", help="Print output instead of saving it")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"LogEnricher v{VERSION}")

    args = parser.parse_args()
    try:
        settings = Settings.from_env()
    except LogEnricherError as e:
        fail(e)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        with console.status("Starting...") as status:
            result = asyncio.run(enrich(args.logfile, FORMAT_CHOICES[args.format], settings, status.update))
    except (FileNotFoundError, LogEnricherError) as e:
        fail(e)

    if args.stdout:
        sys.stdout.write(result.content.decode('utf-8') + '\n')
        return

    output = args.output or result.filename
    try:
        with open(output, 'wb') as f:
            f.write(result.content)
    except OSError as e:
        fail(e)
    print_summary(result, console, saved_to=output)


if __name__ == "__main__":
    main()
