"""Log Enricher - Parse, enrich and merge pipeline"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .enrichment import EnrichmentCache, EnrichmentClient
from .errors import InputEmptyError, LogEnricherError, PipelineError, UnknownLogTypeError
from .models import EnrichmentResult, LogType, OutputEncoding, PipelineResult
from .output import merge, render, suggested_filename
from .parsers import EXTRACTORS, collect_keys, detect_log_type

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    lines = []
    for line in text.split('\n'):
        line = line.rstrip('\r')
        if line.strip():
            lines.append(line)
    return lines


class LogEnricher:
    """
    Main log enrichment pipeline.

    ``transport`` is anything with ``async def fetch(ip) -> dict``. When no
    ``cache`` is given, every run starts from an empty one; pass a shared
    EnrichmentCache to keep lookups across runs.
    """

    def __init__(self, transport, cache: Optional[EnrichmentCache] = None,
                 progress: Optional[Callable[[str], None]] = None):
        self.transport = transport
        self.cache = cache
        self.progress = progress

    def _report(self, message: str):
        logger.debug(message)
        if self.progress:
            self.progress(message)

    async def enrich_file(self, filepath: str, encoding: OutputEncoding) -> PipelineResult:
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Log file not found: {filepath}")

        self._report(f"1/3: Reading {path.name}...")
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise PipelineError(str(e)) from e
        return await self.run(raw, encoding)

    async def run(self, raw: Union[str, bytes], encoding: OutputEncoding) -> PipelineResult:
        try:
            return await self._run(raw, encoding)
        except LogEnricherError:
            raise
        except Exception as e:
            logger.debug("Enrichment run failed", exc_info=True)
            raise PipelineError(str(e)) from e

    async def _run(self, raw: Union[str, bytes], encoding: OutputEncoding) -> PipelineResult:
        text = raw.decode('utf-8-sig', errors='ignore') if isinstance(raw, bytes) else raw
        lines = split_lines(text)
        if not lines:
            raise InputEmptyError()

        log_type = detect_log_type(lines[0])
        if log_type is LogType.UNKNOWN:
            raise UnknownLogTypeError(lines[0])
        logger.debug("Detected %s log with %d lines", log_type.value, len(lines))

        self._report(f"2/3: Parsing {len(lines)} {log_type.value.upper()} lines...")
        extract = EXTRACTORS[log_type]
        events: List[Dict[str, str]] = []
        for line in lines:
            parsed = extract(line)
            if parsed:
                events.append(parsed)

        cache = self.cache if self.cache is not None else EnrichmentCache()
        keys = collect_keys(events)
        self._report(f"Starting enrichment for {len(keys)} unique IP(s)...")
        await self._enrich(EnrichmentClient(self.transport, cache), keys)
        self._report("Enrichment completed. Merging data...")

        self._report("3/3: Formatting output...")
        content = render((merge(event, cache) for event in events), encoding)

        return PipelineResult(
            content=content,
            log_type=log_type,
            encoding=encoding,
            events_parsed=len(events),
            unique_ips=len(keys),
            lines_total=len(lines),
            lines_dropped=len(lines) - len(events),
            filename=suggested_filename(encoding),
        )

    async def _enrich(self, client: EnrichmentClient, keys):
        ips = sorted(keys)
        logger.info("Dispatching %d lookups", len(ips))
        outcomes = await asyncio.gather(*(client.lookup(ip) for ip in ips), return_exceptions=True)

        for ip, outcome in zip(ips, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Lookup for %s raised %r", ip, outcome)
                client.cache.store(ip, EnrichmentResult.network_error())
        logger.info("Enrichment finished, %d outbound calls", client.calls)
