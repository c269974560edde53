"""Log Enricher - Record merging and output"""

import json
from typing import Dict, Iterable, Optional

from rich.console import Console
from rich.panel import Panel

from .enrichment import EnrichmentCache
from .models import OutputEncoding, PipelineResult
from .patterns import INTERNAL_FIELDS, OUTPUT_BASENAME, OUTPUT_EXTENSIONS


def merge(event: Dict[str, str], cache: EnrichmentCache) -> Dict[str, str]:
    """Overlay the cached enrichment for the event's source IP, if any"""
    record = dict(event)
    ip = event.get('src_ip')
    if ip:
        result = cache.get(ip)
        if result is not None:
            record.update(result.as_fields())
            for field in INTERNAL_FIELDS:
                record.pop(field, None)
    return record


def escape_quotes(value: str) -> str:
    return value.replace('"', '\\"')


def format_keyvalue(record: Dict[str, str]) -> str:
    return ', '.join(f'{key}="{escape_quotes(str(value))}"' for key, value in record.items())


def format_json(record: Dict[str, str]) -> str:
    return json.dumps(record, separators=(',', ':'), ensure_ascii=False)


FORMATTERS = {
    OutputEncoding.KEYVALUE: format_keyvalue,
    OutputEncoding.JSON: format_json,
}


def render(records: Iterable[Dict[str, str]], encoding: OutputEncoding) -> bytes:
    formatter = FORMATTERS[encoding]
    return '\n'.join(formatter(record) for record in records).encode('utf-8')


def suggested_filename(encoding: OutputEncoding) -> str:
    return f"{OUTPUT_BASENAME}.{OUTPUT_EXTENSIONS[encoding.value]}"


def print_summary(result: PipelineResult, console: Console, saved_to: Optional[str] = None):
    dropped_style = 'yellow' if result.lines_dropped else 'green'
    body = (
        f"Log Type: [cyan]{result.log_type.value.upper()}[/]\n"
        f"Events Parsed: [cyan]{result.events_parsed:,}[/]\n"
        f"Unique IPs Enriched: [cyan]{result.unique_ips:,}[/]\n"
        f"Lines Dropped: [{dropped_style}]{result.lines_dropped:,}[/] of {result.lines_total:,}"
    )
    if saved_to:
        body += f"\nSaved To: [green]{saved_to}[/]"

    console.print(Panel.fit(body, title="Enrichment Summary", border_style="cyan"))
