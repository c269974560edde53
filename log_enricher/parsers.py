"""Log Enricher - Log type detection and line extraction"""

import re
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .models import LogType
from .patterns import (
    HTTP_PATTERN,
    HTTP_PREFIX_PATTERN,
    INVALID_USER_MARKER,
    PLACEHOLDER_IP,
    SSH_MARKERS,
    SSH_PATTERNS,
)

Event = Dict[str, str]
Builder = Callable[['re.Match', str], Event]

_HTTP_PREFIX = re.compile(HTTP_PREFIX_PATTERN, re.ASCII)
_HTTP_LINE = re.compile(HTTP_PATTERN, re.ASCII)


def detect_log_type(first_line: str) -> LogType:
    if any(marker in first_line for marker in SSH_MARKERS):
        return LogType.SSH
    if _HTTP_PREFIX.match(first_line):
        return LogType.HTTP
    return LogType.UNKNOWN


def _event_builder(event: str, fields: Dict[str, str]) -> Builder:
    def build(match, line):
        return {'sshd_event': event, **match.groupdict(), **fields}
    return build


def _failed_password_builder(event: str, fields: Dict[str, str]) -> Builder:
    base = _event_builder(event, fields)

    def build(match, line):
        parsed = base(match, line)
        # the pattern strips the marker from the capture, so put it back
        if INVALID_USER_MARKER in line:
            parsed['user'] = f"{INVALID_USER_MARKER} {parsed['user']}"
        return parsed
    return build


_BUILDER_OVERRIDES = {
    'Failed password': _failed_password_builder,
}


def _compile_ssh_rules() -> List[Tuple['re.Pattern', Builder]]:
    rules = []
    for rule in SSH_PATTERNS:
        factory = _BUILDER_OVERRIDES.get(rule['event'], _event_builder)
        rules.append((re.compile(rule['pattern'], re.ASCII), factory(rule['event'], rule['fields'])))
    return rules


SSH_RULES = _compile_ssh_rules()


def extract_ssh(line: str) -> Optional[Event]:
    """Map an auth.log line to an event; the first matching rule wins"""
    for pattern, build in SSH_RULES:
        match = pattern.search(line)
        if match:
            return build(match, line)
    return None


def extract_http(line: str) -> Optional[Event]:
    match = _HTTP_LINE.match(line)
    if match:
        return match.groupdict()
    return None


EXTRACTORS = {
    LogType.SSH: extract_ssh,
    LogType.HTTP: extract_http,
}


def collect_keys(events: Iterable[Event]) -> Set[str]:
    """Distinct source IPs worth looking up"""
    keys = set()
    for event in events:
        ip = event.get('src_ip')
        if ip and ip != PLACEHOLDER_IP:
            keys.add(ip)
    return keys
