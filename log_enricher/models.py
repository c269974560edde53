"""Log Enricher - Data models"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .patterns import UNKNOWN_VALUE


class LogType(Enum):
    SSH = 'ssh'
    HTTP = 'http'
    UNKNOWN = 'unknown'


class OutputEncoding(Enum):
    KEYVALUE = 'keyvalue'
    JSON = 'json'


class EnrichmentStatus(Enum):
    SUCCESS = 'SUCCESS'
    API_ERROR = 'API_ERROR'
    NETWORK_ERROR = 'NETWORK_ERROR'


@dataclass(frozen=True)
class EnrichmentResult:
    """Geolocation lookup outcome for one IP"""
    country: str
    city: str
    status: EnrichmentStatus
    isp: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def api_error(cls, reason: str) -> 'EnrichmentResult':
        return cls(UNKNOWN_VALUE, UNKNOWN_VALUE, EnrichmentStatus.API_ERROR, reason=reason)

    @classmethod
    def network_error(cls) -> 'EnrichmentResult':
        return cls(UNKNOWN_VALUE, UNKNOWN_VALUE, EnrichmentStatus.NETWORK_ERROR)

    @property
    def status_label(self) -> str:
        if self.status is EnrichmentStatus.API_ERROR:
            return f"{self.status.value}: {self.reason}"
        return self.status.value

    def as_fields(self) -> Dict[str, str]:
        """Fields overlaid onto a merged record"""
        fields = {'country': self.country, 'city': self.city}
        if self.isp is not None:
            fields['isp'] = self.isp
        fields['enrichment_status'] = self.status_label
        return fields


@dataclass
class PipelineResult:
    """Finished run, ready to be saved by the caller"""
    content: bytes
    log_type: LogType
    encoding: OutputEncoding
    events_parsed: int
    unique_ips: int
    lines_total: int
    lines_dropped: int
    filename: str
