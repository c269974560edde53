"""Log Enricher package"""

from .patterns import VERSION
from .models import EnrichmentResult, EnrichmentStatus, LogType, OutputEncoding, PipelineResult
from .errors import ConfigError, InputEmptyError, LogEnricherError, PipelineError, UnknownLogTypeError
from .enrichment import EnrichmentCache, EnrichmentClient, IpApiTransport
from .pipeline import LogEnricher
from .config import Settings
from .output import print_summary

__all__ = [
    'VERSION', 'LogEnricher', 'Settings', 'EnrichmentCache', 'EnrichmentClient', 'IpApiTransport',
    'EnrichmentResult', 'EnrichmentStatus', 'LogType', 'OutputEncoding', 'PipelineResult',
    'LogEnricherError', 'InputEmptyError', 'UnknownLogTypeError', 'PipelineError', 'ConfigError',
    'print_summary',
]
