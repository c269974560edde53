"""Log Enricher - IP geolocation lookups"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional

import aiohttp

from .models import EnrichmentResult, EnrichmentStatus
from .patterns import API_ERROR_FALLBACK, DEFAULT_API_URL, MISSING_VALUE

logger = logging.getLogger(__name__)


class EnrichmentCache:
    """
    Write-once cache of lookup results keyed by IP.

    Concurrent requests for the same key share a single in-flight task, so
    each key reaches the lookup service at most once per cache lifetime.
    Share one instance between runs to keep results for the process lifetime.
    """

    def __init__(self):
        self._results: Dict[str, EnrichmentResult] = {}
        self._inflight: Dict[str, asyncio.Future] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._results

    def __len__(self) -> int:
        return len(self._results)

    def get(self, key: str) -> Optional[EnrichmentResult]:
        return self._results.get(key)

    def store(self, key: str, result: EnrichmentResult) -> EnrichmentResult:
        return self._results.setdefault(key, result)

    async def resolve(self, key: str,
                      fetch: Callable[[str], Awaitable[EnrichmentResult]]) -> EnrichmentResult:
        cached = self._results.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(fetch(key))
            self._inflight[key] = task
            task.add_done_callback(lambda done, key=key: self._settle(key, done))
        return await task

    def _settle(self, key: str, task: asyncio.Future):
        self._inflight.pop(key, None)
        if not task.cancelled() and task.exception() is None:
            self.store(key, task.result())


class IpApiTransport:
    """aiohttp client for the ip-api.com JSON endpoint"""

    def __init__(self, api_url: str = DEFAULT_API_URL, timeout: Optional[float] = None):
        self.api_url = api_url
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        kwargs = {}
        if self.timeout is not None:
            kwargs['timeout'] = aiohttp.ClientTimeout(total=self.timeout)
        self._session = aiohttp.ClientSession(**kwargs)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def fetch(self, ip: str) -> Dict:
        if self._session is None:
            raise RuntimeError("IpApiTransport used outside of 'async with'")

        async with self._session.get(self.api_url.format(ip=ip)) as response:
            data = await response.json(content_type=None)

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response body for {ip}: {data!r}")
        return data


class EnrichmentClient:
    """Turns lookup service responses into cached EnrichmentResults"""

    def __init__(self, transport, cache: Optional[EnrichmentCache] = None):
        self.transport = transport
        self.cache = cache if cache is not None else EnrichmentCache()
        self.calls = 0

    async def lookup(self, ip: str) -> EnrichmentResult:
        return await self.cache.resolve(ip, self._fetch)

    async def _fetch(self, ip: str) -> EnrichmentResult:
        self.calls += 1
        try:
            data = await self.transport.fetch(ip)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning("Enrichment failed for %s: %s", ip, e)
            return EnrichmentResult.network_error()

        if data.get('status') == 'success':
            return EnrichmentResult(
                country=data.get('country') or MISSING_VALUE,
                city=data.get('city') or MISSING_VALUE,
                isp=data.get('isp') or MISSING_VALUE,
                status=EnrichmentStatus.SUCCESS,
            )

        reason = data.get('message') or API_ERROR_FALLBACK
        logger.warning("Lookup service rejected %s: %s", ip, reason)
        return EnrichmentResult.api_error(reason)
