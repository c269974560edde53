import asyncio

import aiohttp
import pytest


class FakeTransport:
    """Stands in for IpApiTransport; responses are keyed by IP"""

    def __init__(self, responses=None, delay=0.0):
        self.responses = responses or {}
        self.delay = delay
        self.calls = []

    async def fetch(self, ip):
        self.calls.append(ip)
        await asyncio.sleep(self.delay)
        response = self.responses.get(ip)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return {'status': 'success', 'country': 'Testland', 'city': 'Testville',
                    'isp': 'Test ISP', 'query': ip}
        return response


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def failing_transport():
    return FakeTransport(responses={
        '10.0.0.5': aiohttp.ClientConnectionError("connection refused"),
        '10.0.0.6': {'status': 'fail', 'message': 'private range', 'query': '10.0.0.6'},
    })
