"""Tests for the instrumented HTTP client."""

import asyncio

import httpx
import pytest

from folderconfig.core.http_utils import InstrumentedAsyncClient
from folderconfig.core.metrics import external_api_errors_total, external_api_requests_total


def _value(counter, service):
    return counter.labels(service=service)._value.get()


class TestInstrumentedAsyncClient:
    def test_get_requires_start(self):
        client = InstrumentedAsyncClient("Test API")
        with pytest.raises(RuntimeError):
            asyncio.run(client.get("https://example.com"))

    def test_records_requests_and_errors(self):
        service = "Test API counters"

        def handler(request):
            status = 500 if request.url.path == "/fail" else 200
            return httpx.Response(status, json={})

        async def run():
            async with InstrumentedAsyncClient(service, transport=httpx.MockTransport(handler)) as client:
                await client.get("https://example.com/ok")
                await client.get("https://example.com/fail")

        asyncio.run(run())

        assert _value(external_api_requests_total, service) == 2
        assert _value(external_api_errors_total, service) == 1

    def test_close_is_idempotent(self):
        async def run():
            client = InstrumentedAsyncClient("Test API")
            await client.start()
            await client.close()
            await client.close()

        asyncio.run(run())
