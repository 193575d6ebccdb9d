from __future__ import annotations

import dns.resolver
import httpx
import pytest

import subdmtakeover.engine.runtime as runtime


class FakeResolver:
    records: dict = {}

    def __init__(self):
        self.timeout = None
        self.lifetime = None

    def resolve(self, name, qtype):
        entry = self.records.get(name)
        if entry is None:
            raise dns.resolver.NXDOMAIN()
        values = entry.get(qtype)
        if not values:
            raise dns.resolver.NoAnswer()
        return list(values)


@pytest.fixture
def patch_dns(monkeypatch):
    """Replace dnspython and the OS resolver with in-memory tables."""

    def apply(records, hosts=None):
        resolver_cls = type("Resolver", (FakeResolver,), {"records": records})
        monkeypatch.setattr(runtime.dns.resolver, "Resolver", resolver_cls)
        table = hosts or {}
        monkeypatch.setattr(runtime, "_system_lookup", lambda hostname: table.get(hostname))

    return apply


@pytest.fixture
def patch_http(monkeypatch):
    """Route every AsyncClient built by the runtime through a MockTransport."""

    def apply(handler):
        real_client = httpx.AsyncClient
        transport = httpx.MockTransport(handler)
        monkeypatch.setattr(runtime.httpx, "AsyncClient", lambda **kwargs: real_client(transport=transport, **kwargs))

    return apply


def pages(bodies):
    def handler(request: httpx.Request) -> httpx.Response:
        body = bodies.get(request.url.host)
        if body is None:
            raise httpx.ConnectError("Connection refused", request=request)
        return httpx.Response(200, content=body)

    return handler


@pytest.fixture
def serve_pages():
    return pages
