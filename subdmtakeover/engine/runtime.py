from __future__ import annotations

"""Core scanning engine for subdmtakeover.

This module contains the runtime used by both CLI and Python API:
- DNS address lookup and plain HTTP fetch for one hostname (`TakeoverScanner`)
- fingerprint matching of the fetched body (`match_fingerprint`)
- orchestration helpers (`_run_async`, `_run_coro_sync`, `SUBDMTAKEOVER`)

Nothing here prints: results are handed back as dicts (and to an optional
per-result callback) and rendered by `subdmtakeover.output`.
"""

import asyncio
import ipaddress
import logging
import socket
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import dns.exception
import dns.resolver
import httpx

from ..version import __version__
from .providers import PROVIDERS, Provider, match_fingerprint

DNS_TIMEOUT = 10.0
HTTP_TIMEOUT = 5.0
MAX_REDIRECTS = 10
MAX_CONCURRENCY = 250
USER_AGENT = f"subdmtakeover/{__version__}"

logger = logging.getLogger("subdmtakeover")
logger.setLevel(logging.INFO)
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s", "%H:%M:%S"))
    logger.addHandler(handler)


class TakeoverError(Exception):
    """Base class for per-subdomain scan failures."""


class ResolveError(TakeoverError):
    """The hostname did not resolve to any address."""


class FetchError(TakeoverError):
    """The HTTP request did not complete."""


def _describe(exc: BaseException) -> str:
    message = str(exc).strip()
    return f"{exc.__class__.__name__}: {message}" if message else exc.__class__.__name__


def _system_lookup(hostname: str) -> Optional[str]:
    """First address from the OS resolver (hosts file, mDNS, search domains)."""
    try:
        infos = socket.getaddrinfo(hostname, None, proto=socket.IPPROTO_TCP)
    except (OSError, UnicodeError):
        return None
    for info in infos:
        address = str(info[4][0]).strip()
        if address:
            return address
    return None


def _resolve_first_address(hostname: str, timeout: float) -> str:
    """Blocking lookup: first A address, or first AAAA when no A exists.

    IP literals are returned as-is. Names unknown to DNS are retried against
    the system resolver so hosts-file entries such as `localhost` resolve.
    """
    try:
        return str(ipaddress.ip_address(hostname))
    except ValueError:
        pass

    resolver = dns.resolver.Resolver()
    resolver.timeout = timeout
    resolver.lifetime = timeout

    try:
        for qtype in ("A", "AAAA"):
            try:
                answers = resolver.resolve(hostname, qtype)
            except dns.resolver.NoAnswer:
                continue
            for rr in answers:
                address = str(rr).strip()
                if address:
                    return address
        raise dns.resolver.NoAnswer(f"No A or AAAA records for {hostname}")
    except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
        address = _system_lookup(hostname)
        if address:
            return address
        raise


def _new_result(subdomain: str) -> Dict[str, Any]:
    return {
        "subdomain": subdomain,
        "ip": None,
        "status_code": None,
        "takeover": False,
        "provider": "",
        "stage": "resolve",
        "error": None,
    }


class TakeoverScanner:
    """Resolve, fetch and fingerprint one hostname.

    Instantiated by `_run_async` for each input line. The HTTP client and the
    DNS thread pool are shared across scanners of the same run.
    """

    def __init__(
        self,
        subdomain: str,
        client: httpx.AsyncClient,
        io_executor: Optional[ThreadPoolExecutor] = None,
        dns_timeout: float = DNS_TIMEOUT,
        http_timeout: float = HTTP_TIMEOUT,
    ):
        self.subdomain = subdomain
        self.client = client
        self.io_executor = io_executor
        self.dns_timeout = dns_timeout
        self.http_timeout = http_timeout

    async def resolve(self) -> str:
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(self.io_executor, _resolve_first_address, self.subdomain, self.dns_timeout),
                timeout=self.dns_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ResolveError(f"Timeout: lookup exceeded {self.dns_timeout:g}s") from exc
        except dns.exception.DNSException as exc:
            raise ResolveError(_describe(exc)) from exc

    async def fetch(self) -> httpx.Response:
        url = f"http://{self.subdomain}/"
        try:
            return await asyncio.wait_for(
                self.client.get(url, timeout=self.http_timeout, follow_redirects=True),
                timeout=self.http_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise FetchError(f"Timeout: request exceeded {self.http_timeout:g}s") from exc
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            raise FetchError(_describe(exc)) from exc

    async def scan(self) -> Dict[str, Any]:
        """Run resolve → fetch → match and return a normalized result dict.

        A resolve or fetch failure ends the scan early; the error text and the
        stage it happened at are kept in the result instead of being raised.
        """
        result = _new_result(self.subdomain)
        try:
            result["ip"] = await self.resolve()
            result["stage"] = "fetch"
            response = await self.fetch()
        except TakeoverError as exc:
            logger.debug("%s failed at %s: %r", self.subdomain, result["stage"], exc.__cause__)
            result["error"] = str(exc)
            return result

        result["stage"] = "match"
        result["status_code"] = response.status_code
        takeover, provider = match_fingerprint(response.content)
        result["takeover"] = takeover
        result["provider"] = provider
        logger.debug("%s -> HTTP %s, match=%s %s", self.subdomain, response.status_code, takeover, provider)
        return result


async def _run_async(
    subdomains: List[str],
    concurrency: Optional[int] = None,
    dns_timeout: Optional[float] = None,
    http_timeout: Optional[float] = None,
    result_callback: Optional[Callable[[Dict[str, Any]], None]] = None,
) -> List[Dict[str, Any]]:
    """Main orchestrator used by both CLI and Python API.

    One task per subdomain is created up front; a semaphore caps how many run
    at once. Returns only after every scan finished or hit its own timeout.
    """
    if not subdomains:
        return []

    max_workers = max(1, concurrency or MAX_CONCURRENCY)
    dns_timeout_value = dns_timeout or DNS_TIMEOUT
    http_timeout_value = http_timeout or HTTP_TIMEOUT
    io_workers = max(4, min(512, max_workers))
    limits_cfg = httpx.Limits(max_connections=max_workers, max_keepalive_connections=max_workers)
    logger.debug("Scanning %d subdomains (concurrency=%d)", len(subdomains), max_workers)

    limiter = asyncio.Semaphore(max_workers)
    results: List[Dict[str, Any]] = []

    with ThreadPoolExecutor(max_workers=io_workers) as io_executor:
        async with httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=httpx.Timeout(http_timeout_value),
            limits=limits_cfg,
            max_redirects=MAX_REDIRECTS,
        ) as client:

            async def worker(subdomain: str) -> None:
                async with limiter:
                    scanner = TakeoverScanner(
                        subdomain,
                        client=client,
                        io_executor=io_executor,
                        dns_timeout=dns_timeout_value,
                        http_timeout=http_timeout_value,
                    )
                    try:
                        result = await scanner.scan()
                    except Exception as exc:
                        logger.exception("Unexpected error scanning %s", subdomain)
                        result = _new_result(subdomain)
                        result["stage"] = "scan"
                        result["error"] = _describe(exc)
                results.append(result)
                if result_callback:
                    result_callback(result)

            tasks = [asyncio.create_task(worker(subdomain)) for subdomain in subdomains]
            await asyncio.gather(*tasks)

    return results


def _run_coro_sync(coro: Any) -> Any:
    """Run async code from sync callers (CLI and public API).

    If already inside an event loop, execute in a helper thread to avoid
    `RuntimeError: asyncio.run() cannot be called from a running event loop`.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    outcome: Dict[str, Any] = {}

    def target() -> None:
        try:
            outcome["result"] = asyncio.run(coro)
        except Exception as exc:
            outcome["error"] = exc

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    thread.join()

    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("result")


def SUBDMTAKEOVER(
    subdomain: Union[str, Iterable[str]],
    concurrency: Optional[int] = None,
    dns_timeout: Optional[float] = None,
    http_timeout: Optional[float] = None,
) -> Union[List[dict], dict, None]:
    """Public synchronous Python API entrypoint.

    Example:
    `SUBDMTAKEOVER(["blog.example.com", "docs.example.com"])`
    """
    single = isinstance(subdomain, str)
    subdomains = [subdomain] if single else list(subdomain)
    subdomains = [s.strip() for s in subdomains if s and s.strip()]
    if not subdomains:
        return None

    results = _run_coro_sync(
        _run_async(
            subdomains,
            concurrency=concurrency,
            dns_timeout=dns_timeout,
            http_timeout=http_timeout,
        )
    )
    return results[0] if single else results


__all__ = [
    "DNS_TIMEOUT",
    "HTTP_TIMEOUT",
    "MAX_CONCURRENCY",
    "MAX_REDIRECTS",
    "PROVIDERS",
    "USER_AGENT",
    "Provider",
    "TakeoverError",
    "ResolveError",
    "FetchError",
    "TakeoverScanner",
    "SUBDMTAKEOVER",
    "match_fingerprint",
    "logger",
]
