"""httpx client with retries, rate limiting and an optional response cache."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from rosterpy.config.storage import get_http_cache_path

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import HeaderTypes, QueryParamTypes, TimeoutTypes, URLTypes

    from rosterpy.config.http_resilience import CacheConfig, ResilienceConfig, RetryPolicy

log = logging.getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    follow_redirects: bool | UseClientDefault
    timeout: TimeoutTypes | UseClientDefault


class AsyncClientOptions(TypedDict, total=False):
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.AsyncBaseTransport
    follow_redirects: bool


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class ResilientClient:
    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )

        storage = _build_cache_storage(config.cache)

        client_kwargs: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": RetryTransport(retry=build_retry(config.retry)),
            "follow_redirects": config.follow_redirects,
        }
        if config.default_headers:
            client_kwargs["headers"] = dict(config.default_headers)

        if storage is not None:
            self._client = AsyncCacheClient(**client_kwargs, storage=storage)
        else:
            self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        async def do_request() -> httpx.Response:
            return await self._client.get(url, **kwargs)

        return await self._send(do_request)

    async def _send(self, func: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
        if self._limiter is None:
            return await func()
        async with self._limiter:
            return await func()


def _build_cache_storage(config: CacheConfig | None) -> AsyncSqliteStorage | None:
    if config is None or not config.enabled:
        return None

    if config.backend not in {"sqlite", "memory"}:
        msg = f"Unsupported cache backend: {config.backend}"
        raise ValueError(msg)

    if config.backend == "sqlite":
        database_path = config.sqlite_path or str(get_http_cache_path())
    else:
        database_path = ":memory:"
    log.debug("HTTP cache backend %s at %s", config.backend, database_path)
    return AsyncSqliteStorage(
        database_path=database_path,
        default_ttl=config.default_ttl_seconds,
        refresh_ttl_on_access=config.refresh_ttl_on_access,
    )
