import json

import httpx
from colorama import Style

from sqliprobe.core.errors import ConfigurationError, TransportError
from sqliprobe.core.models import BodyType, ProbeResponse, Target
from sqliprobe.parsers.request import BODY_METHODS, QUERY_METHODS

REQUEST_TIMEOUT = 10  # seconds, bounds every single measurement

# httpx defaults; raised to the worker count so no send waits on the pool
POOL_CONNECTIONS = 100
POOL_KEEPALIVE = 20


class TargetClient:
    """
    Sends one request per payload against a frozen Target.

    A single httpx.Client is shared by every worker thread; the Target
    itself is never mutated. The pool holds at least *pool_size*
    connections, since resp.elapsed also counts time spent waiting for one.
    """

    def __init__(self, target: Target, proxy: str | None = None, verify: bool = False,
                 transport: httpx.BaseTransport | None = None, logger=None,
                 pool_size: int = 1):
        if target.method not in QUERY_METHODS | BODY_METHODS:
            raise ConfigurationError(f"Unsupported method: {target.method!r}")
        self.target = target
        self.logger = logger
        self.client = httpx.Client(
            headers=self._headers(target), verify=verify, proxy=proxy,
            follow_redirects=True, timeout=REQUEST_TIMEOUT, transport=transport,
            limits=httpx.Limits(max_connections=max(pool_size, POOL_CONNECTIONS),
                                max_keepalive_connections=max(pool_size, POOL_KEEPALIVE)))

    @staticmethod
    def _headers(target: Target) -> dict:
        hdrs = dict(target.headers)
        cookie = target.cookie_header
        if cookie:
            hdrs["Cookie"] = cookie
        return hdrs

    def _request_kwargs(self, payload: str) -> dict:
        params = self.target.build_params(payload)
        if self.target.method in QUERY_METHODS:
            return {"params": params}
        if self.target.body_type is BodyType.JSON:
            return {"json": params}
        if self.target.body_type is BodyType.FORM:
            return {"data": params}
        return {"content": json.dumps(params)}

    def send(self, payload: str) -> ProbeResponse:
        kwargs = self._request_kwargs(payload)
        if self.logger and self.logger.verbose >= 2:
            self.logger.debug(
                f"→ {self.target.method} {self.target.url} "
                f"payload={self.logger.PAY}{payload}{Style.RESET_ALL}")
        try:
            resp = self.client.request(self.target.method, self.target.url, **kwargs)
            body = resp.text or ""
        except httpx.HTTPError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}", payload=payload) from exc

        return ProbeResponse(
            payload=payload,
            status_code=resp.status_code,
            body=body,
            elapsed_ms=int(resp.elapsed.total_seconds() * 1000),
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "TargetClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
