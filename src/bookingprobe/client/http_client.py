"""HTTP client for issuing requests against the booking service."""

from __future__ import annotations

import base64
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping, Optional, Sequence, Union

import httpx

from ..config import HarnessConfig
from ..data import random_string
from .models import Call, CallOutcome, RequestOptions, Result, TransportError
from .normalizer import normalize_response

DEFAULT_TIMEOUT = 60.0
MAX_FAN_OUT_WORKERS = 32

OptionsArg = Union[RequestOptions, Mapping[str, Any], None]


class BookingApiClient:
    """HTTP client wrapper for API tests.

    Wraps httpx to give tests one call per method, each returning a
    normalized Result. Error statuses come back as data; only transport
    failures raise. Every call opens its own httpx.Client, so calls
    issued from different threads never share request state.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
        proxy: Optional[str] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._proxy = proxy
        self._transport = transport
        self._default_headers = {"Accept": "application/json"}
        if api_key:
            self._default_headers["X-Api-Key"] = api_key

    @classmethod
    def from_config(
        cls,
        config: HarnessConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "BookingApiClient":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            verify_ssl=config.verify_ssl,
            proxy=config.proxy,
            api_key=config.api_key,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Any] = None,
        options: OptionsArg = None,
    ) -> Result:
        """Send one request and return the normalized result.

        Args:
            method: HTTP method
            endpoint: Path relative to the base URL (may carry a query string)
            data: JSON payload; takes precedence over ``options.body``
            options: Extra headers, query parameters and body

        Raises:
            TransportError: When no response was received
        """
        opts = RequestOptions.coerce(options)
        method = method.upper()

        headers = httpx.Headers(self._default_headers)
        headers.update(opts.headers)
        path, _, query_string = endpoint.partition("?")
        params = httpx.QueryParams(query_string).merge(opts.query)
        body = data if data is not None else opts.body

        start = time.monotonic()
        try:
            with httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                verify=self._verify_ssl,
                proxy=self._proxy,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                response = client.request(
                    method,
                    path,
                    headers=headers,
                    params=params,
                    json=body,
                )
        except httpx.RequestError as e:
            raise TransportError(
                method, f"{self._base_url}{endpoint}", str(e) or type(e).__name__
            ) from e

        elapsed = (time.monotonic() - start) * 1000  # ms
        return normalize_response(response, elapsed_ms=elapsed)

    def get(self, endpoint: str, options: OptionsArg = None) -> Result:
        """Perform GET request"""
        return self.request("GET", endpoint, options=options)

    def post(self, endpoint: str, data: Any, options: OptionsArg = None) -> Result:
        """Perform POST request"""
        return self.request("POST", endpoint, data, options)

    def put(self, endpoint: str, data: Any, options: OptionsArg = None) -> Result:
        """Perform PUT request"""
        return self.request("PUT", endpoint, data, options)

    def patch(self, endpoint: str, data: Any, options: OptionsArg = None) -> Result:
        """Perform PATCH request"""
        return self.request("PATCH", endpoint, data, options)

    def delete(self, endpoint: str, options: OptionsArg = None) -> Result:
        """Perform DELETE request"""
        return self.request("DELETE", endpoint, options=options)

    def fan_out(
        self,
        calls: Sequence[Call],
        max_workers: Optional[int] = None,
    ) -> list[CallOutcome]:
        """Issue independent calls concurrently and wait for all of them.

        Returns one outcome per call, in input order. A transport failure
        is captured on its own outcome and does not affect the others.
        """
        if not calls:
            return []

        workers = max_workers or min(MAX_FAN_OUT_WORKERS, len(calls))

        def run(call: Call) -> CallOutcome:
            try:
                result = self.request(call.method, call.endpoint, call.data, call.options)
            except TransportError as e:
                return CallOutcome(call=call, error=e)
            return CallOutcome(call=call, result=result)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(run, calls))


def token_cookie(token: str) -> dict[str, str]:
    """Header carrying an auth token the way the booking service expects."""
    return {"Cookie": f"token={token}"}


def basic_auth_header(username: str, password: str) -> dict[str, str]:
    """Basic Authorization header, the service's alternative to the token."""
    encoded = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {encoded}"}


def random_email() -> str:
    """Generate random email"""
    return f"test_{random_string(8)}@example.com"
