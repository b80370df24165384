"""Data models for the request client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union


class TransportError(Exception):
    """The HTTP call itself failed (DNS, connection, timeout, protocol).

    Never raised for a response that arrived, whatever its status code.
    The underlying httpx error is available as ``__cause__``.
    """

    def __init__(self, method: str, url: str, message: str) -> None:
        super().__init__(f"{method} {url}: {message}")
        self.method = method
        self.url = url


@dataclass
class RequestOptions:
    """Per-call overrides, shallow-merged over the client defaults."""

    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None

    @classmethod
    def coerce(
        cls, options: Union["RequestOptions", Mapping[str, Any], None]
    ) -> "RequestOptions":
        """Accept a RequestOptions, a plain mapping, or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        unknown = set(options) - {"headers", "query", "body"}
        if unknown:
            raise TypeError(
                f"Unknown request option(s): {', '.join(sorted(unknown))}"
            )
        return cls(
            headers=dict(options.get("headers") or {}),
            query=dict(options.get("query") or {}),
            body=options.get("body"),
        )


@dataclass
class Result:
    """Normalized outcome of one HTTP call."""

    status: int
    body: Any = ""
    headers: dict[str, str] = field(default_factory=dict)
    elapsed_ms: float = 0.0


@dataclass(frozen=True)
class Call:
    """One request to issue as part of a fan-out."""

    method: str
    endpoint: str
    data: Optional[Any] = None
    options: Optional[RequestOptions] = None


@dataclass
class CallOutcome:
    """Result or transport failure of one fanned-out call."""

    call: Call
    result: Optional[Result] = None
    error: Optional[TransportError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Result:
        """Return the result, or raise the captured transport error."""
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result
