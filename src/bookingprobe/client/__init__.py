"""Request client and response normalization."""

from .models import (
    Call,
    CallOutcome,
    RequestOptions,
    Result,
    TransportError,
)
from .normalizer import is_json_content_type, normalize_response, parse_body
from .http_client import (
    BookingApiClient,
    basic_auth_header,
    random_email,
    token_cookie,
)

__all__ = [
    "Call",
    "CallOutcome",
    "RequestOptions",
    "Result",
    "TransportError",
    "is_json_content_type",
    "normalize_response",
    "parse_body",
    "BookingApiClient",
    "basic_auth_header",
    "random_email",
    "token_cookie",
]
