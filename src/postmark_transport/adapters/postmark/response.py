"""Classify Postmark API responses into results or typed errors.

See https://postmarkapp.com/developer/api/overview#response-codes for the
status codes the API documents.
"""

from __future__ import annotations

from typing import Any

import orjson

from postmark_transport.domain.errors import (
    AuthError,
    PostmarkError,
    ProtocolError,
    ServerError,
    UnavailableError,
    UnknownAPIError,
    ValidationError,
)


def _decode(body: bytes) -> Any:
    """Return the decoded JSON body, or None when it is not valid JSON."""
    try:
        return orjson.loads(body)
    except orjson.JSONDecodeError:
        return None


def _error_details(result: Any) -> tuple[Any, str]:
    """Pull ``ErrorCode`` and ``Message`` out of an error body; absent or null values read "Unknown"."""
    if not isinstance(result, dict):
        return "Unknown", "Unknown"
    error_code = result.get("ErrorCode")
    api_message = result.get("Message")
    return (
        "Unknown" if error_code is None else error_code,
        "Unknown" if api_message is None else str(api_message),
    )


def _classify_error(status_code: int, result: Any) -> PostmarkError:
    error_code, api_message = _error_details(result)
    details = {"status_code": status_code, "error_code": error_code, "api_message": api_message}

    if status_code == 401:
        return AuthError("Postmark request error: Unauthorized - Missing or incorrect API Key header.", **details)
    if status_code == 422:
        return ValidationError(
            f"Postmark request error: Unprocessable Entity - API error code {error_code}, message: {api_message}",
            **details,
        )
    if status_code == 500:
        return ServerError("Postmark request error: Postmark Internal Server Error", **details)
    if status_code == 503:
        return UnavailableError("Postmark request error: Service Unavailable (planned service outage)", **details)
    return UnknownAPIError(
        f"Unknown error during request to Postmark server (HTTP {status_code}) - "
        f"API error code {error_code}, message: {api_message}",
        **details,
    )


def parse_response(status_code: int, body: bytes) -> dict[str, Any]:
    """Check a response for errors and return its decoded JSON object.

    Args:
        status_code: HTTP status code of the response.
        body: Raw response body.

    Returns:
        The decoded result object.

    Raises:
        AuthError: HTTP 401.
        ValidationError: HTTP 422, with the API error code and message.
        ServerError: HTTP 500.
        UnavailableError: HTTP 503.
        UnknownAPIError: Any other status of 400 or above.
        ProtocolError: A success response whose body is not a JSON object.

    Example:
        >>> parse_response(200, b'{"ErrorCode": 0, "MessageID": "abc"}')["MessageID"]
        'abc'
        >>> parse_response(422, b'{"ErrorCode": 10, "Message": "bad"}')  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: Postmark request error: Unprocessable Entity - API error code 10, message: bad
    """
    result = _decode(body)

    if status_code >= 400:
        raise _classify_error(status_code, result)

    if not isinstance(result, dict):
        raise ProtocolError("Unexpected value returned from server", status_code=status_code)
    return result


__all__ = ["parse_response"]
