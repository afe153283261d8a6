"""Exceptions raised when talking to the Visma.net API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, NoReturn, Optional

from .utils.logging import truncate

logger = logging.getLogger("vismanet_server.errors")


class VismaNetClientError(Exception):
    """Represents an error when communicating with the Visma.net API."""


class VismaNetApiError(VismaNetClientError):
    """The API answered with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        request_body: Optional[str] = None,
        response_body: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url
        self.request_body = request_body
        self.response_body = response_body
        self.details = details


class VismaNetAuthenticationError(VismaNetApiError):
    """Token rejected or missing access to the company."""


class VismaNetNotFoundError(VismaNetApiError):
    """Requested resource does not exist."""


def _parse_details(response_body: Optional[str]) -> Optional[Dict[str, Any]]:
    if not response_body:
        return None
    try:
        parsed = json.loads(response_body)
    except ValueError:
        return None
    if isinstance(parsed, list) and parsed and isinstance(parsed[0], dict):
        parsed = parsed[0]
    return parsed if isinstance(parsed, dict) else None


def _format_message(details: Optional[Dict[str, Any]], response_body: Optional[str]) -> str:
    if details:
        message = details.get("message") or details.get("Message")
        if message:
            return str(message)
        exception_message = details.get("ExceptionMessage")
        if exception_message:
            parts = []
            exception_type = details.get("ExceptionType")
            if exception_type:
                parts.append(str(exception_type))
            fault_code = details.get("ExceptionFaultCode")
            if fault_code:
                parts.append(f"[{fault_code}]")
            prefix = " ".join(parts)
            return f"{prefix}: {exception_message}" if prefix else str(exception_message)
    if response_body:
        return truncate(response_body, 500)
    return "Unknown error from Visma.net"


def handle_exception(
    response_body: Optional[str],
    exception: Optional[BaseException] = None,
    request_body: Optional[str] = None,
    url: Optional[str] = None,
    status_code: Optional[int] = None,
) -> NoReturn:
    """Turn a failed Visma.net response into a raised exception.

    The Visma.net error body is either ``{"message": "..."}`` or the IPP
    format with ``ExceptionType``/``ExceptionMessage``/``ExceptionFaultCode``.
    Anything else is reported verbatim (truncated).
    """
    details = _parse_details(response_body)
    message = _format_message(details, response_body)
    if status_code is not None:
        message = f"{status_code} {message}"
    if url:
        message = f"{message} (url: {url})"

    if status_code in (401, 403):
        error_cls = VismaNetAuthenticationError
    elif status_code == 404:
        error_cls = VismaNetNotFoundError
    else:
        error_cls = VismaNetApiError

    logger.debug(
        "Visma.net error status=%s url=%s request=%s response=%s",
        status_code,
        url,
        truncate(request_body or "", 500),
        truncate(response_body or "", 500),
    )

    raise error_cls(
        message,
        status_code=status_code,
        url=url,
        request_body=request_body,
        response_body=response_body,
        details=details,
    ) from exception
