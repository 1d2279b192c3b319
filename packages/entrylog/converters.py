"""Conversions from records and HTTP exchanges into loggable mappings.

Each converter reads through a narrow capability protocol. ``httpx`` requests
and responses and ``pydantic`` models are adapted automatically, so callers
can hand the objects they already hold straight to the logger.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from typing import Any, Protocol

import httpx
from pydantic import BaseModel

from . import fields


class RecordLike(Protocol):
    """Record exposing only the fields that were actually populated."""

    def populated_fields_as_mapping(self) -> Mapping[str, Any]: ...


class RequestLike(Protocol):
    """Read-only view of one outbound HTTP request."""

    @property
    def body(self) -> Any: ...

    @property
    def compressed(self) -> bool: ...

    @property
    def endpoint(self) -> str: ...

    @property
    def method(self) -> str: ...

    def header(self, name: str) -> str | None: ...


class ResponseLike(Protocol):
    """Read-only view of one HTTP response."""

    @property
    def body(self) -> Any: ...

    @property
    def status(self) -> str: ...

    @property
    def status_code(self) -> int: ...

    def header_names(self) -> list[str]: ...

    def header(self, name: str) -> str | None: ...


class HttpxRequestView:
    """``RequestLike`` adapter over ``httpx.Request``."""

    def __init__(self, request: httpx.Request) -> None:
        self._request = request

    @property
    def body(self) -> str | None:
        try:
            content = self._request.content
        except httpx.RequestNotRead:
            return None
        return content.decode("utf-8", errors="replace")

    @property
    def compressed(self) -> bool:
        return "content-encoding" in self._request.headers

    @property
    def endpoint(self) -> str:
        return str(self._request.url)

    @property
    def method(self) -> str:
        return self._request.method

    def header(self, name: str) -> str | None:
        return self._request.headers.get(name)


class HttpxResponseView:
    """``ResponseLike`` adapter over ``httpx.Response``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def body(self) -> str | None:
        try:
            return self._response.text
        except httpx.ResponseNotRead:
            return None

    @property
    def status(self) -> str:
        return self._response.reason_phrase

    @property
    def status_code(self) -> int:
        return self._response.status_code

    def header_names(self) -> list[str]:
        """Return header names in received order and original casing."""
        encoding = self._response.headers.encoding
        names = (key.decode(encoding) for key, _ in self._response.headers.raw)
        return list(dict.fromkeys(names))

    def header(self, name: str) -> str | None:
        return self._response.headers.get(name)


def as_request_like(request: Any) -> RequestLike:
    """Wrap ``httpx.Request`` objects; pass other request views through."""
    if isinstance(request, httpx.Request):
        return HttpxRequestView(request)
    return request


def as_response_like(response: Any) -> ResponseLike:
    """Wrap ``httpx.Response`` objects; pass other response views through."""
    if isinstance(response, httpx.Response):
        return HttpxResponseView(response)
    return response


def record_fields(
    record: RecordLike | BaseModel | Mapping[str, Any],
    exclude: Collection[str] | None = None,
) -> dict[str, Any]:
    """Return the populated fields of ``record`` minus any excluded names."""
    if isinstance(record, BaseModel):
        populated: Mapping[str, Any] = record.model_dump(exclude_unset=True)
    elif isinstance(record, Mapping):
        populated = record
    else:
        populated = record.populated_fields_as_mapping()

    excluded = frozenset(exclude or ())
    return {key: value for key, value in populated.items() if key not in excluded}


def records_fields(
    records: Iterable[Any], exclude: Collection[str] | None = None
) -> list[dict[str, Any]]:
    """Filter every record independently, preserving order."""
    return [record_fields(record, exclude) for record in records]


def request_fields(
    request: Any, include_headers: Collection[str] | None = None
) -> dict[str, Any]:
    """Build ``{body, compressed, endpoint, method}`` plus opted-in headers."""
    view = as_request_like(request)
    output: dict[str, Any] = {
        "body": view.body,
        "compressed": view.compressed,
        "endpoint": view.endpoint,
        "method": view.method,
    }
    if include_headers:
        output[fields.HEADERS] = {name: view.header(name) for name in include_headers}
    return output


def response_fields(
    response: Any, exclude_headers: Collection[str] | None = None
) -> dict[str, Any]:
    """Build ``{body, status, status_code}`` plus every non-excluded header."""
    view = as_response_like(response)
    output: dict[str, Any] = {
        "body": view.body,
        "status": view.status,
        "status_code": view.status_code,
    }
    # Header names are case-insensitive.
    excluded = frozenset(name.lower() for name in exclude_headers or ())
    headers = {
        name: view.header(name)
        for name in view.header_names()
        if name.lower() not in excluded
    }
    if headers:
        output[fields.HEADERS] = headers
    return output
