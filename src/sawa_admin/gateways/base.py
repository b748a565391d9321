"""Generic remote data gateway.

One gateway per entity type turns a CRUD intent into exactly one HTTP call
against ``/admin/{resource}`` and folds every possible outcome into a
Result. Nothing here raises for a failed call:

- 2xx with ``success: false``      -> Err(server message)
- non-2xx                          -> Err(server message or default, status_code)
- transport error (timeout, DNS)   -> Err(best-effort text)
- body that doesn't fit the model  -> Err(default message)

There are no retries, no caching and no idempotency keys; a call repeated
under a flaky network can submit twice.
"""

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from sawa_admin.client import ApiClient
from sawa_admin.logging import get_logger
from sawa_admin.schemas.pagination import PageMeta
from sawa_admin.schemas.result import Err, Ok, Result

logger = get_logger(__name__)

# Filter values that mean "no filter" in the screens' dropdowns
_EMPTY_FILTER_VALUES = (None, "", "all")

# Everything httpx can raise for one call; InvalidURL and StreamError sit
# outside the HTTPError tree
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


def clean_filters(filters: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop unset filters; every other key goes to the server verbatim."""
    if not filters:
        return {}
    return {key: value for key, value in filters.items() if value not in _EMPTY_FILTER_VALUES}


def flatten_form(payload: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested payload into multipart fields: ``{"name": {"ar": x}}`` -> ``name[ar]``."""
    fields: dict[str, str] = {}
    for key, value in payload.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            fields.update(flatten_form(value, name))
        elif isinstance(value, list | tuple):
            fields.update(flatten_form(dict(enumerate(value)), name))
        elif isinstance(value, bool):
            fields[name] = "1" if value else "0"
        else:
            fields[name] = str(value)
    return fields


def describe_transport_error(exc: Exception, fallback: str) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return f"{fallback}: the server took too long to respond"
    if isinstance(exc, httpx.ConnectError):
        return f"{fallback}: could not reach the server"
    return fallback


def decode_body(response: httpx.Response) -> dict[str, Any] | None:
    """Response JSON as an envelope dict; bare JSON values end up under ``data``.

    None when the body is not JSON at all.
    """
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else {"data": body}


def failure_message(body: Mapping[str, Any] | None, fallback: str) -> str:
    message = (body or {}).get("message")
    return message if isinstance(message, str) and message else fallback


class ApiGateway:
    """Request plumbing shared by every gateway."""

    name: str = "api"

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def _send(
        self, method: str, path: str, *, failure: str, **kwargs: Any
    ) -> dict[str, Any] | Err:
        """Perform the request and return the success envelope, or an Err."""
        log = logger.bind(gateway=self.name, method=method, path=path)
        try:
            response = await self.client.request(method, path, **kwargs)
        except TRANSPORT_ERRORS as exc:
            log.warning("gateway_transport_error", error=repr(exc))
            return Err(describe_transport_error(exc, failure))

        body = decode_body(response)
        if not response.is_success:
            message = failure_message(body, failure)
            log.warning("gateway_http_error", status_code=response.status_code, message=message)
            return Err(message, status_code=response.status_code)
        if body is None:
            log.warning("gateway_undecodable_body", status_code=response.status_code)
            return Err(failure, status_code=response.status_code)
        if body.get("success") is False:
            message = failure_message(body, failure)
            log.info("gateway_business_error", message=message)
            return Err(message, status_code=response.status_code)
        log.debug("gateway_ok", status_code=response.status_code)
        return body


class Gateway[T: BaseModel](ApiGateway):
    """CRUD gateway for one entity type.

    Subclasses set ``resource`` (URL segment), ``model`` (read model) and
    ``label`` (singular noun used in fallback messages)::

        class FeaturesGateway(Gateway[Feature]):
            resource = "features"
            model = Feature
            label = "feature"
    """

    resource: str
    model: type[T]
    label: str
    plural: str | None = None

    def __init__(self, client: ApiClient) -> None:
        super().__init__(client)
        self.name = self.resource
        self._one = TypeAdapter(self.model)
        self._many = TypeAdapter(list[self.model])  # type: ignore[name-defined]

    @property
    def path(self) -> str:
        return f"/admin/{self.resource}"

    @property
    def plural_label(self) -> str:
        return self.plural or f"{self.label}s"

    async def get(self, entity_id: int) -> Result[T]:
        body = await self._send(
            "GET", f"{self.path}/{entity_id}", failure=f"Failed to fetch {self.label}"
        )
        if isinstance(body, Err):
            return body
        return self._parse_one(body, f"Failed to fetch {self.label}")

    async def create(
        self, payload: Mapping[str, Any], files: Mapping[str, Any] | None = None
    ) -> Result[T]:
        """POST a new entity; multipart when ``files`` are given, JSON otherwise."""
        body = await self._send(
            "POST", self.path, failure=f"Failed to create {self.label}", **_encode(payload, files)
        )
        if isinstance(body, Err):
            return body
        return self._parse_one(body, f"Failed to create {self.label}")

    async def update(
        self,
        entity_id: int,
        payload: Mapping[str, Any],
        files: Mapping[str, Any] | None = None,
    ) -> Result[T]:
        body = await self._send(
            "PUT",
            f"{self.path}/{entity_id}",
            failure=f"Failed to update {self.label}",
            **_encode(payload, files),
        )
        if isinstance(body, Err):
            return body
        return self._parse_one(body, f"Failed to update {self.label}")

    async def delete(self, entity_id: int) -> Result[None]:
        body = await self._send(
            "DELETE", f"{self.path}/{entity_id}", failure=f"Failed to delete {self.label}"
        )
        if isinstance(body, Err):
            return body
        return Ok(None)

    async def _action(
        self, method: str, path: str, failure: str, json: Any = None
    ) -> Result[T | None]:
        """Row action on one entity (status change, block...).

        The API is not consistent about returning the updated entity, so the
        data is the parsed entity when present and None otherwise.
        """
        body = await self._send(method, path, failure=failure, json=json)
        if isinstance(body, Err):
            return body
        if isinstance(body.get("data"), Mapping):
            return self._parse_one(body, failure)
        return Ok(None)

    def _parse_one(self, body: Mapping[str, Any], failure: str) -> Result[T]:
        try:
            return Ok(self._one.validate_python(body.get("data")))
        except ValidationError as exc:
            logger.warning(
                "gateway_unexpected_shape", gateway=self.name, errors=exc.error_count()
            )
            return Err(failure)

    async def list(
        self,
        page: int = 1,
        per_page: int = 10,
        filters: Mapping[str, Any] | None = None,
    ) -> Result[list[T]]:
        """GET one page: ``?page=&limit=&<filters>``."""
        failure = f"Failed to fetch {self.plural_label}"
        if page < 1:
            return Err(f"{failure}: page must be at least 1")
        if per_page <= 0:
            return Err(f"{failure}: page size must be positive")

        params = {"page": page, "limit": per_page, **clean_filters(filters)}
        body = await self._send("GET", self.path, failure=failure, params=params)
        if isinstance(body, Err):
            return body
        try:
            items = self._many.validate_python(body.get("data") or [])
        except ValidationError as exc:
            logger.warning(
                "gateway_unexpected_shape", gateway=self.name, errors=exc.error_count()
            )
            return Err(failure)
        meta = PageMeta.parse(body.get("meta"), per_page=per_page, count=len(items))
        return Ok(items, meta=meta)


def _encode(payload: Mapping[str, Any], files: Mapping[str, Any] | None) -> dict[str, Any]:
    if files:
        return {"data": flatten_form(payload), "files": files}
    return {"json": dict(payload)}
