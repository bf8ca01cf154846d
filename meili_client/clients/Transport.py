import json
import logging
from typing import Any, Callable

import httpx
from httpx._types import QueryParamTypes
from pydantic import BaseModel

from meili_client.errors import MeiliApiError


def serialize_body(body: Any) -> str:
    """Outbound hook: turns a request body into its JSON text payload.

    Pydantic models are dumped by alias and only with the fields the caller set.
    """
    if isinstance(body, BaseModel):
        body = body.model_dump(by_alias=True, exclude_unset=True)
    elif isinstance(body, (list, tuple)):
        body = [item.model_dump(by_alias=True, exclude_unset=True) if isinstance(item, BaseModel) else item for item in body]
    return json.dumps(body)


def unwrap_response(response: httpx.Response) -> Any:
    """Inbound hook: returns the decoded JSON payload of a response.

    Raises:
        MeiliApiError: If the response status is not 2xx.
    """
    body = _decode_body(response)
    if not response.is_success:
        raise MeiliApiError(
            status_code=response.status_code,
            body=body,
            method=response.request.method,
            url=str(response.request.url),
        )
    return body


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class Transport:
    """Single HTTP transport shared by a client and every index scope derived from it.

    The outbound and inbound hooks are fixed at construction and applied to every
    request sent through :meth:`request`.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict | None = None,
        timeout: float = 30.0,
        logger: Any = None,
        outbound_hook: Callable[[Any], str] = serialize_body,
        inbound_hook: Callable[[httpx.Response], Any] = unwrap_response,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.logging = logger or logging.getLogger(__name__)
        self.base_url = base_url.rstrip("/")
        self._outbound_hook = outbound_hook
        self._inbound_hook = inbound_hook
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers or {},
            timeout=timeout,
            transport=http_transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def close(self) -> None:
        """Close the underlying HTTP client and its pooled connections."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def request(
        self,
        method: str = "GET",
        endpoint: str = "",
        body: Any = None,
        params: QueryParamTypes | None = None,
    ) -> Any:
        """Send a request and return the decoded response payload.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, …).
            endpoint: Path to append to the base URL (leading slash optional).
            body: JSON-serialisable body. None means the request has no body; False, "" and [] are sent.
            params: URL query parameters. List values must already be joined by the caller.

        Returns:
            The decoded JSON payload, or None for an empty response.

        Raises:
            MeiliApiError: If the service answers with a non-2xx status.
            httpx.TransportError: If the request could not be sent or answered.
        """
        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""

        kwargs: dict = {"params": params}
        if body is not None:
            kwargs["content"] = self._outbound_hook(body)
            kwargs["headers"] = {"Content-Type": "application/json"}

        self.logging.debug("%s %s%s", method, self.base_url, endpoint)
        response = await self._client.request(method, endpoint, **kwargs)

        try:
            return self._inbound_hook(response)
        except MeiliApiError as e:
            self.logging.error(
                "Request to %s failed with status %d: %s",
                e.url,
                e.status_code,
                response.text[:200],
            )
            raise
