"""
Shared JSON-over-HTTP plumbing for the third-party API clients.

Each vendor client (WalletKit, fiat ramp) subclasses JSONAPIClient and only
declares its base URL, auth headers and error type. No retries, no caching.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """A third-party API call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class JSONAPIClient:
    """
    Base class for bearer-authenticated JSON REST clients.

    Usage:
        class MyClient(JSONAPIClient):
            error_class = MyError
            service_name = "my-api"

    A fresh httpx.AsyncClient is opened per request. Tests inject an
    httpx.MockTransport through the `transport` argument.
    """

    error_class: type[ServiceError] = ServiceError
    service_name = "api"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def url(self, path: str) -> str:
        """Resolve an endpoint path against the API base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises:
            error_class: transport failure, non-2xx status or non-JSON body
        """
        url = self.url(path)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self.headers,
                )
        except httpx.RequestError as e:
            logger.error(
                f"{self.service_name} request failed: {e}",
                extra={"method": method, "path": path},
            )
            raise self.error_class(f"{self.service_name} request failed: {e}") from e

        if response.is_error:
            logger.error(
                f"{self.service_name} error: {response.status_code} - {response.text}",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                },
            )
            raise self.error_class(
                f"{self.service_name} returned {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise self.error_class(
                f"{self.service_name} returned invalid JSON",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
