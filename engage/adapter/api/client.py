"""HTTP client for the backend API."""

from abc import ABC, abstractmethod
from typing import Any

import httpx
import logfire

from engage.adapter.error import ApiError, MalformedResponseError

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class AccessTokenProvider(ABC):
    """Supplies the bearer token for API requests."""

    @abstractmethod
    def access_token(self) -> str | None:
        """Return the current access token, or None when signed out."""
        pass


class ApiClient:
    """Thin JSON client over a shared ``httpx.AsyncClient``.

    Adds the bearer token to every request and turns HTTP error statuses,
    timeouts and connection failures into ``ApiError``.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        token_provider: AccessTokenProvider | None = None,
    ) -> None:
        """Initialize API client.

        Args:
            http: Client configured with base URL and timeout
            token_provider: Source of the bearer token
        """
        self.http = http
        self.token_provider = token_provider

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return await self._request("POST", path, json=json)

    async def put(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return await self._request("PUT", path, json=json)

    async def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("DELETE", path, params=params)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON body.

        Returns:
            Decoded body, or None for an empty response

        Raises:
            ApiError: On error status, timeout or transport failure
            MalformedResponseError: If the body is not JSON
        """
        headers: dict[str, str] = {}
        token = self.token_provider.access_token() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self.http.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as e:
            logfire.error("API request timed out", method=method, path=path)
            raise ApiError(f"Request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            logfire.error(
                "API request HTTP error", method=method, path=path, error=str(e)
            )
            raise ApiError(f"HTTP error during {method} {path}: {e}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logfire.error(
                "API request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise ApiError(
                message, status_code=response.status_code, url=str(response.url)
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response from {method} {path} is not JSON"
            ) from e


def _error_message(response: httpx.Response) -> str:
    """Best human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"Request failed: {response.status_code}"
