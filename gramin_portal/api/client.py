"""Async HTTP client for the portal REST backend."""

import logging
from typing import Any, Dict, Optional

import httpx

from gramin_portal.api.errors import ApiError
from gramin_portal.config import settings

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin async wrapper that prefixes the base URL and attaches bearer tokens.

    The token is passed per call, so each service decides which session
    (admin or member) authenticates its requests.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Backend root URL (default: settings.api.base_url)
            timeout: Request timeout in seconds
            transport: Optional transport, used by tests to fake the backend
        """
        self.base_url = (base_url or settings.api.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api.timeout_seconds
        self._transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self.client

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        raw: bool = False,
    ) -> Any:
        """
        Perform one request and return the parsed body.

        Args:
            method: HTTP verb
            path: Path relative to the base URL, e.g. "/admin/members"
            token: Bearer token for the Authorization header
            params: Query parameters; None values are dropped
            json: JSON request body
            data: Form fields (multipart uploads)
            files: Files for multipart uploads
            raw: Return the raw bytes instead of parsing JSON

        Returns:
            Parsed JSON body, None for an empty body, or bytes when raw=True

        Raises:
            ApiError: on any HTTP or network failure
        """
        client = self._ensure_client()
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await client.request(
                method,
                path,
                params=params or None,
                json=json,
                data=data,
                files=files,
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = ApiError.from_response(e.response)
            logger.warning(f"{method} {path} failed: {e.response.status_code} {error.message}")
            raise error from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} network error: {e}")
            raise ApiError(0, f"Network error: {e}") from e

        if raw:
            return response.content
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(self, path: str, **kwargs) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.request("DELETE", path, **kwargs)
