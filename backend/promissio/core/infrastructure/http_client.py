"""Base HTTP client for the Promissio REST API.

One request per call, resolved or rejected exactly once: no retries, no
response caching. Non-success responses and transport failures are raised to
the caller as ``UnauthorizedError`` (401) or ``ExternalServiceError``.
"""

from typing import Any

import httpx

from promissio.core.config import ApiClientConfig
from promissio.core.errors import ExternalServiceError, UnauthorizedError
from promissio.core.logging import get_logger

logger = get_logger(__name__)


class RestApiClient:
    """
    Async JSON client with an owned or injected ``httpx.AsyncClient``.

    Usage Example:
        async with HttpAuditLogClient(config) as client:
            entries = await client.fetch_audit_logs(filters)
    """

    service_name = "promissio-api"

    def __init__(
        self,
        config: ApiClientConfig,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.config = config
        self.headers = {"Accept": "application/json", **(headers or {})}
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                headers=self.headers,
                timeout=httpx.Timeout(self.config.timeout),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """
        GET ``path`` and decode the JSON body.

        Raises:
            UnauthorizedError: On a 401 response
            ExternalServiceError: On any other non-success response, an
                undecodable body, or a transport failure
        """
        client = self._ensure_client()
        logger.debug("API request", path=path, params=params or {})

        try:
            response = await client.get(path, params=params, headers=self.headers)
        except httpx.HTTPError as e:
            logger.warning("API request failed", path=path, error=str(e))
            raise ExternalServiceError(
                f"Request to {path} failed: {e}", service=self.service_name, cause=e
            ) from e

        if response.status_code == 401:
            raise UnauthorizedError(f"Unauthorized request to {path}")

        if not response.is_success:
            logger.warning(
                "API request rejected", path=path, status_code=response.status_code
            )
            raise ExternalServiceError(
                f"Request to {path} returned {response.status_code}",
                service=self.service_name,
                upstream_status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"Response from {path} is not valid JSON",
                service=self.service_name,
                upstream_status=response.status_code,
                cause=e,
            ) from e


__all__ = ["RestApiClient"]
