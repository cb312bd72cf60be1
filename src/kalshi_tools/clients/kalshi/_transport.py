"""HTTP transport for the Kalshi trade API.

Execute GET requests (optionally signed) and hand the raw body bytes back
to the caller.  HTTP failures are mapped onto the ``KalshiAPIError``
family; decoding is left entirely to the envelope layer.
"""

import logging
import time
from typing import Any
from urllib.parse import urlparse

import httpx

from kalshi_tools.clients.kalshi.auth.signer import RsaPssSigner
from kalshi_tools.clients.kalshi.exceptions import (
    KalshiAPIError,
    KalshiAuthenticationError,
    KalshiNotFoundError,
    KalshiRateLimitError,
    KalshiTransportError,
    KalshiValidationError,
)

logger = logging.getLogger(__name__)

_HTTP_BAD_REQUEST = 400
_HTTP_UNAUTHORIZED = 401
_HTTP_FORBIDDEN = 403
_HTTP_NOT_FOUND = 404
_HTTP_TOO_MANY_REQUESTS = 429


class KalshiTransport:
    """Async HTTP transport shared by every Kalshi endpoint operation.

    Hold the only shared state of the client: the pooled
    ``httpx.AsyncClient``.  Each call builds and sends its own request, so
    one transport may serve many concurrent operations.

    Args:
        base_url: Base URL of the trade API, including ``/trade-api/v2``.
        timeout: Request timeout in seconds.
        api_key_id: Kalshi API key ID, required for signed requests.
        signer: Request signer, required for signed requests.

    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        api_key_id: str | None = None,
        signer: RsaPssSigner | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Base URL of the trade API.
            timeout: Request timeout in seconds.
            api_key_id: Kalshi API key ID.
            signer: Request signer for authenticated endpoints.

        """
        self.base_url = base_url.rstrip("/")
        self._base_path = urlparse(self.base_url).path
        self.api_key_id = api_key_id
        self.signer = signer
        self._http_client = httpx.AsyncClient(timeout=timeout)

    @property
    def can_sign(self) -> bool:
        """Return whether signing credentials are configured."""
        return bool(self.api_key_id) and self.signer is not None

    def _generate_auth_headers(self, method: str, path: str) -> dict[str, str]:
        """Generate authentication headers for a request.

        Args:
            method: HTTP method.
            path: Request path relative to ``base_url``, query allowed.

        Returns:
            Dictionary of authentication headers.

        Raises:
            KalshiAuthenticationError: If no credentials are configured.

        """
        if self.signer is None or not self.api_key_id:
            raise KalshiAuthenticationError("Signed request requires an API key ID and private key")

        # The signature covers the full path from the host root, minus the query
        signing_path = f"{self._base_path}{path.split('?', 1)[0]}"
        timestamp = str(int(time.time() * 1000))
        signature = self.signer.generate_signature(timestamp, method.upper(), signing_path)
        return {
            "KALSHI-ACCESS-KEY": self.api_key_id,
            "KALSHI-ACCESS-TIMESTAMP": timestamp,
            "KALSHI-ACCESS-SIGNATURE": signature,
        }

    async def get(self, path: str, *, signed: bool = False) -> bytes:
        """Send a GET request and return the raw response body.

        Args:
            path: Request path relative to ``base_url``, including any
                query string.
            signed: Attach authentication headers.

        Returns:
            Response body bytes.

        Raises:
            KalshiTransportError: When the request never produced a response.
            KalshiAPIError: When the API returns an error status.

        """
        if not path.startswith("/"):
            path = f"/{path}"

        headers = {"Accept": "application/json"}
        if signed:
            headers.update(self._generate_auth_headers("GET", path))

        logger.debug("GET %s (signed=%s)", path, signed)
        try:
            response = await self._http_client.request(
                "GET", f"{self.base_url}{path}", headers=headers
            )
        except httpx.HTTPError as exc:
            raise KalshiTransportError(f"HTTP request failed: {exc}") from exc

        if response.status_code >= _HTTP_BAD_REQUEST:
            self._handle_error(response)

        return response.content

    @staticmethod
    def _handle_error(response: httpx.Response) -> None:
        """Handle API error responses.

        Kalshi reports errors as ``{"error": {"code": ..., "message": ...}}``;
        a bare string or a top-level ``message`` is accepted too.

        Args:
            response: HTTP response with error.

        Raises:
            KalshiValidationError: For 400 errors.
            KalshiAuthenticationError: For 401 and 403 errors.
            KalshiNotFoundError: For 404 errors.
            KalshiRateLimitError: For 429 errors.
            KalshiAPIError: For other errors.

        """
        message = f"HTTP {response.status_code}"
        try:
            data: Any = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            error: Any = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                message = str(error["message"])
            elif isinstance(error, str) and error:
                message = error
            elif data.get("message"):
                message = str(data["message"])

        status = response.status_code
        if status == _HTTP_BAD_REQUEST:
            raise KalshiValidationError(message, status)
        if status in (_HTTP_UNAUTHORIZED, _HTTP_FORBIDDEN):
            raise KalshiAuthenticationError(message, status)
        if status == _HTTP_NOT_FOUND:
            raise KalshiNotFoundError(message, status)
        if status == _HTTP_TOO_MANY_REQUESTS:
            raise KalshiRateLimitError(message, status)

        raise KalshiAPIError(message, status)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._http_client.aclose()
