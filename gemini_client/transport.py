"""
Transport Protocol - HTTP capability consumed by GeminiClient.

This is the WHAT (interface) plus the default httpx-backed HOW.
Connection pooling, TLS and timeouts belong to the transport; the client
only hands it serialized bodies and reads back text.
"""

import json
import logging
from typing import AsyncGenerator, AsyncIterator, Optional, Protocol

import httpx

from gemini_client.config import API_KEY_HEADER
from gemini_client.errors import TransportFailure

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """
    Contract for sending requests to the Gemini API.

    Implementations must raise TransportFailure for I/O errors and for
    HTTP error statuses.
    """

    async def send_unary(self, method: str, url: str, body: Optional[str] = None) -> str:
        """Send one request and return the whole response body."""
        ...

    def send_streamed(self, url: str, body: str) -> AsyncIterator[str]:
        """
        POST a request and iterate the response line by line.

        Must be lazy: nothing is sent until the first line is pulled.
        Closing the iterator early must release the response.
        """
        ...

    async def aclose(self) -> None:
        ...


def parse_error_message(body: str, status_code: int) -> str:
    """Extract a readable message from a Gemini error body."""
    try:
        data = json.loads(body)
        # Gemini returns {"error": {"code": 400, "message": "...", "status": "..."}}
        if isinstance(data, dict):
            error = data.get("error", {})
            if isinstance(error, dict) and error.get("message"):
                return error["message"]
            elif isinstance(error, str):
                return error
    except ValueError:
        pass
    return f"HTTP {status_code}: {body[:200]}"


class HttpxTransport:
    """
    Transport backed by one shared httpx.AsyncClient.

    The API key travels in the x-goog-api-key header so URLs are safe to log.
    """

    def __init__(
        self,
        api_key: str,
        timeout_seconds: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    def _headers(self) -> dict[str, str]:
        return {
            API_KEY_HEADER: self._api_key,
            "Content-Type": "application/json",
        }

    async def send_unary(self, method: str, url: str, body: Optional[str] = None) -> str:
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(
                method, url, content=body, headers=self._headers()
            )
        except httpx.TimeoutException as e:
            logger.error("Gemini timeout for %s: %s", url, e)
            raise TransportFailure(f"Gemini timeout for {url}: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Gemini HTTP error for %s: %s", url, e)
            raise TransportFailure(f"Gemini HTTP error for {url}: {e}") from e

        if response.status_code >= 400:
            msg = parse_error_message(response.text, response.status_code)
            logger.error("Gemini API error %d for %s: %s", response.status_code, url, msg)
            raise TransportFailure(f"Gemini API error: {msg}", code=response.status_code)
        return response.text

    async def send_streamed(self, url: str, body: str) -> AsyncGenerator[str, None]:
        logger.debug("POST %s (stream)", url)
        try:
            async with self._client.stream(
                "POST", url, content=body, headers=self._headers()
            ) as response:
                if response.status_code >= 400:
                    error_body = (await response.aread()).decode(errors="replace")
                    msg = parse_error_message(error_body, response.status_code)
                    logger.error("Gemini API error %d for %s: %s", response.status_code, url, msg)
                    raise TransportFailure(f"Gemini API error: {msg}", code=response.status_code)

                async for line in response.aiter_lines():
                    yield line
        except httpx.TimeoutException as e:
            logger.error("Gemini timeout for %s: %s", url, e)
            raise TransportFailure(f"Gemini timeout for {url}: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Gemini HTTP error for %s: %s", url, e)
            raise TransportFailure(f"Gemini HTTP error for {url}: {e}") from e

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
