"""Client for the baconipsum.com text API.

Uses a persistent httpx.AsyncClient created on first use, with TLS
verification always on, redirects followed and a bounded timeout per request.
"""

import json
from typing import Any

import httpx

from bacon_ipsum.core.config import Settings
from bacon_ipsum.core.exceptions import InvalidResponse, UpstreamStatusError, UpstreamUnreachable
from bacon_ipsum.core.logging import get_logger

logger = get_logger(__name__)


def build_query(meat_type: str, paragraph_count: int, start_with_lorem: bool) -> dict[str, str]:
    """Query parameters for one generation request."""
    return {
        "format": "json",
        "type": meat_type,
        "paras": str(paragraph_count),
        "start-with-lorem": "1" if start_with_lorem else "0",
    }


def parse_paragraphs(body: Any) -> list[str]:
    """Validate a decoded response body as a non-empty list of strings.

    Raises:
        InvalidResponse: If the body has any other shape
    """
    if not isinstance(body, list) or not body:
        raise InvalidResponse("API returned empty response")
    if not all(isinstance(item, str) for item in body):
        raise InvalidResponse("API response contains non-text paragraphs")
    return list(body)


class BaconIpsumClient:
    """Fetches paragraphs from the bacon ipsum API."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = settings.bacon_ipsum_api_url
        self._timeout = settings.upstream_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def api_url(self) -> str:
        return self._url

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the persistent HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                verify=True,
                follow_redirects=True,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_paragraphs(
        self,
        meat_type: str,
        paragraph_count: int,
        start_with_lorem: bool,
    ) -> list[str]:
        """Request paragraphs from the API.

        Args:
            meat_type: ``all-meat`` or ``meat-and-filler``
            paragraph_count: Number of paragraphs (1-10)
            start_with_lorem: Start the first paragraph with "Bacon ipsum dolor amet"

        Returns:
            Paragraph strings in API order

        Raises:
            UpstreamUnreachable: The request could not complete
            UpstreamStatusError: The API returned a non-2xx status
            InvalidResponse: The body is not a non-empty JSON array of strings
        """
        params = build_query(meat_type, paragraph_count, start_with_lorem)
        client = await self._get_client()

        try:
            response = await client.get(self._url, params=params)
        except httpx.HTTPError as e:
            logger.warning("Bacon ipsum API unreachable", url=self._url, error=str(e))
            raise UpstreamUnreachable() from e

        if not response.is_success:
            logger.warning(
                "Bacon ipsum API returned error status",
                url=self._url,
                status_code=response.status_code,
            )
            raise UpstreamStatusError(response.status_code)

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Bacon ipsum API returned invalid JSON", url=self._url)
            raise InvalidResponse("Invalid JSON response from API") from e

        return parse_paragraphs(body)
