import json
import logging

import httpx
from pydantic import ValidationError

from metlink_cot.data.config import MetlinkConfig
from metlink_cot.models.feed import FeedEnvelope

logger = logging.getLogger(__name__)

# How much of the raw body to echo when debug logging is enabled
DEBUG_BODY_CHARS = 1000


class UpstreamError(Exception):
    """The Metlink API could not provide a usable vehicle positions feed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MetlinkClient:
    """Async HTTP client for the Metlink OpenData vehicle positions feed.

    Usage:
        async with MetlinkClient(config) as client:
            envelope = await client.fetch_vehicle_positions()
    """

    def __init__(self, config: MetlinkConfig):
        """Initialize the client.

        Args:
            config: Metlink configuration with API key and feed URL.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "MetlinkClient":
        """Enter async context - create HTTP client."""
        headers = {
            "accept": "application/json",
            "x-api-key": self._config.api_key,
        }
        self._client = httpx.AsyncClient(headers=headers)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_vehicle_positions(self) -> FeedEnvelope:
        """Fetch the vehicle positions feed and check its envelope.

        Only the envelope is validated here; individual entities are left
        for the validator stage.

        Returns:
            FeedEnvelope with the raw entity list.

        Raises:
            RuntimeError: If client not initialized.
            UpstreamError: On transport failure, non-2xx status, invalid JSON,
                or a body without an `entity` array.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        try:
            response = await self._client.get(self._config.vehicle_positions_url)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Metlink API request failed: {e}") from e

        if not response.is_success:
            raise UpstreamError(
                f"Metlink API returned status {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamError(f"Metlink API returned invalid JSON: {e}") from e

        if self._config.debug:
            logger.debug(f"Raw API response: {json.dumps(body)[:DEBUG_BODY_CHARS]}...")

        if not isinstance(body, dict) or not isinstance(body.get("entity"), list):
            raise UpstreamError("Invalid API response format: missing entity data")

        try:
            return FeedEnvelope.model_validate(body)
        except ValidationError as e:
            raise UpstreamError(f"Invalid API response format: {e}") from e
