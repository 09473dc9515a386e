"""ExchangeRate-API client for fetching the current pair conversion rate.

ExchangeRate-API documentation: https://www.exchangerate-api.com/docs/pair-conversion-requests
Pair endpoint: GET {api_url}/{api_key}/pair/{BASE}/{TARGET}
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from app.rate_monitor.application.interfaces.rate_feed import RateFeed
from app.rate_monitor.domain.value_objects.rate_reading import RateReading

logger = logging.getLogger(__name__)

# Default timeout for HTTP requests
DEFAULT_TIMEOUT_SECONDS = 10.0

SOURCE_NAME = "ExchangeRate-API"


class ExchangeRateApiClient(RateFeed):
    """ExchangeRate-API client implementing the RateFeed interface.

    Every failure mode (timeout, HTTP error status, transport error,
    non-success result, malformed body) is logged and reported as None.

    Attributes:
        _client: httpx AsyncClient for making HTTP requests.
        _api_url: ExchangeRate-API base URL including the version prefix.
    """

    def __init__(
        self,
        api_key: str,
        base_currency: str,
        target_currency: str,
        api_url: str = "https://v6.exchangerate-api.com/v6",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the ExchangeRate-API client.

        Args:
            api_key: ExchangeRate-API key (part of the URL path).
            base_currency: Base currency code, e.g. "EUR".
            target_currency: Target currency code, e.g. "CNY".
            api_url: ExchangeRate-API base URL.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._api_url = api_url.rstrip("/")
        self._api_key = api_key
        self._base_currency = base_currency.upper()
        self._target_currency = target_currency.upper()
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @property
    def source_name(self) -> str:
        """Return the data provider name."""
        return SOURCE_NAME

    def _build_url(self) -> str:
        return (
            f"{self._api_url}/{self._api_key}/pair/"
            f"{self._base_currency}/{self._target_currency}"
        )

    async def fetch_current_rate(self) -> Optional[RateReading]:
        """Fetch the latest conversion rate for the configured pair.

        Returns:
            RateReading with the provider's update time, or None if unavailable.
        """
        pair = f"{self._base_currency}/{self._target_currency}"

        try:
            logger.debug(f"Fetching {pair} rate from {SOURCE_NAME}")
            response = await self._client.get(self._build_url())
            response.raise_for_status()
            data = response.json(parse_float=Decimal)

            if data.get("result") != "success":
                logger.error(
                    f"{SOURCE_NAME} returned non-success result for {pair}: "
                    f"{data.get('result')} ({data.get('error-type', 'unknown error')})"
                )
                return None

            reading = self._parse_response(data)
            logger.info(f"Fetched rate {reading}")
            return reading

        except httpx.TimeoutException:
            logger.error(f"Timeout fetching {pair} rate from {SOURCE_NAME}")
            return None
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{SOURCE_NAME} HTTP error: {e.response.status_code} - "
                f"{e.response.text[:200]}"
            )
            return None
        except httpx.RequestError as e:
            logger.error(f"{SOURCE_NAME} request error: {e}")
            return None
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.error(f"Error parsing {SOURCE_NAME} response for {pair}: {e}")
            return None

    def _parse_response(self, data: dict[str, Any]) -> RateReading:
        """Convert the pair endpoint payload into a RateReading.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a field has an invalid value.
        """
        return RateReading(
            base_currency=data["base_code"],
            target_currency=data["target_code"],
            conversion_rate=Decimal(str(data["conversion_rate"])),
            observed_at=datetime.fromtimestamp(
                int(data["time_last_update_unix"]), tz=timezone.utc
            ),
            source=SOURCE_NAME,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
