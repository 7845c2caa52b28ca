"""AwesomeAPI client for retrieving the current USD/BRL quote."""

import logging
import math
from typing import Any, Dict

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)


class ExchangeRateError(Exception):
    """Raised when a quote cannot be retrieved or parsed."""


class ExchangeRateClient:
    """Client for the AwesomeAPI currency quote service.

    Returns the ``ask`` price of a currency pair, i.e. units of the
    quote currency (BRL) per unit of the base currency (USD).
    """

    DEFAULT_URL = "https://economia.awesomeapi.com.br"
    DEFAULT_PAIR = "USD-BRL"

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        pair: str = DEFAULT_PAIR,
        timeout: int = 10,
        max_retries: int = 3
    ):
        """Initialize the exchange rate client.

        Args:
            base_url: AwesomeAPI base URL
            pair: Currency pair in FROM-TO form (e.g., USD-BRL)
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
        """
        self.base_url = base_url.rstrip("/")
        self.pair = pair.upper()
        self.timeout = timeout

        # Set up session with retry logic
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        self.session.headers.update({"Accept": "application/json"})

    @property
    def response_key(self) -> str:
        """Key under which the API nests the quote (USD-BRL -> USDBRL)."""
        return self.pair.replace("-", "")

    def _make_request(self, endpoint: str) -> Dict[str, Any]:
        """Make a GET request to the quote service.

        Args:
            endpoint: API endpoint path

        Returns:
            JSON response data

        Raises:
            ExchangeRateError: On transport, HTTP or decoding errors
        """
        url = f"{self.base_url}/{endpoint}"

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        except requests.exceptions.HTTPError as e:
            logger.error(f"Quote API error: {e.response.status_code} - {e.response.text}")
            raise ExchangeRateError(f"Quote API returned HTTP {e.response.status_code}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Quote request failed: {e}")
            raise ExchangeRateError(f"Quote request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Quote API returned a non-JSON body: {e}")
            raise ExchangeRateError("Quote API returned a non-JSON body") from e

    def fetch_rate(self) -> float:
        """Fetch the latest quote for the configured pair.

        Returns:
            Ask price rounded to two decimals

        Raises:
            ExchangeRateError: If the quote is missing, non-numeric, not finite or not positive
        """
        data = self._make_request(f"last/{self.pair}")

        quote = data.get(self.response_key) if isinstance(data, dict) else None
        if not isinstance(quote, dict) or not quote.get("ask"):
            raise ExchangeRateError(f"Quote for {self.pair} missing from response")

        try:
            rate = round(float(quote["ask"]), 2)
        except (TypeError, ValueError) as e:
            raise ExchangeRateError(f"Invalid quote value: {quote['ask']!r}") from e

        if not math.isfinite(rate) or rate <= 0:
            raise ExchangeRateError(f"Quote must be a positive number, got {rate}")

        logger.info(f"Fetched {self.pair} quote: {rate:.2f}")
        return rate

    def test_connection(self) -> bool:
        """Test connectivity to the quote service.

        Returns:
            True if a quote could be fetched
        """
        try:
            self.fetch_rate()
            return True
        except ExchangeRateError as e:
            logger.error(f"Quote service connection test failed: {e}")
            return False
