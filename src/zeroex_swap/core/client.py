"""
ZeroExClient: REST client for the 0x swap API (Permit2 endpoints).

Docs: https://0x.org/docs/api
"""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from zeroex_swap.core.models import (
    ApiModel,
    PriceResponse,
    QuoteResponse,
    SourcesResponse,
    SwapRequest,
)

DEFAULT_API_URL = "https://api.0x.org"
API_VERSION = "v2"

SOURCES_PATH = "/swap/v1/sources"
PRICE_PATH = "/swap/permit2/price"
QUOTE_PATH = "/swap/permit2/quote"

logger = logging.getLogger("zeroex_swap.client")

M = TypeVar("M", bound=ApiModel)


class ZeroExAPIError(Exception):
    """Raised when the 0x API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseParseError(ZeroExAPIError):
    """Raised when a 0x API response is not valid JSON or does not match its schema."""
    pass


class ZeroExClient:
    """
    Synchronous client for the 0x swap API.

    Every request is attempted exactly once; there is no retry.

    Usage:
        with ZeroExClient(api_key="...") as client:
            sources = client.get_sources(534352)
            price = client.get_price(request)
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        headers = {
            "Content-Type": "application/json",
            "0x-api-key": api_key,
            "0x-version": API_VERSION,
        }
        self._client = httpx.Client(headers=headers, timeout=timeout, transport=transport)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def get_sources(self, chain_id: int) -> SourcesResponse:
        """Return the liquidity sources available on a chain."""
        return self._get(SOURCES_PATH, {"chainId": str(chain_id)}, SourcesResponse)

    def get_price(self, request: SwapRequest) -> PriceResponse:
        """
        Fetch an indicative price. Nothing is reserved or signed.

        Returns:
            PriceResponse: includes `issues.allowance` when the taker still
            has to approve the Permit2 contract.
        """
        return self._get(PRICE_PATH, request.to_query(), PriceResponse)

    def get_quote(self, request: SwapRequest) -> QuoteResponse:
        """
        Fetch a firm quote with the same parameters as the price.

        Returns:
            QuoteResponse: includes the transaction to send and the
            Permit2 EIP-712 message to sign.
        """
        return self._get(QUOTE_PATH, request.to_query(), QuoteResponse)

    def build_url(self, path: str, params: dict[str, str]) -> str:
        """Full request URL, with the query string encoded."""
        return str(httpx.URL(f"{self.api_url}{path}", params=params))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get(self, path: str, params: dict[str, str], model: type[M]) -> M:
        url = f"{self.api_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise ZeroExAPIError(f"Request to {url} failed: {e}") from e

        if response.status_code != 200:
            raise ZeroExAPIError(
                f"API error {response.status_code} for {url}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data: Any = response.json()
        except json.JSONDecodeError as e:
            raise ResponseParseError(
                f"Invalid JSON from {url}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        try:
            return model.from_response(data)
        except ValidationError as e:
            raise ResponseParseError(
                f"Unexpected {model.__name__} payload from {url}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> ZeroExClient:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()
