"""
Data models for the 0x swap API (Permit2 flow).

The API speaks camelCase JSON with most numbers encoded as strings.
Models accept both spellings and keep unknown fields. Payloads built
from a response also keep the decoded body, which is what gets echoed.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

BPS_PER_UNIT = 10_000


class ApiModel(BaseModel):
    """Base for every payload returned by the 0x API."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    _raw: Any = PrivateAttr(default=None)

    @classmethod
    def from_response(cls, data: Any):
        """Validate a decoded response body and keep the body itself for display."""
        model = cls.model_validate(data)
        model._raw = data
        return model

    def to_display(self) -> Any:
        """
        What to print for this payload.

        The body exactly as the API sent it when there is one, otherwise
        the model in wire spelling.
        """
        if self._raw is not None:
            return self._raw
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SourcesResponse(ApiModel):
    """Liquidity sources the API can route through on one chain."""
    sources: dict[str, Any]

    @property
    def names(self) -> list[str]:
        return list(self.sources)


class Fill(ApiModel):
    """One venue's share of a route."""
    source: str
    proportion_bps: int = Field(alias="proportionBps")
    from_token: str | None = Field(default=None, alias="from")
    to_token: str | None = Field(default=None, alias="to")


class Route(ApiModel):
    fills: list[Fill] = Field(default_factory=list)
    tokens: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def total_bps(self) -> int:
        return sum(fill.proportion_bps for fill in self.fills)


class TokenTax(ApiModel):
    """Buy/sell tax of a fee-on-transfer token, in basis points."""
    buy_tax_bps: int | None = Field(default=None, alias="buyTaxBps")
    sell_tax_bps: int | None = Field(default=None, alias="sellTaxBps")


class TokenMetadata(ApiModel):
    buy_token: TokenTax = Field(default_factory=TokenTax, alias="buyToken")
    sell_token: TokenTax = Field(default_factory=TokenTax, alias="sellToken")


class AllowanceIssue(ApiModel):
    """The taker has not approved `spender` for the sell token."""
    spender: str
    actual: int | None = None


class Issues(ApiModel):
    allowance: AllowanceIssue | None = None
    balance: dict[str, Any] | None = None
    simulation_incomplete: bool = Field(default=False, alias="simulationIncomplete")
    invalid_sources_passed: list[str] = Field(default_factory=list, alias="invalidSourcesPassed")


class Permit2(ApiModel):
    type: str | None = None
    hash: str | None = None
    eip712: dict[str, Any] | None = None


class TransactionRequest(ApiModel):
    """Transaction the taker must sign and send to settle the swap."""
    to: str
    data: str | None = None
    value: int | None = None
    gas: int | None = None
    gas_price: int | None = Field(default=None, alias="gasPrice")


class PriceResponse(ApiModel):
    """Indicative price. Shares its shape with the firm quote."""
    liquidity_available: bool = Field(default=True, alias="liquidityAvailable")
    buy_token: str | None = Field(default=None, alias="buyToken")
    sell_token: str | None = Field(default=None, alias="sellToken")
    buy_amount: int | None = Field(default=None, alias="buyAmount")
    sell_amount: int | None = Field(default=None, alias="sellAmount")
    route: Route | None = None
    token_metadata: TokenMetadata | None = Field(default=None, alias="tokenMetadata")
    affiliate_fee_bps: int | None = Field(default=None, alias="affiliateFeeBps")
    trade_surplus: Decimal | None = Field(default=None, alias="tradeSurplus")
    issues: Issues = Field(default_factory=Issues)
    permit2: Permit2 | None = None
    transaction: TransactionRequest | None = None


class QuoteResponse(PriceResponse):
    """Firm quote: carries the transaction and the Permit2 payload to sign."""

    @property
    def permit_typed_data(self) -> dict[str, Any] | None:
        return self.permit2.eip712 if self.permit2 else None


class SwapRequest(BaseModel):
    """Parameters shared by the price and quote endpoints."""
    chain_id: int
    sell_token: str
    buy_token: str
    sell_amount: int
    taker: str
    affiliate_fee_bps: int = Field(default=100, ge=0, le=BPS_PER_UNIT)
    surplus_collection: bool = True

    def to_query(self) -> dict[str, str]:
        """Query string parameters, in the order the API documents them."""
        return {
            "chainId": str(self.chain_id),
            "sellToken": self.sell_token,
            "buyToken": self.buy_token,
            "sellAmount": str(self.sell_amount),
            "taker": self.taker,
            "affiliateFee": str(self.affiliate_fee_bps),
            "surplusCollection": "true" if self.surplus_collection else "false",
        }
