"""
Console diagnostics for a 0x quote.

Every function here is pure: it turns quote data into printable lines
and leaves the printing to the caller.
"""

from __future__ import annotations

from decimal import Decimal

from zeroex_swap.core.models import QuoteResponse, Route, TokenMetadata, TokenTax


def format_bps(bps: int | None) -> str:
    """Basis points as a percentage with two decimals (50 -> "0.50")."""
    return f"{(bps or 0) / 100:.2f}"


def liquidity_source_lines(route: Route) -> list[str]:
    """Share of the swap routed through each liquidity source."""
    lines = [f"{len(route.fills)} Sources Available"]
    for fill in route.fills:
        lines.append(f"{fill.source}: {format_bps(fill.proportion_bps)}%")
    return lines


def _tax_lines(label: str, tax: TokenTax) -> list[str]:
    buy_tax = tax.buy_tax_bps or 0
    sell_tax = tax.sell_tax_bps or 0
    if buy_tax <= 0 and sell_tax <= 0:
        return []
    return [
        f"{label} Buy Tax: {format_bps(buy_tax)}%",
        f"{label} Sell Tax: {format_bps(sell_tax)}%",
    ]


def token_tax_lines(metadata: TokenMetadata) -> list[str]:
    """
    Buy/sell taxes of the buy and sell token.

    A token's pair of lines is only shown when one of its taxes is non-zero.
    """
    return _tax_lines("Buy Token", metadata.buy_token) + _tax_lines("Sell Token", metadata.sell_token)


def affiliate_fee_line(affiliate_fee_bps: int | None) -> str | None:
    if affiliate_fee_bps is None:
        return None
    return f"Affiliate Fee: {format_bps(affiliate_fee_bps)}%"


def trade_surplus_line(trade_surplus: Decimal | None) -> str | None:
    if trade_surplus is None or trade_surplus <= 0:
        return None
    return f"Trade Surplus Collected: {trade_surplus}"


def render_quote_diagnostics(quote: QuoteResponse) -> list[str]:
    """All diagnostic lines for a quote: route, taxes, fee, surplus."""
    lines: list[str] = []
    if quote.route is not None:
        lines.extend(liquidity_source_lines(quote.route))
    if quote.token_metadata is not None:
        lines.extend(token_tax_lines(quote.token_metadata))
    for line in (
        affiliate_fee_line(quote.affiliate_fee_bps),
        trade_surplus_line(quote.trade_surplus),
    ):
        if line is not None:
            lines.append(line)
    return lines
