"""
Chain presets and quote diagnostics for the swap flow.
"""
from .chains import CHAINS, ERC20_ABI, SCROLL, ChainPreset, TokenInfo
from .diagnostics import (
    affiliate_fee_line,
    format_bps,
    liquidity_source_lines,
    render_quote_diagnostics,
    token_tax_lines,
    trade_surplus_line,
)

__all__ = [
    "CHAINS",
    "ChainPreset",
    "ERC20_ABI",
    "SCROLL",
    "TokenInfo",
    "affiliate_fee_line",
    "format_bps",
    "liquidity_source_lines",
    "render_quote_diagnostics",
    "token_tax_lines",
    "trade_surplus_line",
]
