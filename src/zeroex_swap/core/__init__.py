"""core module init"""
from zeroex_swap.core.calldata import append_signature, signature_length_prefix
from zeroex_swap.core.chain import ChainClient, ChainError
from zeroex_swap.core.client import ResponseParseError, ZeroExAPIError, ZeroExClient
from zeroex_swap.core.config import ConfigError, SwapConfig
from zeroex_swap.core.models import (
    AllowanceIssue,
    Fill,
    Issues,
    Permit2,
    PriceResponse,
    QuoteResponse,
    Route,
    SourcesResponse,
    SwapRequest,
    TokenMetadata,
    TokenTax,
    TransactionRequest,
)
from zeroex_swap.core.units import MAX_UINT256, parse_units
from zeroex_swap.core.wallet import Wallet, WalletError

__all__ = [
    "AllowanceIssue",
    "ChainClient",
    "ChainError",
    "ConfigError",
    "Fill",
    "Issues",
    "MAX_UINT256",
    "Permit2",
    "PriceResponse",
    "QuoteResponse",
    "ResponseParseError",
    "Route",
    "SourcesResponse",
    "SwapConfig",
    "SwapRequest",
    "TokenMetadata",
    "TokenTax",
    "TransactionRequest",
    "Wallet",
    "WalletError",
    "ZeroExAPIError",
    "ZeroExClient",
    "append_signature",
    "parse_units",
    "signature_length_prefix",
]
