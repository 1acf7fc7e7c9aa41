"""
zeroex-swap: execute a single token swap through the 0x Permit2 API.

Usage:
    from zeroex_swap import SwapConfig, SwapOrchestrator, Wallet, ZeroExClient, ChainClient
"""

from zeroex_swap.core.chain import ChainClient
from zeroex_swap.core.client import ZeroExClient
from zeroex_swap.core.config import SwapConfig
from zeroex_swap.core.wallet import Wallet
from zeroex_swap.orchestrator import SwapOrchestrator, SwapOutcome, SwapState

__version__ = "0.1.0"
__all__ = [
    "ChainClient",
    "SwapConfig",
    "SwapOrchestrator",
    "SwapOutcome",
    "SwapState",
    "Wallet",
    "ZeroExClient",
]
