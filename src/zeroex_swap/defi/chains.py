"""
Chain presets: chain id, explorer and the token pair swapped by default.

Scroll is the only preset today. The WETH -> wstETH pair matches the
0x Scroll challenge walkthrough.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TokenInfo:
    symbol: str
    address: str


@dataclass(frozen=True)
class ChainPreset:
    """Static data about a chain the swap can run on."""
    name: str
    chain_id: int
    explorer_url: str
    sell_token: TokenInfo
    buy_token: TokenInfo

    def tx_url(self, tx_hash: str) -> str:
        """Explorer link for a transaction hash."""
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"


SCROLL = ChainPreset(
    name="Scroll",
    chain_id=534352,
    explorer_url="https://scrollscan.com",
    sell_token=TokenInfo("WETH", "0x5300000000000000000000000000000000000004"),
    buy_token=TokenInfo("wstETH", "0xf610A9dfB7C89644979b4A0f27063E9e7d7Cda32"),
)

CHAINS: dict[str, ChainPreset] = {
    "scroll": SCROLL,
}


# Minimal ERC-20 ABI: only what the swap flow reads or calls
ERC20_ABI: list[dict[str, Any]] = [
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
