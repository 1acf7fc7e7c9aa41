#!/usr/bin/env python3
"""
Example 01: Swap 0.1 WETH for wstETH on Scroll through 0x.

Walks through the whole Permit2 flow step by step: sources, price,
allowance, quote, diagnostics, permit signature and broadcast.

Requires PRIVATE_KEY, ZERO_EX_API_KEY and ALCHEMY_HTTP_TRANSPORT_URL
in the environment or in a .env file.

Usage:
    python examples/01_swap_weth_for_wsteth.py
    SWAP_DRY_RUN=true python examples/01_swap_weth_for_wsteth.py
"""

import sys

if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(errors="replace")

from zeroex_swap import ChainClient, SwapConfig, SwapOrchestrator, Wallet, ZeroExClient
from zeroex_swap.orchestrator import MissingDataError

config = SwapConfig.from_env()
wallet = Wallet.from_private_key(config.private_key)
client = ZeroExClient(config.api_key, api_url=config.api_url, timeout=config.timeout)
chain = ChainClient(config.rpc_url, wallet)

print(f"Taker:   {wallet.address}")
print(f"Dry run: {config.dry_run}")
print("-" * 60)

swap = SwapOrchestrator(config, client, chain, wallet)

# Run the steps one by one instead of swap.run() to show the flow
swap.list_liquidity_sources()
request = swap.build_request()
price = swap.fetch_price(request)
swap.ensure_allowance(price)
quote = swap.fetch_quote(request)
swap.render_diagnostics(quote)
signature = swap.sign_permit(quote)
try:
    swap.splice_signature(quote, signature)
    outcome = swap.broadcast(quote, signature)
except MissingDataError as e:
    print(f"Aborted: {e}")
    client.close()
    sys.exit(1)

print("-" * 60)
print(f"Result:  {outcome.state.value}")
print(f"Path:    {' -> '.join(s.value for s in outcome.history)}")

client.close()
sys.exit(0 if outcome.succeeded else 1)
