"""
Command-line entry point: run one swap and exit.

Usage:
    zeroex-swap
    zeroex-swap --amount 0.05 --dry-run
    python -m zeroex_swap --env-file ./scroll.env -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from zeroex_swap.core.chain import ChainClient
from zeroex_swap.core.client import ZeroExClient
from zeroex_swap.core.config import ConfigError, SwapConfig
from zeroex_swap.core.wallet import Wallet, WalletError
from zeroex_swap.orchestrator import SwapOrchestrator

logger = logging.getLogger("zeroex_swap.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zeroex-swap",
        description="Swap tokens once through the 0x Permit2 API.",
    )
    parser.add_argument("--env-file", help="path to a .env file (default: ./.env if present)")
    parser.add_argument("--amount", help="sell amount in whole tokens (default: SWAP_SELL_AMOUNT or 0.1)")
    parser.add_argument("--chain", help="chain preset (default: SWAP_CHAIN or scroll)")
    parser.add_argument("--dry-run", action="store_true", help="sign everything, submit nothing")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def load_config(args: argparse.Namespace) -> SwapConfig:
    """Environment config with command-line overrides applied, validated."""
    config = SwapConfig.from_env(dotenv_path=args.env_file, validate=False)
    overrides = {}
    if args.amount is not None:
        overrides["sell_amount"] = args.amount
    if args.chain is not None:
        overrides["chain"] = args.chain
    if args.dry_run:
        overrides["dry_run"] = True
    if overrides:
        config = replace(config, **overrides)
    config.validate()
    return config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
        wallet = Wallet.from_private_key(config.private_key)
    except (ConfigError, WalletError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    with ZeroExClient(config.api_key, api_url=config.api_url, timeout=config.timeout) as client:
        chain = ChainClient(config.rpc_url, wallet)
        outcome = SwapOrchestrator(config, client, chain, wallet).run()

    logger.info("swap finished: %s", outcome.state.value)
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
