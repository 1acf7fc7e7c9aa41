"""
SwapConfig: run configuration, validated once at startup.

Secrets come from the environment (optionally a .env file) and are
never echoed back.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from dotenv import dotenv_values, find_dotenv

from zeroex_swap.core.client import DEFAULT_API_URL
from zeroex_swap.core.models import BPS_PER_UNIT
from zeroex_swap.defi.chains import CHAINS

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


@dataclass
class SwapConfig:
    """
    Everything a swap run needs from the outside world.

    Args:
        private_key:        hex private key of the taker (with or without 0x)
        api_key:            0x API key
        rpc_url:            HTTP JSON-RPC endpoint for the chain
        api_url:            0x API base URL
        chain:              chain preset name (see zeroex_swap.defi.chains)
        sell_amount:        amount of the sell token, in whole tokens
        affiliate_fee_bps:  affiliate fee requested from the API
        surplus_collection: let the API keep positive slippage
        dry_run:            simulate approvals and sign, but never submit
        timeout:            HTTP timeout for API calls, in seconds
    """
    private_key: str = field(default="", repr=False)
    api_key: str = field(default="", repr=False)
    rpc_url: str = ""
    api_url: str = DEFAULT_API_URL
    chain: str = "scroll"
    sell_amount: str = "0.1"
    affiliate_fee_bps: int = 100
    surplus_collection: bool = True
    dry_run: bool = False
    timeout: float = 15.0

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        dotenv_path: str | None = None,
        validate: bool = True,
    ) -> SwapConfig:
        """
        Build a config from environment variables.

        Values from a .env file (default: ./.env) fill in anything the
        real environment does not set. Pass `env` to read from a plain
        mapping instead of os.environ. With `validate=False` the caller
        must call `validate()` once its own overrides are applied.
        """
        values: dict[str, str] = {}
        if env is None:
            file_values = dotenv_values(dotenv_path or find_dotenv(usecwd=True))
            values.update({k: v for k, v in file_values.items() if v is not None})
            env = os.environ
        values.update(env)

        config = cls(
            private_key=values.get("PRIVATE_KEY", ""),
            api_key=values.get("ZERO_EX_API_KEY", ""),
            rpc_url=values.get("ALCHEMY_HTTP_TRANSPORT_URL", ""),
            api_url=values.get("ZERO_EX_API_URL") or DEFAULT_API_URL,
            chain=values.get("SWAP_CHAIN") or "scroll",
            sell_amount=values.get("SWAP_SELL_AMOUNT") or "0.1",
            affiliate_fee_bps=_parse_int("SWAP_AFFILIATE_FEE_BPS", values.get("SWAP_AFFILIATE_FEE_BPS"), 100),
            surplus_collection=_parse_bool("SWAP_SURPLUS_COLLECTION", values.get("SWAP_SURPLUS_COLLECTION"), True),
            dry_run=_parse_bool("SWAP_DRY_RUN", values.get("SWAP_DRY_RUN"), False),
            timeout=_parse_float("SWAP_HTTP_TIMEOUT", values.get("SWAP_HTTP_TIMEOUT"), 15.0),
        )
        if validate:
            config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigError on the first missing or invalid setting."""
        if not self.private_key:
            raise ConfigError("Private key is missing.")
        if not self.api_key:
            raise ConfigError("Zero Ex API key is missing.")
        if not self.rpc_url:
            raise ConfigError("Alchemy HTTP transport URL is missing.")

        if self.chain not in CHAINS:
            raise ConfigError(
                f"Unknown chain '{self.chain}'. Known chains: {', '.join(sorted(CHAINS))}"
            )

        try:
            amount = Decimal(self.sell_amount)
        except InvalidOperation:
            raise ConfigError(f"Sell amount '{self.sell_amount}' is not a number.") from None
        if not amount.is_finite() or amount <= 0:
            raise ConfigError(f"Sell amount must be positive, got {self.sell_amount}.")

        if not 0 <= self.affiliate_fee_bps <= BPS_PER_UNIT:
            raise ConfigError(
                f"Affiliate fee must be between 0 and {BPS_PER_UNIT} bps, got {self.affiliate_fee_bps}."
            )
        if self.timeout <= 0:
            raise ConfigError(f"HTTP timeout must be positive, got {self.timeout}.")


def _parse_bool(name: str, raw: str | None, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{raw}'.")


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'.") from None


def _parse_float(name: str, raw: str | None, default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got '{raw}'.") from None
