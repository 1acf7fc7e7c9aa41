"""
SwapOrchestrator: one 0x Permit2 swap, start to finish.

The run is a fixed sequence of steps:

    list sources -> price -> allowance -> quote -> diagnostics
        -> sign permit -> splice signature -> sign and broadcast

Only the approval and permit-signing steps recover from errors (they
log and carry on). Missing signature or call data aborts the run before
anything is broadcast. API, parse and RPC errors elsewhere propagate.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from zeroex_swap.core.calldata import append_signature
from zeroex_swap.core.chain import ChainClient, ChainError
from zeroex_swap.core.client import PRICE_PATH, QUOTE_PATH, ZeroExClient
from zeroex_swap.core.config import SwapConfig
from zeroex_swap.core.models import PriceResponse, QuoteResponse, SwapRequest
from zeroex_swap.core.units import MAX_UINT256, parse_units
from zeroex_swap.core.wallet import Wallet, WalletError
from zeroex_swap.defi.chains import CHAINS, ChainPreset
from zeroex_swap.defi.diagnostics import render_quote_diagnostics

logger = logging.getLogger("zeroex_swap.orchestrator")


class SwapState(str, Enum):
    INIT = "init"
    SOURCES_LISTED = "sources_listed"
    PRICE_FETCHED = "price_fetched"
    ALLOWANCE_CHECKED = "allowance_checked"
    APPROVED = "approved"
    QUOTE_FETCHED = "quote_fetched"
    DIAGNOSTICS_RENDERED = "diagnostics_rendered"
    PERMIT_SIGNED = "permit_signed"
    DATA_SPLICED = "data_spliced"
    BROADCAST = "broadcast"
    ABORTED = "aborted"
    DRY_RUN = "dry_run"


class MissingDataError(Exception):
    """Raised when a signature or the transaction data is missing where required."""
    pass


@dataclass
class SwapOutcome:
    """How a run ended."""
    state: SwapState
    tx_hash: str | None = None
    explorer_url: str | None = None
    error: str | None = None
    history: list[SwapState] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state in (SwapState.BROADCAST, SwapState.DRY_RUN)


class SwapOrchestrator:
    """
    Runs a single swap of the chain preset's sell token for its buy token.

    Usage:
        config = SwapConfig.from_env()
        wallet = Wallet.from_private_key(config.private_key)
        with ZeroExClient(config.api_key) as client:
            chain = ChainClient(config.rpc_url, wallet)
            outcome = SwapOrchestrator(config, client, chain, wallet).run()
    """

    def __init__(
        self,
        config: SwapConfig,
        client: ZeroExClient,
        chain: ChainClient,
        wallet: Wallet,
        preset: ChainPreset | None = None,
        echo: Callable[[str], None] = print,
    ) -> None:
        self._config = config
        self._client = client
        self._chain = chain
        self._wallet = wallet
        self.preset = preset or CHAINS[config.chain]
        self._echo = echo
        self.state = SwapState.INIT
        self.history: list[SwapState] = [SwapState.INIT]

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    def run(self) -> SwapOutcome:
        """Execute every step once, in order."""
        self.list_liquidity_sources()
        request = self.build_request()
        price = self.fetch_price(request)
        self.ensure_allowance(price)
        quote = self.fetch_quote(request)
        self.render_diagnostics(quote)
        signature = self.sign_permit(quote)
        try:
            self.splice_signature(quote, signature)
        except MissingDataError as e:
            logger.error("%s", e)
            return self._finish(SwapState.ABORTED, error=str(e))
        return self.broadcast(quote, signature)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def list_liquidity_sources(self) -> list[str]:
        """Print the liquidity sources 0x can route through on this chain."""
        names = self._client.get_sources(self.preset.chain_id).names
        self._echo(f"Liquidity sources available for the {self.preset.name} chain:")
        self._echo(", ".join(names))
        self._advance(SwapState.SOURCES_LISTED)
        return names

    def build_request(self) -> SwapRequest:
        """Price/quote parameters, with the sell amount in base units."""
        decimals = self._chain.token_decimals(self.preset.sell_token.address)
        return SwapRequest(
            chain_id=self.preset.chain_id,
            sell_token=self.preset.sell_token.address,
            buy_token=self.preset.buy_token.address,
            sell_amount=parse_units(self._config.sell_amount, decimals),
            taker=self._wallet.address,
            affiliate_fee_bps=self._config.affiliate_fee_bps,
            surplus_collection=self._config.surplus_collection,
        )

    def fetch_price(self, request: SwapRequest) -> PriceResponse:
        price = self._client.get_price(request)
        self._echo(f"Fetching price to exchange {self._pair_label()}")
        self._echo(f"Request URL: {self._client.build_url(PRICE_PATH, request.to_query())}")
        self._echo(f"Price Response: {json.dumps(price.to_display(), indent=2)}")
        self._advance(SwapState.PRICE_FETCHED)
        return price

    def ensure_allowance(self, price: PriceResponse) -> bool:
        """
        Approve the Permit2 spender if the price says the allowance is missing.

        Approval errors are logged and swallowed: the quote and swap are still
        attempted and may then fail on-chain for lack of allowance.

        Returns:
            bool: True if an approval was mined in this run
        """
        symbol = self.preset.sell_token.symbol
        allowance = price.issues.allowance
        if allowance is None:
            self._echo(f"{symbol} is already approved for Permit2")
            self._advance(SwapState.ALLOWANCE_CHECKED)
            return False

        try:
            approval = self._chain.simulate_approve(
                self.preset.sell_token.address, allowance.spender, MAX_UINT256
            )
            self._echo(f"Approving Permit2 to spend {symbol}... {approval}")
            if self._config.dry_run:
                self._echo("Dry run: approval simulated, not submitted.")
                self._advance(SwapState.ALLOWANCE_CHECKED)
                return False
            tx_hash = self._chain.send_transaction(approval)
            receipt = self._chain.wait_for_receipt(tx_hash)
        except (ChainError, WalletError) as e:
            logger.error("Error during Permit2 approval: %s", e)
            self._advance(SwapState.ALLOWANCE_CHECKED)
            return False

        self._echo(f"Permit2 approved to spend {symbol}. {tx_hash} (block {receipt.get('blockNumber')})")
        self._advance(SwapState.ALLOWANCE_CHECKED)
        self._advance(SwapState.APPROVED)
        return True

    def fetch_quote(self, request: SwapRequest) -> QuoteResponse:
        quote = self._client.get_quote(request)
        self._echo(f"Fetching quote to exchange {self._pair_label()}")
        self._echo(f"Request URL: {self._client.build_url(QUOTE_PATH, request.to_query())}")
        self._echo(f"Quote Response: {json.dumps(quote.to_display(), indent=2)}")
        self._advance(SwapState.QUOTE_FETCHED)
        return quote

    def render_diagnostics(self, quote: QuoteResponse) -> list[str]:
        lines = render_quote_diagnostics(quote)
        for line in lines:
            self._echo(line)
        self._advance(SwapState.DIAGNOSTICS_RENDERED)
        return lines

    def sign_permit(self, quote: QuoteResponse) -> bytes | None:
        """
        Sign the quote's Permit2 EIP-712 message, if it has one.

        Returns None when there is nothing to sign or signing failed.
        """
        typed_data = quote.permit_typed_data
        if typed_data is None:
            return None
        try:
            signature = self._wallet.sign_typed_data(typed_data)
        except WalletError as e:
            logger.error("Error signing Permit2 message: %s", e)
            return None
        self._echo("Signed the permit2 message from the quote response")
        self._advance(SwapState.PERMIT_SIGNED)
        return signature

    def splice_signature(self, quote: QuoteResponse, signature: bytes | None) -> None:
        """
        Append the length-prefixed Permit2 signature to the quote's call data.

        Only applies to quotes that carry a Permit2 payload. Mutates
        `quote.transaction.data` in place.

        Raises:
            MissingDataError: if the signature or the call data is missing
        """
        if quote.permit_typed_data is None:
            return
        if signature is None or quote.transaction is None or not quote.transaction.data:
            raise MissingDataError("Failed to retrieve signature or transaction data")
        quote.transaction.data = append_signature(quote.transaction.data, signature)
        self._advance(SwapState.DATA_SPLICED)

    def broadcast(self, quote: QuoteResponse, signature: bytes | None) -> SwapOutcome:
        """Sign the quote's transaction with a fresh nonce and send it."""
        if signature is None or quote.transaction is None or not quote.transaction.data:
            message = "Failed to acquire a signature, transaction not executed."
            logger.error(message)
            return self._finish(SwapState.ABORTED, error=message)

        nonce = self._chain.get_transaction_count(self._wallet.address)
        tx = self._chain.prepare_transaction(quote.transaction, nonce)
        raw = self._wallet.sign_transaction(tx)

        if self._config.dry_run:
            self._echo("Dry run: swap transaction signed, not broadcast.")
            return self._finish(SwapState.DRY_RUN)

        tx_hash = self._chain.send_raw_transaction(raw)
        explorer_url = self.preset.tx_url(tx_hash)
        self._echo(f"Transaction hash: {tx_hash}")
        self._echo(f"View transaction details at {explorer_url}")
        return self._finish(SwapState.BROADCAST, tx_hash=tx_hash, explorer_url=explorer_url)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _pair_label(self) -> str:
        return f"{self._config.sell_amount} {self.preset.sell_token.symbol} for {self.preset.buy_token.symbol}"

    def _advance(self, state: SwapState) -> None:
        logger.debug("swap state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _finish(
        self,
        state: SwapState,
        tx_hash: str | None = None,
        explorer_url: str | None = None,
        error: str | None = None,
    ) -> SwapOutcome:
        self._advance(state)
        return SwapOutcome(
            state=state,
            tx_hash=tx_hash,
            explorer_url=explorer_url,
            error=error,
            history=list(self.history),
        )
