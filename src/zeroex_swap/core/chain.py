"""
ChainClient: JSON-RPC access to the swap chain through web3.

Covers the handful of on-chain interactions a swap needs: token
decimals, the ERC-20 approval for Permit2, nonces and raw broadcast.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from zeroex_swap.core.models import TransactionRequest
from zeroex_swap.core.units import MAX_UINT256
from zeroex_swap.core.wallet import Wallet
from zeroex_swap.defi.chains import ERC20_ABI

logger = logging.getLogger("zeroex_swap.chain")


class ChainError(Exception):
    """Raised when an RPC call, simulation or transaction fails."""
    pass


class ChainClient:
    """
    Synchronous chain access for one wallet.

    Usage:
        chain = ChainClient(rpc_url, wallet)
        decimals = chain.token_decimals(weth_address)
        tx = chain.simulate_approve(weth_address, spender)
        chain.wait_for_receipt(chain.send_transaction(tx))
    """

    def __init__(
        self,
        rpc_url: str,
        wallet: Wallet,
        web3: Web3 | None = None,
        receipt_timeout: float = 120.0,
    ) -> None:
        self._w3 = web3 or Web3(Web3.HTTPProvider(rpc_url))
        self._wallet = wallet
        self._receipt_timeout = receipt_timeout
        self._chain_id: int | None = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = int(self._call("eth_chainId", lambda: self._w3.eth.chain_id))
        return self._chain_id

    def token_decimals(self, token: str) -> int:
        """Return the ERC-20 `decimals()` of a token."""
        return int(self._call("decimals", lambda: self._erc20(token).functions.decimals().call()))

    def get_transaction_count(self, address: str) -> int:
        """Return the next nonce for an address."""
        return int(self._call(
            "eth_getTransactionCount",
            lambda: self._w3.eth.get_transaction_count(Web3.to_checksum_address(address)),
        ))

    # ------------------------------------------------------------------
    # Approval
    # ------------------------------------------------------------------

    def simulate_approve(self, token: str, spender: str, amount: int = MAX_UINT256) -> dict[str, Any]:
        """
        Dry-run `approve(spender, amount)` from the wallet, then build it.

        Raises:
            ChainError: if the call reverts or the RPC rejects it

        Returns:
            dict: the unsigned approval transaction
        """
        call = self._call(
            "approve encoding",
            lambda: self._erc20(token).functions.approve(Web3.to_checksum_address(spender), amount),
        )
        sender = {"from": self._wallet.address}

        self._call("approve simulation", lambda: call.call(sender))
        return self._call(
            "approve build",
            lambda: call.build_transaction({
                **sender,
                "chainId": self.chain_id,
                "nonce": self.get_transaction_count(self._wallet.address),
            }),
        )

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def prepare_transaction(self, tx: TransactionRequest, nonce: int) -> dict[str, Any]:
        """
        Turn a quote's transaction into a signable dict.

        Missing gas is estimated and a missing gas price is read from the node.
        """
        prepared: dict[str, Any] = {
            "from": self._wallet.address,
            "to": self._call("transaction target", lambda: Web3.to_checksum_address(tx.to)),
            "data": tx.data or "0x",
            "value": tx.value or 0,
            "nonce": nonce,
            "chainId": self.chain_id,
        }
        prepared["gas"] = tx.gas if tx.gas is not None else int(
            self._call("eth_estimateGas", lambda: self._w3.eth.estimate_gas(prepared))
        )
        prepared["gasPrice"] = tx.gas_price if tx.gas_price is not None else int(
            self._call("eth_gasPrice", lambda: self._w3.eth.gas_price)
        )
        return prepared

    def send_transaction(self, tx: dict[str, Any]) -> str:
        """Sign a transaction with the wallet and broadcast it."""
        return self.send_raw_transaction(self._wallet.sign_transaction(tx))

    def send_raw_transaction(self, raw: bytes) -> str:
        """Broadcast a signed transaction. Returns the 0x-prefixed hash."""
        tx_hash = self._call("eth_sendRawTransaction", lambda: self._w3.eth.send_raw_transaction(raw))
        return Web3.to_hex(tx_hash)

    def wait_for_receipt(self, tx_hash: str) -> dict[str, Any]:
        """
        Block until the transaction is mined.

        Raises:
            ChainError: on timeout or if the transaction reverted
        """
        receipt = self._call(
            "receipt",
            lambda: self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self._receipt_timeout),
        )
        if receipt.get("status") == 0:
            raise ChainError(f"Transaction {tx_hash} reverted.")
        return dict(receipt)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _erc20(self, token: str) -> Any:
        return self._w3.eth.contract(address=Web3.to_checksum_address(token), abi=ERC20_ABI)

    def _call(self, what: str, fn: Callable[[], Any]) -> Any:
        try:
            return fn()
        except (Web3Exception, ValueError, requests.RequestException) as e:
            logger.debug("%s failed: %s", what, e)
            raise ChainError(f"{what} failed: {e}") from e
