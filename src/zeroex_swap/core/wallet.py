"""
Wallet: private key management and signing for EVM chains.

Private keys never leave this module. Callers only get the address,
signatures and raw signed transactions.
"""

from __future__ import annotations

from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount


class WalletError(Exception):
    pass


class Wallet:
    """
    EVM wallet backed by a local private key.

    Usage:
        wallet = Wallet.from_private_key(os.environ["PRIVATE_KEY"])
        signature = wallet.sign_typed_data(quote.permit2.eip712)
        raw_tx = wallet.sign_transaction(tx)
    """

    def __init__(self, account: LocalAccount) -> None:
        self._account = account

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_private_key(cls, private_key: str) -> Wallet:
        """
        Load a wallet from a hex private key.

        Args:
            private_key: 32-byte key as hex, with or without the 0x prefix
        """
        key = private_key.strip()
        if not key.startswith("0x"):
            key = f"0x{key}"
        try:
            account = Account.from_key(key)
        except Exception as e:
            raise WalletError(f"Invalid private key: {e}") from None
        return cls(account)

    @property
    def address(self) -> str:
        """Checksummed address of the account."""
        return self._account.address

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign_typed_data(self, typed_data: dict[str, Any]) -> bytes:
        """
        Sign an EIP-712 message (e.g. the Permit2 payload of a 0x quote).

        Args:
            typed_data: full message with 'types', 'domain', 'primaryType', 'message'

        Returns:
            bytes: 65-byte r || s || v signature
        """
        try:
            signed = self._account.sign_typed_data(full_message=typed_data)
        except Exception as e:
            raise WalletError(f"Typed data signing failed: {e}") from e
        return bytes(signed.signature)

    def sign_transaction(self, tx: dict[str, Any]) -> bytes:
        """
        Sign a transaction dict.

        Returns:
            bytes: raw signed transaction, ready for eth_sendRawTransaction
        """
        try:
            signed = self._account.sign_transaction(tx)
        except Exception as e:
            raise WalletError(f"Transaction signing failed: {e}") from e
        # eth-account renamed rawTransaction to raw_transaction in 0.13
        raw = getattr(signed, "raw_transaction", None) or getattr(signed, "rawTransaction")
        return bytes(raw)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"Wallet(address={self.address!r})"
