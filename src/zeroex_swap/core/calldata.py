"""
Permit2 call data helpers.

The 0x Settler contract expects the Permit2 signature appended to the
quote's call data, preceded by its length as a uint256:

    data || uint256(len(signature)) || signature
"""

from __future__ import annotations

from eth_utils import encode_hex, to_bytes

SIGNATURE_LENGTH_BYTES = 32


def signature_length_prefix(signature: bytes) -> bytes:
    """32-byte unsigned big-endian length of the signature."""
    return len(signature).to_bytes(SIGNATURE_LENGTH_BYTES, "big")


def append_signature(data: str, signature: bytes) -> str:
    """
    Return `data` with the length-prefixed signature appended.

    Args:
        data: 0x-prefixed hex call data from the quote
        signature: raw signature bytes

    Returns:
        str: 0x-prefixed hex call data
    """
    if not data or not signature:
        raise ValueError("Both transaction data and signature are required.")
    payload = to_bytes(hexstr=data)
    return encode_hex(payload + signature_length_prefix(signature) + signature)
