"""
Shared 0x API payloads for the unit tests.
Shapes follow real /swap/permit2 responses on Scroll, trimmed.
"""

import copy

import pytest

WETH = "0x5300000000000000000000000000000000000004"
WSTETH = "0xf610A9dfB7C89644979b4A0f27063E9e7d7Cda32"
PERMIT2 = "0x000000000022d473030f116ddee9f6b43ac78ba3"
SETTLER = "0x0000000000001ff3684f28c67538d4d072c22734"
TAKER = "0x1111111111111111111111111111111111111111"

PERMIT_TYPED_DATA = {
    "types": {
        "EIP712Domain": [
            {"name": "name", "type": "string"},
            {"name": "chainId", "type": "uint256"},
            {"name": "verifyingContract", "type": "address"},
        ],
        "PermitTransferFrom": [
            {"name": "permitted", "type": "TokenPermissions"},
            {"name": "spender", "type": "address"},
            {"name": "nonce", "type": "uint256"},
            {"name": "deadline", "type": "uint256"},
        ],
        "TokenPermissions": [
            {"name": "token", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
    },
    "domain": {
        "name": "Permit2",
        "chainId": 534352,
        "verifyingContract": PERMIT2,
    },
    "primaryType": "PermitTransferFrom",
    "message": {
        "permitted": {"token": WETH, "amount": 100000000000000000},
        "spender": SETTLER,
        "nonce": 1,
        "deadline": 1735689600,
    },
}

_PRICE = {
    "liquidityAvailable": True,
    "buyToken": WSTETH,
    "sellToken": WETH,
    "buyAmount": "84379012838291021",
    "sellAmount": "100000000000000000",
    "blockNumber": "11823456",
    "route": {
        "fills": [
            {"from": WETH, "to": WSTETH, "source": "Ambient", "proportionBps": "6000"},
            {"from": WETH, "to": WSTETH, "source": "Uniswap_V3", "proportionBps": "4000"},
        ],
        "tokens": [
            {"address": WETH, "symbol": "WETH"},
            {"address": WSTETH, "symbol": "wstETH"},
        ],
    },
    "tokenMetadata": {
        "buyToken": {"buyTaxBps": "0", "sellTaxBps": "0"},
        "sellToken": {"buyTaxBps": "0", "sellTaxBps": "0"},
    },
    "affiliateFeeBps": "100",
    "tradeSurplus": "0",
    "issues": {
        "allowance": None,
        "balance": None,
        "simulationIncomplete": False,
        "invalidSourcesPassed": [],
    },
}

_QUOTE = {
    **_PRICE,
    "permit2": {
        "type": "Permit2",
        "hash": "0x" + "ab" * 32,
        "eip712": PERMIT_TYPED_DATA,
    },
    "transaction": {
        "to": SETTLER,
        "data": "0x1fff991f" + "00" * 32,
        "gas": "288079",
        "gasPrice": "40000000",
        "value": "0",
    },
}


@pytest.fixture
def price_payload():
    return copy.deepcopy(_PRICE)


@pytest.fixture
def quote_payload():
    return copy.deepcopy(_QUOTE)


@pytest.fixture
def permit_typed_data():
    return copy.deepcopy(PERMIT_TYPED_DATA)
