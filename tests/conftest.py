import json

import httpx
import pytest

from base_analyzer.cache.manager import tx_cache
from base_analyzer.decoding import signatures as sig
from base_analyzer.models.log import RawLog


@pytest.fixture(autouse=True)
def clear_cache():
    tx_cache.clear()
    yield
    tx_cache.clear()


USER = "0x" + "11" * 20
OTHER = "0x" + "22" * 20
UNKNOWN_CONTRACT = "0x" + "33" * 20

WETH = "0x4200000000000000000000000000000000000006"
USDC = "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"
UNISWAP_ROUTER = "0x2626664c2603336e57b271c5c0b26f421741e481"
AERODROME_ROUTER = "0xcf77a3ba9a5ca399b7c97c74d54e5b1beb874e43"
COMPOUND_USDC = "0x9c4ec768c28520b50860ea7a15bd7213a9ff58bf"
L1_BRIDGE = "0x3154cf16ccdb4c6d922629664174b904d80f2c35"
L2_BRIDGE = "0x4200000000000000000000000000000000000010"
PORTAL = "0x49048044d57e1c92a77f79988d21fa8faf74e97e"
SEAPORT = "0x00000000000000adc04c56bf30ac9d3c0aaf14dc"


def _pad_address(addr: str) -> str:
    return "0x" + addr[2:].lower().zfill(64)


def _encode_uint256(value: int) -> str:
    return format(value, "064x")


def transfer_log(token: str, from_addr: str, to_addr: str, amount: int) -> RawLog:
    return RawLog(
        address=token,
        topics=(sig.TRANSFER, _pad_address(from_addr), _pad_address(to_addr)),
        data="0x" + _encode_uint256(amount),
    )


def nft_transfer_log(collection: str, from_addr: str, to_addr: str, token_id: int) -> RawLog:
    return RawLog(
        address=collection,
        topics=(sig.TRANSFER, _pad_address(from_addr), _pad_address(to_addr), "0x" + _encode_uint256(token_id)),
        data="0x",
    )


# --- Mock RPC responses ---

TX_HASH = "0x" + "ab" * 32

MOCK_BASE_TX = {
    "jsonrpc": "2.0",
    "id": 1,
    "result": {
        "hash": TX_HASH,
        "from": USER,
        "to": OTHER,
        "value": "0xde0b6b3a7640000",  # 1 ETH
        "gas": "0x5208",  # 21000
        "gasPrice": "0x3b9aca00",
        "input": "0x",
        "blockNumber": "0x1",
        "type": "0x2",
    },
}

MOCK_BASE_RECEIPT = {
    "jsonrpc": "2.0",
    "id": 2,
    "result": {
        "status": "0x1",
        "blockNumber": "0x1",
        "from": USER,
        "to": OTHER,
        "gasUsed": "0x5208",  # 21000
        "effectiveGasPrice": "0x3b9aca00",  # 1 gwei
        "contractAddress": None,
        "logs": [],
    },
}

MOCK_BASE_BLOCK = {
    "jsonrpc": "2.0",
    "id": 3,
    "result": {
        "timestamp": "0x65b0c800",  # 2024-01-24T00:00:00Z
    },
}

MOCK_BASE_TX_NULL = {"jsonrpc": "2.0", "id": 1, "result": None}
MOCK_BASE_RECEIPT_NULL = {"jsonrpc": "2.0", "id": 2, "result": None}

MOCK_BASE_RECEIPT_FAILED = {
    "jsonrpc": "2.0",
    "id": 2,
    "result": {
        "status": "0x0",
        "blockNumber": "0x1",
        "from": USER,
        "to": OTHER,
        "gasUsed": "0x5208",
        "effectiveGasPrice": "0x3b9aca00",
        "logs": [],
    },
}

MOCK_RPC_ERROR = {
    "jsonrpc": "2.0",
    "id": 1,
    "error": {"code": -32005, "message": "rate limit exceeded"},
}


def rpc_responder(responses: dict, per_hash: dict | None = None):
    """respx side effect answering each JSON-RPC call by method name.

    ``per_hash`` maps a tx hash to its own ``{method: payload}`` table, for
    batches where hashes need different answers. Unlisted methods get a null
    result.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        method = payload["method"]
        table = responses
        if per_hash and payload["params"] and payload["params"][0] in per_hash:
            table = per_hash[payload["params"][0]]
        body = table.get(method, {"jsonrpc": "2.0", "id": payload["id"], "result": None})
        return httpx.Response(200, json=body)

    return handler


BASE_RESPONSES = {
    "eth_getTransactionByHash": MOCK_BASE_TX,
    "eth_getTransactionReceipt": MOCK_BASE_RECEIPT,
    "eth_getBlockByNumber": MOCK_BASE_BLOCK,
}

MOCK_FULL_BLOCK = {
    "jsonrpc": "2.0",
    "id": 3,
    "result": {
        "number": "0x10",
        "timestamp": "0x65b0c800",
        "gasUsed": "0xa410",  # 42000
        "gasLimit": "0x1c9c380",  # 30000000
        "baseFeePerGas": "0x5f5e100",  # 0.1 gwei
        "transactions": [
            {
                "hash": "0x" + "01" * 32,
                "from": USER,
                "to": OTHER,
                "value": "0xde0b6b3a7640000",  # 1 ETH
                "gas": "0x5208",
                "gasPrice": "0x3b9aca00",  # 1 gwei
                "blockNumber": "0x10",
            },
            {
                "hash": "0x" + "02" * 32,
                "from": OTHER,
                "to": USDC,
                "value": "0x6f05b59d3b20000",  # 0.5 ETH
                "gas": "0x5208",
                "gasPrice": "0x77359400",  # 2 gwei
                "blockNumber": "0x10",
            },
        ],
    },
}

NETWORK_RESPONSES = {
    "eth_chainId": {"jsonrpc": "2.0", "id": 6, "result": "0x2105"},  # 8453
    "eth_blockNumber": {"jsonrpc": "2.0", "id": 4, "result": "0x1312d00"},  # 20000000
    "eth_gasPrice": {"jsonrpc": "2.0", "id": 5, "result": "0x5f5e100"},  # 0.1 gwei
}
