import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, TypeVar

import httpx
from pydantic import ValidationError

from base_analyzer.config import settings
from base_analyzer.errors import (
    BlockNotFound,
    RpcError,
    RpcTimeoutError,
    TransactionNotFound,
    TransactionPending,
)
from base_analyzer.models.log import RawLog
from base_analyzer.models.transaction import (
    FetchedBlock,
    FetchedReceipt,
    FetchedTransaction,
    TransactionBundle,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors a parser can hit on a well-formed JSON body with the wrong shape
_PARSE_ERRORS = (ValueError, TypeError, AttributeError, KeyError, ValidationError)


def _rpc_payload(method: str, params: list, req_id: int = 1) -> dict:
    return {"jsonrpc": "2.0", "id": req_id, "method": method, "params": params}


def _hex_to_int(value: Any, default: int = 0) -> int:
    if value is None or value == "0x":
        return default
    if isinstance(value, int):
        return value
    return int(value, 16)


@asynccontextmanager
async def client_scope(client: httpx.AsyncClient | None) -> AsyncIterator[httpx.AsyncClient]:
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=settings.rpc_timeout) as owned:
        yield owned


async def rpc_call(client: httpx.AsyncClient, method: str, params: list, req_id: int = 1) -> Any:
    """POST one JSON-RPC request and return its ``result`` member."""
    try:
        resp = await client.post(settings.base_rpc_url, json=_rpc_payload(method, params, req_id))
    except httpx.TimeoutException as exc:
        raise RpcTimeoutError(f"{method} timed out") from exc
    except httpx.HTTPError as exc:
        raise RpcError(f"{method} failed: {exc}") from exc

    if resp.status_code >= 400:
        raise RpcError(f"{method} returned HTTP {resp.status_code}", code=resp.status_code)

    try:
        body = resp.json()
    except ValueError as exc:
        raise RpcError(f"{method} returned invalid JSON") from exc
    if not isinstance(body, dict):
        raise RpcError(f"{method} returned a non-object JSON body")

    error = body.get("error")
    if error:
        if isinstance(error, dict):
            code = error.get("code")
            raise RpcError(str(error.get("message", "unknown RPC error")), code=code if isinstance(code, int) else None)
        raise RpcError(f"{method} failed: {error}")
    return body.get("result")


def _parse(what: str, parser: Callable[..., T], *args: Any) -> T:
    try:
        return parser(*args)
    except _PARSE_ERRORS as exc:
        raise RpcError(f"malformed {what} response: {exc}") from exc


def _expect_object(what: str, data: Any) -> dict:
    if not isinstance(data, dict):
        raise RpcError(f"malformed {what} response: expected an object, got {type(data).__name__}")
    return data


def _parse_transaction(tx_hash: str, data: dict) -> FetchedTransaction:
    gas_limit = data.get("gas")
    block_number = data.get("blockNumber")
    return FetchedTransaction(
        tx_hash=tx_hash,
        from_address=(data.get("from") or "").lower(),
        to_address=data["to"].lower() if data.get("to") else None,
        value=_hex_to_int(data.get("value")),
        gas_price=_hex_to_int(data.get("gasPrice")),
        gas_limit=_hex_to_int(gas_limit) if gas_limit else None,
        input=data.get("input") or "0x",
        block_number=_hex_to_int(block_number) if block_number else None,
    )


def _parse_receipt(tx_hash: str, data: dict) -> FetchedReceipt:
    effective = data.get("effectiveGasPrice")
    block_number = data.get("blockNumber")
    contract_address = data.get("contractAddress")
    return FetchedReceipt(
        tx_hash=tx_hash,
        status="confirmed" if _hex_to_int(data.get("status"), default=1) == 1 else "failed",
        gas_used=_hex_to_int(data.get("gasUsed")),
        effective_gas_price=_hex_to_int(effective) if effective else None,
        block_number=_hex_to_int(block_number) if block_number else None,
        contract_address=contract_address.lower() if contract_address else None,
        logs=tuple(RawLog.from_rpc(entry) for entry in data.get("logs") or []),
    )


def _parse_block(block_number: int, data: dict) -> FetchedBlock:
    base_fee = data.get("baseFeePerGas")
    # entries are bare hashes unless the block was requested with full transactions
    transactions = tuple(
        _parse_transaction(tx.get("hash") or "", tx)
        for tx in data.get("transactions") or []
        if isinstance(tx, dict)
    )
    return FetchedBlock(
        number=block_number,
        timestamp=datetime.fromtimestamp(_hex_to_int(data["timestamp"]), tz=timezone.utc),
        gas_used=_hex_to_int(data.get("gasUsed")),
        gas_limit=_hex_to_int(data.get("gasLimit")),
        base_fee_per_gas=_hex_to_int(base_fee) if base_fee else None,
        transactions=transactions,
    )


async def fetch_transaction(tx_hash: str, client: httpx.AsyncClient | None = None) -> FetchedTransaction:
    async with client_scope(client) as c:
        result = await rpc_call(c, "eth_getTransactionByHash", [tx_hash], 1)
    if result is None:
        raise TransactionNotFound(tx_hash)
    return _parse("transaction", _parse_transaction, tx_hash, _expect_object("transaction", result))


async def fetch_receipt(tx_hash: str, client: httpx.AsyncClient | None = None) -> FetchedReceipt:
    async with client_scope(client) as c:
        result = await rpc_call(c, "eth_getTransactionReceipt", [tx_hash], 2)
    if result is None:
        raise TransactionNotFound(tx_hash)
    return _parse("receipt", _parse_receipt, tx_hash, _expect_object("receipt", result))


async def fetch_block(
    block_number: int,
    client: httpx.AsyncClient | None = None,
    full_transactions: bool = False,
) -> FetchedBlock:
    async with client_scope(client) as c:
        result = await rpc_call(c, "eth_getBlockByNumber", [hex(block_number), full_transactions], 3)
    if result is None:
        raise BlockNotFound(block_number)
    result = _expect_object("block", result)
    if not result.get("timestamp"):
        raise BlockNotFound(block_number)
    return _parse("block", _parse_block, block_number, result)


async def fetch_block_number(client: httpx.AsyncClient | None = None) -> int:
    async with client_scope(client) as c:
        result = await rpc_call(c, "eth_blockNumber", [], 4)
    return _parse("eth_blockNumber", _hex_to_int, result)


async def fetch_gas_price(client: httpx.AsyncClient | None = None) -> int:
    async with client_scope(client) as c:
        result = await rpc_call(c, "eth_gasPrice", [], 5)
    return _parse("eth_gasPrice", _hex_to_int, result)


async def fetch_chain_id(client: httpx.AsyncClient | None = None) -> int:
    async with client_scope(client) as c:
        result = await rpc_call(c, "eth_chainId", [], 6)
    return _parse("eth_chainId", _hex_to_int, result)


async def fetch_transaction_bundle(tx_hash: str, client: httpx.AsyncClient | None = None) -> TransactionBundle:
    """Fetch transaction and receipt concurrently, then the block timestamp.

    Raises TransactionNotFound when the node knows neither, TransactionPending
    when only the transaction exists, RpcError when either answer is
    malformed. A failed block lookup is tolerated.
    """
    async with client_scope(client) as c:
        tx_data, receipt_data = await asyncio.gather(
            rpc_call(c, "eth_getTransactionByHash", [tx_hash], 1),
            rpc_call(c, "eth_getTransactionReceipt", [tx_hash], 2),
        )

        if tx_data is None and receipt_data is None:
            raise TransactionNotFound(tx_hash)
        if receipt_data is None:
            raise TransactionPending(tx_hash)
        receipt_data = _expect_object("receipt", receipt_data)
        if tx_data is None:
            # receipt without tx body; rebuild what the receipt carries
            tx_data = {
                "from": receipt_data.get("from"),
                "to": receipt_data.get("to"),
                "blockNumber": receipt_data.get("blockNumber"),
            }

        transaction = _parse("transaction", _parse_transaction, tx_hash, _expect_object("transaction", tx_data))
        receipt = _parse("receipt", _parse_receipt, tx_hash, receipt_data)

        block_time = None
        block_number = receipt.block_number or transaction.block_number
        if block_number is not None:
            try:
                block_time = (await fetch_block(block_number, c)).timestamp
            except (RpcError, BlockNotFound) as exc:
                logger.debug("Block timestamp fetch failed for block %s: %s", block_number, exc)

    return TransactionBundle(transaction=transaction, receipt=receipt, block_time=block_time)
