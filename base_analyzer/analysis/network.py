"""Network-level lookups: block aggregates, node status and explorer links."""

import asyncio
import logging

import httpx

from base_analyzer.config import settings
from base_analyzer.errors import RpcError
from base_analyzer.fetchers import fetch_block, fetch_block_number, fetch_chain_id, fetch_gas_price
from base_analyzer.fetchers.base_fetcher import client_scope
from base_analyzer.metrics.block import compute_block_metrics
from base_analyzer.metrics.units import format_gwei
from base_analyzer.models.network import BlockMetrics, NetworkStatus

logger = logging.getLogger(__name__)

EXPLORER_KINDS = ("tx", "address", "token")


def explorer_url(value: str, kind: str = "address") -> str:
    """Block explorer page for a hash or address; unknown kinds link to the address page."""
    path = kind if kind in EXPLORER_KINDS else "address"
    return f"{settings.explorer_url}/{path}/{value}"


async def collect_block_metrics(block_number: int, client: httpx.AsyncClient | None = None) -> BlockMetrics:
    block = await fetch_block(block_number, client, full_transactions=True)
    metrics = compute_block_metrics(block)
    logger.info("Block %s: %d txs, %d addresses", block_number, metrics.transaction_count, metrics.unique_addresses)
    return metrics


async def network_status(client: httpx.AsyncClient | None = None) -> NetworkStatus:
    """Query chain id, head block and gas price.

    RPC failures are reported as an unhealthy status rather than raised, as
    is a node that answers for a different chain than the configured network.
    """
    expected = settings.chain_id
    async with client_scope(client) as c:
        try:
            chain_id, block_number, gas_price = await asyncio.gather(
                fetch_chain_id(c),
                fetch_block_number(c),
                fetch_gas_price(c),
            )
        except RpcError as exc:
            logger.warning("Network status check failed: %s", exc)
            return NetworkStatus(
                network=settings.network,
                expected_chain_id=expected,
                is_healthy=False,
                error=str(exc),
            )

    healthy = chain_id == expected
    if not healthy:
        logger.warning("RPC reports chain id %s, expected %s", chain_id, expected)
    return NetworkStatus(
        network=settings.network,
        expected_chain_id=expected,
        chain_id=chain_id,
        block_number=block_number,
        gas_price_gwei=format_gwei(gas_price),
        is_healthy=healthy,
        error=None if healthy else f"chain id {chain_id} does not match {settings.network}",
    )
