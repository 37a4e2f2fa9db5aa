"""
Transaction analysis service.

Ties the fetch layer, the decoder, the classifier and the metrics together
into one ``TransactionAnalysis`` per hash. This is the only layer that talks
to both the network and the cache.
"""

import asyncio
import logging

import httpx

from base_analyzer.analysis.network import explorer_url
from base_analyzer.cache.manager import CACHE_MISS, tx_cache
from base_analyzer.classifiers.evm_classifier import classify
from base_analyzer.config import settings
from base_analyzer.decoding import decode_logs
from base_analyzer.errors import AnalyzerError
from base_analyzer.fetchers import fetch_transaction_bundle
from base_analyzer.metrics.gas import compute_gas_metrics
from base_analyzer.metrics.optimizer import analyze_gas_usage
from base_analyzer.metrics.units import ETHER_DECIMALS, scale_amount
from base_analyzer.models.analysis import BatchItem, TransactionAnalysis
from base_analyzer.models.classification import TransactionContext
from base_analyzer.models.transaction import TransactionBundle
from base_analyzer.registry.address_registry import AddressRegistry, load_registry

logger = logging.getLogger(__name__)

# Typical completion time per bridge action, in minutes
ESTIMATED_BRIDGE_MINUTES = {
    "bridge_deposit": 3,
    "bridge_withdrawal": 7 * 24 * 60,  # fault proof window
    "bridge_prove": 60,
    "bridge_finalize": 30,
}


async def get_bundle(tx_hash: str, client: httpx.AsyncClient | None = None) -> TransactionBundle:
    bundle = tx_cache.get(settings.network, tx_hash)
    if bundle is not CACHE_MISS:
        logger.info("CACHE HIT for %s", tx_hash[:12])
        return bundle

    logger.info("CACHE MISS: fetching %s from RPC", tx_hash[:12])
    bundle = await fetch_transaction_bundle(tx_hash, client)
    tx_cache.set(settings.network, tx_hash, bundle)
    return bundle


def build_analysis(bundle: TransactionBundle, registry: AddressRegistry | None = None) -> TransactionAnalysis:
    """Decode, classify and meter an already fetched bundle. No I/O."""
    if registry is None:
        registry = load_registry()

    tx = bundle.transaction
    receipt = bundle.receipt

    events = decode_logs(receipt.logs, registry)
    ctx = TransactionContext.from_decoded(tx.from_address, tx.to_address, tx.value, events)
    classification = classify(ctx, registry)

    gas = compute_gas_metrics(receipt.gas_used, bundle.gas_price, tx.gas_limit)
    optimization = analyze_gas_usage(
        receipt.gas_used,
        bundle.gas_price,
        tx.gas_limit,
        transfer_count=len(ctx.transfers),
    )

    protocol = classification.protocol
    if protocol is None:
        entry = registry.lookup(tx.to_address)
        protocol = entry.label if entry else None

    logger.info("Analyzed %s: %s", bundle.tx_hash[:12], classification.category)

    return TransactionAnalysis(
        tx_hash=bundle.tx_hash,
        status=receipt.status,
        block_number=receipt.block_number or tx.block_number,
        block_time=bundle.block_time,
        from_address=tx.from_address,
        to_address=tx.to_address,
        contract_address=receipt.contract_address,
        value=scale_amount(tx.value, ETHER_DECIMALS),
        protocol=protocol,
        classification=classification,
        events=events,
        gas=gas,
        optimization=optimization,
        estimated_bridge_minutes=ESTIMATED_BRIDGE_MINUTES.get(classification.category),
        explorer_url=explorer_url(bundle.tx_hash, "tx"),
    )


async def analyze_transaction(
    tx_hash: str,
    client: httpx.AsyncClient | None = None,
    registry: AddressRegistry | None = None,
) -> TransactionAnalysis:
    bundle = await get_bundle(tx_hash, client)
    return build_analysis(bundle, registry)


async def batch_analyze(
    tx_hashes: list[str],
    client: httpx.AsyncClient | None = None,
    registry: AddressRegistry | None = None,
) -> list[BatchItem]:
    """Analyze every hash with bounded concurrency.

    Results come back in input order. A failing hash is reported in its own
    item and never cancels the others.
    """
    semaphore = asyncio.Semaphore(settings.batch_concurrency)

    async def run(c: httpx.AsyncClient, tx_hash: str) -> BatchItem:
        async with semaphore:
            try:
                analysis = await analyze_transaction(tx_hash, c, registry)
            except AnalyzerError as exc:
                logger.warning("Batch item %s failed: %s", tx_hash[:12], exc)
                return BatchItem(tx_hash=tx_hash, error=str(exc))
        return BatchItem(tx_hash=tx_hash, analysis=analysis)

    if client is not None:
        return list(await asyncio.gather(*(run(client, h) for h in tx_hashes)))

    async with httpx.AsyncClient(timeout=settings.rpc_timeout) as owned:
        return list(await asyncio.gather(*(run(owned, h) for h in tx_hashes)))
