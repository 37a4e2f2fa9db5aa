from base_analyzer.metrics.units import ETHER_DECIMALS, scale_amount
from base_analyzer.models.network import BlockMetrics
from base_analyzer.models.transaction import FetchedBlock


def compute_block_metrics(block: FetchedBlock) -> BlockMetrics:
    """Aggregate one block's transactions. Needs a block fetched with full transactions."""
    addresses: set[str] = set()
    total_value = 0
    total_gas_price = 0
    for tx in block.transactions:
        if tx.from_address:
            addresses.add(tx.from_address)
        if tx.to_address:
            addresses.add(tx.to_address)
        total_value += tx.value
        total_gas_price += tx.gas_price

    count = len(block.transactions)
    return BlockMetrics(
        block_number=block.number,
        timestamp=block.timestamp,
        transaction_count=count,
        unique_addresses=len(addresses),
        gas_used=block.gas_used,
        gas_limit=block.gas_limit,
        base_fee_per_gas=block.base_fee_per_gas or 0,
        average_gas_price=total_gas_price // count if count else 0,
        total_value=scale_amount(total_value, ETHER_DECIMALS),
    )
