from base_analyzer.fetchers.base_fetcher import (
    fetch_block,
    fetch_block_number,
    fetch_chain_id,
    fetch_gas_price,
    fetch_receipt,
    fetch_transaction,
    fetch_transaction_bundle,
)

__all__ = [
    "fetch_block",
    "fetch_block_number",
    "fetch_chain_id",
    "fetch_gas_price",
    "fetch_receipt",
    "fetch_transaction",
    "fetch_transaction_bundle",
]
