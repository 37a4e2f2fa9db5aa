import re

from fastapi import HTTPException

EVM_TX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
EVM_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_tx_hash(tx_hash: str) -> str:
    tx_hash = tx_hash.strip()
    if not EVM_TX_HASH_RE.match(tx_hash):
        raise HTTPException(
            status_code=400,
            detail="Invalid Base tx hash. Expected 66-char hex string starting with 0x.",
        )
    return tx_hash.lower()


def validate_address(address: str, field: str = "address") -> str:
    address = address.strip()
    if not EVM_ADDRESS_RE.match(address):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {field}. Expected 42-char hex string starting with 0x.",
        )
    return address.lower()


def validate_tx_hashes(tx_hashes: list[str], max_items: int) -> list[str]:
    if not tx_hashes:
        raise HTTPException(status_code=400, detail="tx_hashes must not be empty")
    if len(tx_hashes) > max_items:
        raise HTTPException(
            status_code=400,
            detail=f"Too many tx hashes: {len(tx_hashes)} (max {max_items})",
        )
    return [validate_tx_hash(h) for h in tx_hashes]
