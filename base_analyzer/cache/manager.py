import time
from collections import OrderedDict
from typing import NamedTuple

from base_analyzer.models.transaction import TransactionBundle

CONFIRMED_TTL = 300  # settled receipts never change; 5 minutes bounds memory
FAILED_TTL = 60
MAX_ENTRIES = 1000

CACHE_MISS = object()


class _Entry(NamedTuple):
    bundle: TransactionBundle
    expires_at: float


def ttl_for(bundle: TransactionBundle) -> float:
    return FAILED_TTL if bundle.receipt.status == "failed" else CONFIRMED_TTL


class TransactionCache:
    """In-memory TTL + LRU cache of fetched bundles, keyed by network and hash.

    Pending and missing transactions are never stored; the fetch layer raises
    for those instead of returning a bundle.
    """

    def __init__(self, max_entries: int = MAX_ENTRIES):
        self._entries: OrderedDict[tuple[str, str], _Entry] = OrderedDict()
        self._max_entries = max_entries

    def get(self, network: str, tx_hash: str) -> TransactionBundle | object:
        key = (network, tx_hash.lower())
        entry = self._entries.get(key)
        if entry is None:
            return CACHE_MISS
        if time.monotonic() > entry.expires_at:
            del self._entries[key]
            return CACHE_MISS
        self._entries.move_to_end(key)
        return entry.bundle

    def set(self, network: str, tx_hash: str, bundle: TransactionBundle) -> None:
        key = (network, tx_hash.lower())
        self._entries.pop(key, None)
        self._entries[key] = _Entry(bundle, time.monotonic() + ttl_for(bundle))
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


tx_cache = TransactionCache()
