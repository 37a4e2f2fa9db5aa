"""
Static lookup table of known Base contracts and tokens.

Loaded once from addresses.json and never mutated afterwards. Lookups are
case-insensitive; an unknown address is an ordinary outcome and returns None.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Literal

from pydantic import BaseModel, ConfigDict

from base_analyzer.config import settings

logger = logging.getLogger(__name__)

_REGISTRY_PATH = Path(__file__).parent / "addresses.json"

DEFAULT_DECIMALS = 18

AddressCategory = Literal[
    "token", "router", "factory", "bridge", "marketplace", "lending", "infrastructure"
]
BridgeRole = Literal["deposit", "withdrawal", "portal"]

DEX_CATEGORIES: frozenset[str] = frozenset({"router", "factory"})


class AddressEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    name: str
    category: AddressCategory
    symbol: str | None = None
    decimals: int | None = None
    protocol: str | None = None
    role: BridgeRole | None = None

    @property
    def label(self) -> str:
        return self.protocol or self.name


def _normalize(address: object) -> str | None:
    if not isinstance(address, str):
        return None
    key = address.strip().lower()
    return key or None


class AddressRegistry:
    def __init__(self, entries: Iterable[AddressEntry]):
        table: dict[str, AddressEntry] = {}
        for entry in entries:
            key = entry.address.lower()
            if key in table:
                raise ValueError(f"Duplicate registry address {entry.address}")
            table[key] = entry.model_copy(update={"address": key})
        self._entries = MappingProxyType(table)

    @classmethod
    def from_json(cls, path: Path | str) -> AddressRegistry:
        with open(path) as f:
            rows = json.load(f)
        registry = cls(AddressEntry.model_validate(row) for row in rows)
        logger.debug("Loaded %d registry entries from %s", len(registry), path)
        return registry

    def lookup(self, address: object) -> AddressEntry | None:
        key = _normalize(address)
        if key is None:
            return None
        return self._entries.get(key)

    def entries_by_category(self, category: str) -> tuple[AddressEntry, ...]:
        return tuple(e for e in self._entries.values() if e.category == category)

    def decimals_for(self, address: object, default: int = DEFAULT_DECIMALS) -> int:
        entry = self.lookup(address)
        if entry is None or entry.decimals is None:
            return default
        return entry.decimals

    def find_token(self, address_or_symbol: str) -> AddressEntry | None:
        """Match a token row by address or by symbol, ignoring case."""
        search = _normalize(address_or_symbol)
        if search is None:
            return None
        for entry in self.entries_by_category("token"):
            if entry.address == search or (entry.symbol or "").lower() == search:
                return entry
        return None

    def __contains__(self, address: object) -> bool:
        return self.lookup(address) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())


@lru_cache(maxsize=None)
def _load(path: str) -> AddressRegistry:
    return AddressRegistry.from_json(path)


def load_registry(path: Path | str | None = None) -> AddressRegistry:
    """Return the registry for ``path`` (default table unless overridden in settings).

    Each path is read once; later calls return the same instance.
    """
    if path is None:
        path = settings.registry_path or _REGISTRY_PATH
    return _load(str(path))
