"""
Trait-frequency rarity for a single NFT.

Each trait value contributes ``supply / count`` to the score, so a value held
by 1 token in 100 adds 100 and a value held by half the collection adds 2.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from base_analyzer.errors import InvalidArgumentError
from base_analyzer.models.nft import RarityReport, TokenTrait, TraitRarity


def _value_key(value: object) -> str:
    # metadata JSON spells booleans and whole numbers the same way
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def analyze_rarity(
    attributes: Iterable[TokenTrait],
    collection_traits: Mapping[str, Mapping[str, int]],
) -> RarityReport:
    """Score a token against per-trait value counts for its collection.

    ``collection_traits`` maps trait type to ``{value: token count}``. Traits
    missing from it, or with a zero count, are reported as unmatched and add
    nothing to the score.
    """
    score = 0.0
    rarities = []
    unmatched = []

    for attr in attributes:
        value = _value_key(attr.value)
        counts = collection_traits.get(attr.trait_type) or {}
        if any(c < 0 for c in counts.values()):
            raise InvalidArgumentError(f"negative trait count for {attr.trait_type!r}")

        count = counts.get(value, 0)
        if not count:
            unmatched.append(attr.trait_type)
            continue

        supply = sum(counts.values())
        rarities.append(TraitRarity(trait=attr.trait_type, value=value, rarity=count / supply * 100))
        score += supply / count

    return RarityReport(
        rarity_score=score,
        trait_rarities=tuple(rarities),
        unmatched_traits=tuple(unmatched),
    )
