from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict


class TokenTrait(BaseModel):
    model_config = ConfigDict(frozen=True)

    trait_type: str
    value: Union[str, int, float, bool]


class TraitRarity(BaseModel):
    model_config = ConfigDict(frozen=True)

    trait: str
    value: str
    rarity: float  # share of the collection holding this value, in percent


class RarityReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    rarity_score: float
    trait_rarities: tuple[TraitRarity, ...] = ()
    unmatched_traits: tuple[str, ...] = ()
