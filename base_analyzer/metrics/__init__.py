from base_analyzer.metrics.block import compute_block_metrics
from base_analyzer.metrics.gas import compute_gas_metrics, gas_cost, gas_efficiency
from base_analyzer.metrics.impermanent_loss import impermanent_loss
from base_analyzer.metrics.rarity import analyze_rarity

__all__ = [
    "analyze_rarity",
    "compute_block_metrics",
    "compute_gas_metrics",
    "gas_cost",
    "gas_efficiency",
    "impermanent_loss",
]
