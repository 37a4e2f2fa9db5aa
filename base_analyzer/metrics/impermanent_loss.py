import math

from base_analyzer.errors import InvalidArgumentError


def impermanent_loss(entry_price: float, current_price: float) -> float:
    """Loss of a 50/50 constant-product position against holding, in percent.

    Symmetric in the direction of the move: a 2x rise and a 2x fall give the
    same loss.
    """
    if not (math.isfinite(entry_price) and math.isfinite(current_price)):
        raise InvalidArgumentError(f"prices must be finite, got {entry_price} and {current_price}")
    if entry_price <= 0:
        raise InvalidArgumentError(f"entry_price must be positive, got {entry_price}")
    if current_price < 0:
        raise InvalidArgumentError(f"current_price must not be negative, got {current_price}")
    if entry_price == current_price:
        return 0.0

    ratio = current_price / entry_price
    if math.isinf(ratio):
        # limit of the formula as the ratio grows without bound
        return 100.0
    loss = 2 * math.sqrt(ratio) / (1 + ratio) - 1
    return abs(loss) * 100
