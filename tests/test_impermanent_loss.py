import pytest

from base_analyzer.errors import InvalidArgumentError
from base_analyzer.metrics import impermanent_loss


def test_equal_prices_is_exactly_zero():
    assert impermanent_loss(1850.25, 1850.25) == 0.0


def test_doubling():
    assert impermanent_loss(100, 200) == pytest.approx(5.7190958, rel=1e-6)


def test_symmetric_in_direction():
    assert impermanent_loss(100, 200) == pytest.approx(impermanent_loss(200, 100))
    assert impermanent_loss(1, 4) == pytest.approx(impermanent_loss(4, 1))


def test_four_x():
    assert impermanent_loss(1, 4) == pytest.approx(20.0)


def test_price_to_zero_is_total_loss():
    assert impermanent_loss(10, 0) == pytest.approx(100.0)


def test_never_negative():
    for current in (0.01, 0.5, 0.99, 1.01, 3, 1000):
        assert impermanent_loss(1, current) >= 0


def test_zero_entry_price_rejected():
    with pytest.raises(InvalidArgumentError):
        impermanent_loss(0, 100)


def test_negative_entry_price_rejected():
    with pytest.raises(InvalidArgumentError):
        impermanent_loss(-1, 100)


def test_negative_current_price_rejected():
    with pytest.raises(ValueError):
        impermanent_loss(100, -5)


@pytest.mark.parametrize(
    "entry,current",
    [
        (float("nan"), 1),
        (1, float("nan")),
        (float("inf"), 1),
        (1, float("inf")),
        (1, float("-inf")),
    ],
)
def test_non_finite_prices_rejected(entry, current):
    with pytest.raises(InvalidArgumentError):
        impermanent_loss(entry, current)


def test_extreme_ratio_stays_finite():
    assert impermanent_loss(1e-300, 1e300) == pytest.approx(100.0)
