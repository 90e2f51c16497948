from __future__ import annotations

import pytest

from yield_share.conversion import Rounding, asset_value, shares_for_assets


@pytest.mark.parametrize(
    ("shares", "rate", "precision", "expected"),
    [
        (1_000_000_000, 1_000_000, 6, 1_000_000_000),
        (1_000_000_000, 1_050_000, 6, 1_050_000_000),
        (38_095_239, 1_050_000, 6, 40_000_000),
        (3, 3, 1, 0),
        (0, 1_234_567, 6, 0),
        (10**18, 2 * 10**18, 18, 2 * 10**18),
    ],
)
def test_asset_value_rounds_down(shares: int, rate: int, precision: int, expected: int) -> None:
    assert asset_value(shares, rate, precision) == expected


def test_shares_for_assets_rounding_directions() -> None:
    assert shares_for_assets(1_010_000_000, 1_050_000, 6) == 961_904_761
    assert shares_for_assets(1_010_000_000, 1_050_000, 6, Rounding.UP) == 961_904_762
    # exact division is unaffected by the rounding mode
    assert shares_for_assets(1_050_000_000, 1_050_000, 6, Rounding.UP) == 1_000_000_000


def test_value_of_retained_shares_never_exceeds_target() -> None:
    rate = 1_000_003
    target = 1_000_000_000
    down = shares_for_assets(target, rate, 6)
    up = shares_for_assets(target, rate, 6, Rounding.UP)
    assert asset_value(down, rate, 6) < target
    assert asset_value(up, rate, 6) >= target
    assert up - down == 1


def test_large_values_stay_exact() -> None:
    shares = 123_456_789_012_345_678_901_234_567
    rate = 1_000_000_000_000_000_001
    assert asset_value(shares, rate, 18) == shares * rate // 10**18


@pytest.mark.parametrize(("rate", "precision"), [(0, 6), (-1, 6), (1, -1)])
def test_invalid_rate_or_precision_raises(rate: int, precision: int) -> None:
    with pytest.raises(ValueError):
        asset_value(1, rate, precision)
    with pytest.raises(ValueError):
        shares_for_assets(1, rate, precision)


def test_rounding_parses_from_config_strings() -> None:
    assert Rounding("up") is Rounding.UP
    assert Rounding("down") is Rounding.DOWN
