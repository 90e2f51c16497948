"""Integer conversions between pool shares and underlying asset units.

The pool quotes its exchange rate as the number of asset base units one whole
share (``10**precision`` share base units) is worth.  Both helpers are pure
functions of the rate and precision passed in; callers re-read the rate for
every operation since it changes over time.
"""

from __future__ import annotations

from enum import Enum


class Rounding(str, Enum):
    """Direction used when a conversion does not divide evenly."""

    DOWN = "down"
    UP = "up"


def _check(rate: int, precision: int) -> None:
    if rate <= 0:
        raise ValueError(f"exchange rate must be positive, got {rate}")
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")


def asset_value(shares: int, rate: int, precision: int) -> int:
    """Asset units redeemable for ``shares``, rounded down.

    ``floor(shares * rate / 10**precision)``: rounding down never overstates
    what a donator or receiver is entitled to.
    """

    _check(rate, precision)
    return (shares * rate) // (10**precision)


def shares_for_assets(
    assets: int,
    rate: int,
    precision: int,
    rounding: Rounding = Rounding.DOWN,
) -> int:
    """Shares worth ``assets`` at ``rate``.

    ``floor(assets * 10**precision / rate)`` by default; ``Rounding.UP`` returns
    the ceiling instead, which never under-allocates shares to the holder.
    """

    _check(rate, precision)
    numerator = assets * 10**precision
    if rounding is Rounding.UP:
        return -(-numerator // rate)
    return numerator // rate


__all__ = ["Rounding", "asset_value", "shares_for_assets"]
