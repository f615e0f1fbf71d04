from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from kbo_stats.scraper.extract import SeasonStat

PROJECTION_METHOD = "current_average"

_THOUSANDTHS = Decimal("0.001")


def batting_average(hits: int, at_bats: int | None) -> Decimal:
    """H / AB, or 0 when there are no at-bats."""
    if not at_bats:
        return Decimal(0)
    return Decimal(hits) / Decimal(at_bats)


def round_rate(value: Decimal | float | int) -> Decimal:
    """Round half-up to the thousandths digit (0.2745 -> 0.275)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(_THOUSANDTHS, rounding=ROUND_HALF_UP)


def format_rate(value: Decimal | float | int) -> str:
    """Fixed three-digit display: 0.275, 0.000, 1.000."""
    return f"{round_rate(value):.3f}"


def project(stat: SeasonStat | None) -> Decimal:
    """
    Baseline season-end batting average.

    This is a placeholder, not a model: it assumes the final average equals the
    cumulative average so far. No trend, regression to the mean, or sample-size
    weighting is applied, so a 2-for-3 start projects to .667.

    A missing season row (``None``) projects to 0.000, same as a row with AB == 0.
    """
    if stat is None:
        return round_rate(0)
    return round_rate(batting_average(stat.h, stat.ab))
