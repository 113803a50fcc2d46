# app/engine/marketed_blend.py


def blended_revenue_per_acre(
    scenario_yield: float,
    marketed_bushels: float,
    weighted_avg_price: float,
    scenario_price: float,
) -> float:
    """
    Gross revenue per acre for one scenario.

    Contracted bushels are locked in at their weighted average price, but
    only up to what the scenario actually produces. Production above the
    contracted amount sells at the scenario price.
    """
    scenario_yield = max(0.0, scenario_yield)
    marketed_bushels = max(0.0, marketed_bushels)

    marketed_tranche = min(marketed_bushels, scenario_yield)
    remaining_tranche = max(0.0, scenario_yield - marketed_bushels)

    return marketed_tranche * weighted_avg_price + remaining_tranche * scenario_price


def unmarketed_bushels_per_acre(projected_yield: float, marketed_bushels: float) -> float:
    return max(0.0, projected_yield - marketed_bushels)


def pct_marketed(projected_yield: float, marketed_bushels: float) -> float:
    """Share of projected production already contracted; may exceed 100."""
    if projected_yield <= 0:
        return 0.0
    return marketed_bushels / projected_yield * 100.0
