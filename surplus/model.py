"""Surplus calculation engine.

Computes, per selected age bracket, unmarried women against available men
under monogamy, then optionally reshapes the men's side by the wife capacity
of a polygyny distribution. Each call is a pure function of its inputs.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from surplus.demography import (
    OLDER_MEN_SHARE,
    depletes_local_men,
    get_christian_multiplier,
    get_matching_brackets,
    get_unmarried_count,
    round_half_up,
)
from surplus.formatting import to_fixed
from surplus.types import (
    DEFAULT_MONOGAMY,
    BracketResult,
    CalculatorFilters,
    CalculatorResult,
    CensusData,
    PolygynyDistribution,
    ReligiousData,
    ScenarioResult,
    calculate_wife_capacity,
    describe_distribution,
    is_polygynous,
)

logger = logging.getLogger(__name__)

MONOGAMY_NAME = "Monogamy"
MONOGAMY_DESCRIPTION = "Current legal standard: one man, one woman"


def surplus_percent(surplus: int, women: int) -> float:
    return surplus / women * 100 if women > 0 else 0.0


def _filtered_men(bracket: str, filters: CalculatorFilters, census: CensusData,
                  religious: ReligiousData, share: float = 1.0) -> int:
    # Widowed men are never counted as available
    count = get_unmarried_count(bracket, "male", False, filters.include_divorced, census)
    multiplier = get_christian_multiplier(
        bracket, "male", filters.denomination, filters.religiosity, religious
    )
    return round_half_up(count.total * multiplier * share)


def calculate_bracket_result(bracket: str, filters: CalculatorFilters, census: CensusData,
                             religious: ReligiousData) -> BracketResult:
    """Women, men and available men for one bracket under monogamy."""
    women_count = get_unmarried_count(
        bracket, "female", filters.include_widows, filters.include_divorced, census
    )
    women_multiplier = get_christian_multiplier(
        bracket, "female", filters.denomination, filters.religiosity, religious
    )
    unmarried_women = round_half_up(women_count.total * women_multiplier)
    widows = round_half_up(women_count.widowed * women_multiplier)

    current_men = _filtered_men(bracket, filters, census, religious)
    available_men = current_men

    # Older men looking at younger women
    for older in get_matching_brackets(bracket, filters.age_overlap)[1:]:
        available_men += _filtered_men(older, filters, census, religious, share=OLDER_MEN_SHARE)

    # This bracket's men looking at younger women are not available here
    if depletes_local_men(bracket, filters.age_overlap):
        available_men -= round_half_up(current_men * OLDER_MEN_SHARE)

    available_men = max(0, available_men)
    surplus = max(0, unmarried_women - available_men)

    return BracketResult(
        age_bracket=bracket,
        unmarried_men=current_men,
        unmarried_women=unmarried_women,
        widows=widows,
        available_men=available_men,
        surplus=surplus,
        surplus_percent=surplus_percent(surplus, unmarried_women),
    )


def apply_wife_capacity(monogamy_results: Sequence[BracketResult],
                        distribution: PolygynyDistribution) -> list[BracketResult]:
    """Rescale each bracket's available men by the distribution's wife capacity.

    Women, men and widow counts carry over unchanged.
    """
    capacity = calculate_wife_capacity(distribution)
    results = []
    for result in monogamy_results:
        available_men = round_half_up(result.available_men * capacity)
        surplus = max(0, result.unmarried_women - available_men)
        results.append(replace(
            result,
            available_men=available_men,
            surplus=surplus,
            surplus_percent=surplus_percent(surplus, result.unmarried_women),
        ))
    return results


def aggregate_results(brackets: Sequence[BracketResult], name: str,
                      description: str) -> ScenarioResult:
    """Sum bracket results into a named scenario."""
    total_women = sum(b.unmarried_women for b in brackets)
    total_surplus = sum(b.surplus for b in brackets)
    return ScenarioResult(
        name=name,
        description=description,
        total_unmarried_women=total_women,
        total_unmarried_men=sum(b.unmarried_men for b in brackets),
        total_widows=sum(b.widows for b in brackets),
        total_surplus=total_surplus,
        surplus_percent=surplus_percent(total_surplus, total_women),
        by_bracket=tuple(brackets),
    )


def alternative_name(distribution: PolygynyDistribution) -> str:
    return f"Polygyny ({to_fixed(calculate_wife_capacity(distribution), 2)}x capacity)"


def calculate_results(
    filters: CalculatorFilters,
    census: CensusData,
    religious: ReligiousData,
    polygyny_distribution: Optional[PolygynyDistribution] = None,
) -> CalculatorResult:
    """Run the monogamy scenario and, for a polygynous distribution, the alternative.

    Args:
        filters: Selected brackets and religious/marital filters.
        census: Marital-status counts by bracket and sex (thousands).
        religious: Religiosity by bracket plus denomination shares.
        polygyny_distribution: Wife-count distribution; monogamy if omitted.

    Returns:
        CalculatorResult echoing the inputs. ``alternative`` is None unless
        the distribution has any multiple-wife share.
    """
    # Empty selection yields an all-zero scenario
    monogamy_brackets = [
        calculate_bracket_result(bracket, filters, census, religious)
        for bracket in filters.age_brackets
    ]
    monogamy = aggregate_results(monogamy_brackets, MONOGAMY_NAME, MONOGAMY_DESCRIPTION)
    logger.debug("Monogamy: %d women, surplus %d over %d brackets",
                 monogamy.total_unmarried_women, monogamy.total_surplus, len(monogamy_brackets))

    dist = polygyny_distribution or DEFAULT_MONOGAMY
    alternative = None
    if is_polygynous(dist):
        alternative = aggregate_results(
            apply_wife_capacity(monogamy_brackets, dist),
            alternative_name(dist),
            f"Hypothetical: {describe_distribution(dist)}",
        )
        logger.debug("%s: surplus %d", alternative.name, alternative.total_surplus)

    return CalculatorResult(
        filters=filters,
        monogamy=monogamy,
        polygyny_distribution=dist,
        alternative=alternative,
    )
