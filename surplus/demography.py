"""Population filter helpers.

Approximations used:
- Census marital-status counts are stored in thousands and scaled to head counts.
- Religious filters compound multiplicatively: Christian share by age and sex,
  then denomination share (skewed by its sex ratio), then practice tier.
- Age matching: older men within the overlap window count at a flat 50% toward
  a younger bracket, and the bracket's own men are depleted by the same 50%.
  The split does not decay with bracket distance.
"""

import logging
import math
from dataclasses import dataclass

from surplus.types import (
    AGE_BRACKETS,
    ALL,
    YEARS_PER_BRACKET,
    CensusData,
    ReligiousData,
    bracket_index,
)

logger = logging.getLogger(__name__)

CENSUS_UNIT_MULTIPLIER = 1000
OLDER_MEN_SHARE = 0.5


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class UnmarriedCount:
    total: float
    widowed: float
    divorced: float


def get_unmarried_count(bracket: str, sex: str, include_widows: bool, include_divorced: bool,
                        census: CensusData) -> UnmarriedCount:
    """Unmarried head count for one bracket and sex.

    Never-married and separated people are always counted; divorced and
    widowed only when their toggle is on. A bracket absent from the table
    yields zeros.
    """
    bracket_data = census.bracket(bracket)
    if bracket_data is None:
        logger.debug("No marital-status data for bracket %s; counting zero", bracket)
        return UnmarriedCount(total=0, widowed=0, divorced=0)

    data = bracket_data.for_sex(sex)
    total = (data.never_married + data.separated) * CENSUS_UNIT_MULTIPLIER
    widowed = data.widowed * CENSUS_UNIT_MULTIPLIER
    divorced = data.divorced * CENSUS_UNIT_MULTIPLIER

    if include_divorced:
        total += divorced
    if include_widows:
        total += widowed

    return UnmarriedCount(
        total=total,
        widowed=widowed if include_widows else 0,
        divorced=divorced if include_divorced else 0,
    )


def denomination_sex_factor(men_per_100_women: float, sex: str) -> float:
    """Skew factor for a denomination's sex ratio, normalised to a 50/50 baseline."""
    ratio = men_per_100_women
    if sex == "male":
        return (ratio / (ratio + 100)) / 0.5
    return (100 / (ratio + 100)) / 0.5


def get_christian_multiplier(bracket: str, sex: str, denomination: str, religiosity: str,
                             religious: ReligiousData) -> float:
    """Share of a bracket/sex population matching the active religious filters."""
    age_data = religious.age(bracket)
    if age_data is None:
        logger.debug("No religiosity data for bracket %s; multiplier is zero", bracket)
        return 0.0

    multiplier = age_data.christian_percent_for(sex) / 100

    if denomination != ALL:
        denom = religious.denomination(denomination)
        if denom is not None:
            multiplier *= denom.percent_of_christians / 100
            if denom.gender_ratio and denom.gender_ratio.men_per_100_women:
                multiplier *= denomination_sex_factor(denom.gender_ratio.men_per_100_women, sex)

    if religiosity != ALL:
        multiplier *= age_data.tier_percent(religiosity) / 100

    return multiplier


def brackets_to_include(age_overlap: int) -> int:
    """Number of neighbouring brackets spanned by an overlap in years."""
    return max(0, age_overlap // YEARS_PER_BRACKET)


def get_older_brackets(bracket: str, age_overlap: int) -> list[str]:
    """Older brackets whose men are partially available to women in ``bracket``."""
    idx = bracket_index(bracket)
    if idx < 0:
        return []
    k = brackets_to_include(age_overlap)
    return list(AGE_BRACKETS[idx + 1:idx + 1 + k])


def get_matching_brackets(bracket: str, age_overlap: int) -> list[str]:
    """Brackets whose men pool into ``bracket``: itself, then older ones in order."""
    return [bracket] + get_older_brackets(bracket, age_overlap)


def depletes_local_men(bracket: str, age_overlap: int) -> bool:
    """Whether some of this bracket's own men are spent on younger brackets."""
    return brackets_to_include(age_overlap) > 0 and bracket_index(bracket) > 0
