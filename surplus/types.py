"""Domain model: age brackets, reference-data records, filters and results.

Reference tables are parsed once (see surplus.data) into the frozen records
below. Everything else is created fresh per calculation and never mutated.
"""

from dataclasses import dataclass, field
from typing import Optional

AGE_BRACKETS: tuple[str, ...] = ("18-24", "25-34", "35-44", "45-54", "55-64", "65-74", "75+")

YEARS_PER_BRACKET = 10
FOUR_PLUS_AVERAGE_WIVES = 4.5

ALL = "all"

DENOMINATIONS: dict[str, str] = {
    ALL: "All Christians",
    "evangelical": "Evangelical Protestant",
    "catholic": "Catholic",
    "mainline": "Mainline Protestant",
    "black_protestant": "Historically Black Protestant",
    "orthodox": "Orthodox",
    "other": "Other Christian",
}

RELIGIOSITY_LEVELS: dict[str, str] = {
    ALL: "All Christians",
    "nominal": "Nominal",
    "practicing": "Practicing",
    "devout": "Devout",
}

SEXES = ("male", "female")


def bracket_index(bracket: str) -> int:
    """Position of a bracket in AGE_BRACKETS, or -1 if unknown."""
    try:
        return AGE_BRACKETS.index(bracket)
    except ValueError:
        return -1


def order_brackets(selected) -> tuple[str, ...]:
    """Selected brackets in youngest-to-oldest order, unknown labels dropped."""
    chosen = set(selected)
    return tuple(b for b in AGE_BRACKETS if b in chosen)


# ── Reference data ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class MaritalStatus:
    """Marital-status counts for one bracket and sex, in thousands."""
    total: float
    never_married: float
    married: float
    divorced: float
    widowed: float
    separated: float


@dataclass(frozen=True)
class BracketMaritalData:
    range: str
    male: MaritalStatus
    female: MaritalStatus

    def for_sex(self, sex: str) -> MaritalStatus:
        return self.male if sex == "male" else self.female


@dataclass(frozen=True)
class CensusData:
    year: int
    source: str
    source_url: str
    last_updated: str
    age_brackets: tuple[BracketMaritalData, ...]

    def bracket(self, bracket: str) -> Optional[BracketMaritalData]:
        return next((b for b in self.age_brackets if b.range == bracket), None)


@dataclass(frozen=True)
class AgeReligiosity:
    """Christian affiliation and practice intensity for one bracket (percentages)."""
    range: str
    christian_percent: float
    devout_percent: float
    practicing_percent: float
    nominal_percent: float
    christian_percent_male: Optional[float] = None
    christian_percent_female: Optional[float] = None
    attend_monthly_percent: Optional[float] = None
    pray_daily_percent: Optional[float] = None

    def christian_percent_for(self, sex: str) -> float:
        specific = self.christian_percent_male if sex == "male" else self.christian_percent_female
        return self.christian_percent if specific is None else specific

    def tier_percent(self, religiosity: str) -> float:
        return {
            "devout": self.devout_percent,
            "practicing": self.practicing_percent,
            "nominal": self.nominal_percent,
        }.get(religiosity, 100.0)


@dataclass(frozen=True)
class DenominationGenderRatio:
    men_per_100_women: float
    source: str = ""
    self_identified: Optional[float] = None
    actual_attendees: Optional[float] = None


@dataclass(frozen=True)
class DenominationData:
    id: str
    name: str
    percent_of_population: float
    percent_of_christians: float
    marriage_rate: float = 0.0
    gender_ratio: Optional[DenominationGenderRatio] = None


@dataclass(frozen=True)
class ReligiousData:
    year: str
    source: str
    source_url: str
    last_updated: str
    overall_christian_percent: float
    by_age: tuple[AgeReligiosity, ...]
    by_denomination: tuple[DenominationData, ...]

    def age(self, bracket: str) -> Optional[AgeReligiosity]:
        return next((a for a in self.by_age if a.range == bracket), None)

    def denomination(self, denomination_id: str) -> Optional[DenominationData]:
        return next((d for d in self.by_denomination if d.id == denomination_id), None)


@dataclass(frozen=True)
class DataSource:
    id: str
    name: str
    url: str
    description: str
    last_updated: str
    data_year: str


# ── Calculator inputs ──────────────────────────────────────────────────


@dataclass(frozen=True)
class CalculatorFilters:
    """Filter configuration driving one calculation."""
    age_brackets: tuple[str, ...] = AGE_BRACKETS
    denomination: str = ALL
    religiosity: str = ALL
    include_widows: bool = True
    include_divorced: bool = True
    age_overlap: int = 0  # years; used in multiples of YEARS_PER_BRACKET


@dataclass(frozen=True)
class PolygynyDistribution:
    """Percentage of men taking each number of wives."""
    one_wife: float = 100.0
    two_wives: float = 0.0
    three_wives: float = 0.0
    four_plus_wives: float = 0.0


DEFAULT_MONOGAMY = PolygynyDistribution()

MULTIPLE_WIFE_FIELDS = ("two_wives", "three_wives", "four_plus_wives")


def calculate_wife_capacity(dist: PolygynyDistribution) -> float:
    """Average wife slots per man implied by a distribution (1.0 under monogamy)."""
    return (
        dist.one_wife * 1
        + dist.two_wives * 2
        + dist.three_wives * 3
        + dist.four_plus_wives * FOUR_PLUS_AVERAGE_WIVES
    ) / 100


def is_polygynous(dist: PolygynyDistribution) -> bool:
    return dist.two_wives > 0 or dist.three_wives > 0 or dist.four_plus_wives > 0


def distribution_from_multiples(two_wives: float = 0, three_wives: float = 0,
                                four_plus_wives: float = 0) -> PolygynyDistribution:
    """Build a distribution whose monogamous share fills the remainder to 100%."""
    multiple = two_wives + three_wives + four_plus_wives
    return PolygynyDistribution(
        one_wife=max(0, 100 - multiple),
        two_wives=two_wives,
        three_wives=three_wives,
        four_plus_wives=four_plus_wives,
    )


def max_for_field(dist: PolygynyDistribution, field_name: str) -> float:
    """Largest value a multiple-wife field may take given the other two (never below 0)."""
    others = sum(getattr(dist, f) for f in MULTIPLE_WIFE_FIELDS if f != field_name)
    return max(0, 100 - others)


def describe_distribution(dist: PolygynyDistribution) -> str:
    parts = []
    if dist.two_wives > 0:
        parts.append(f"{dist.two_wives:g}% with 2 wives")
    if dist.three_wives > 0:
        parts.append(f"{dist.three_wives:g}% with 3 wives")
    if dist.four_plus_wives > 0:
        parts.append(f"{dist.four_plus_wives:g}% with 4+ wives")
    return ", ".join(parts) if parts else "Pure monogamy"


# ── Results ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BracketResult:
    """One age bracket under a single scenario."""
    age_bracket: str
    unmarried_men: int
    unmarried_women: int
    widows: int
    available_men: int
    surplus: int
    surplus_percent: float


@dataclass(frozen=True)
class ScenarioResult:
    name: str
    description: str
    total_unmarried_women: int
    total_unmarried_men: int
    total_widows: int
    total_surplus: int
    surplus_percent: float
    by_bracket: tuple[BracketResult, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CalculatorResult:
    filters: CalculatorFilters
    monogamy: ScenarioResult
    polygyny_distribution: PolygynyDistribution
    alternative: Optional[ScenarioResult] = None

    @property
    def surplus_reduction(self) -> int:
        """Women gaining marriage prospects under the alternative scenario."""
        if self.alternative is None:
            return 0
        return self.monogamy.total_surplus - self.alternative.total_surplus
