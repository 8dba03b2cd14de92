"""Data loading: census marital status, religious demographics, and source notes."""

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from surplus.types import (
    AGE_BRACKETS,
    DENOMINATIONS,
    SEXES,
    AgeReligiosity,
    BracketMaritalData,
    CensusData,
    DataSource,
    DenominationData,
    DenominationGenderRatio,
    MaritalStatus,
    ReligiousData,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(os.environ.get("SURPLUS_DATA_DIR", Path(__file__).resolve().parent.parent / "data"))
CENSUS_FILE = "census-marital.json"
RELIGIOUS_FILE = "religious-demographics.json"
SOURCES_FILE = "sources.json"

_MARITAL_FIELDS = ("total", "never_married", "married", "divorced", "widowed", "separated")
_AGE_PERCENT_FIELDS = (
    "christian_percent", "christian_percent_male", "christian_percent_female",
    "devout_percent", "practicing_percent", "nominal_percent",
    "attend_monthly_percent", "pray_daily_percent",
)


def _read_json(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _check_percent(value: Optional[float], where: str) -> None:
    if value is not None and not 0 <= value <= 100:
        raise ValueError(f"{where}: percentage {value} outside [0, 100]")


def _check_bracket(label: str, where: str) -> None:
    if label not in AGE_BRACKETS:
        raise ValueError(f"{where}: unknown age bracket {label!r}")


def parse_census(raw: dict) -> CensusData:
    """Build CensusData from its JSON form, validating every bracket."""
    brackets = []
    for entry in raw["age_brackets"]:
        label = entry["range"]
        _check_bracket(label, "census")
        by_sex = {}
        for sex in SEXES:
            if sex not in entry:
                raise ValueError(f"census bracket {label}: missing {sex} counts")
            try:
                counts = {k: float(entry[sex][k]) for k in _MARITAL_FIELDS}
            except KeyError as e:
                raise ValueError(f"census bracket {label} {sex}: missing field {e}") from e
            negative = [k for k, v in counts.items() if v < 0]
            if negative:
                raise ValueError(f"census bracket {label} {sex}: negative counts in {negative}")
            by_sex[sex] = MaritalStatus(**counts)
        brackets.append(BracketMaritalData(range=label, **by_sex))

    missing = set(AGE_BRACKETS) - {b.range for b in brackets}
    if missing:
        logger.warning("Census data lacks brackets %s; they will count as zero", sorted(missing))

    return CensusData(
        year=int(raw["year"]),
        source=raw.get("source", ""),
        source_url=raw.get("source_url", ""),
        last_updated=raw.get("last_updated", ""),
        age_brackets=tuple(brackets),
    )


def _parse_denomination(entry: dict) -> DenominationData:
    denom_id = entry["id"]
    if denom_id not in DENOMINATIONS:
        raise ValueError(f"unknown denomination id {denom_id!r}")
    _check_percent(entry["percent_of_christians"], f"denomination {denom_id}")
    _check_percent(entry.get("percent_of_population"), f"denomination {denom_id}")

    ratio = None
    if entry.get("gender_ratio"):
        r = entry["gender_ratio"]
        if r["men_per_100_women"] <= 0:
            raise ValueError(f"denomination {denom_id}: men_per_100_women must be positive")
        ratio = DenominationGenderRatio(
            men_per_100_women=float(r["men_per_100_women"]),
            source=r.get("source", ""),
            self_identified=r.get("self_identified"),
            actual_attendees=r.get("actual_attendees"),
        )

    return DenominationData(
        id=denom_id,
        name=entry.get("name", DENOMINATIONS[denom_id]),
        percent_of_population=float(entry.get("percent_of_population", 0)),
        percent_of_christians=float(entry["percent_of_christians"]),
        marriage_rate=float(entry.get("marriage_rate", 0)),
        gender_ratio=ratio,
    )


def parse_religious(raw: dict) -> ReligiousData:
    """Build ReligiousData from its JSON form, validating percentages."""
    by_age = []
    for entry in raw["by_age"]:
        label = entry["range"]
        _check_bracket(label, "religiosity")
        for key in _AGE_PERCENT_FIELDS:
            _check_percent(entry.get(key), f"religiosity {label} {key}")
        by_age.append(AgeReligiosity(
            range=label,
            christian_percent=float(entry["christian_percent"]),
            devout_percent=float(entry["devout_percent"]),
            practicing_percent=float(entry["practicing_percent"]),
            nominal_percent=float(entry["nominal_percent"]),
            christian_percent_male=entry.get("christian_percent_male"),
            christian_percent_female=entry.get("christian_percent_female"),
            attend_monthly_percent=entry.get("attend_monthly_percent"),
            pray_daily_percent=entry.get("pray_daily_percent"),
        ))

    _check_percent(raw["overall_christian_percent"], "overall_christian_percent")

    return ReligiousData(
        year=str(raw["year"]),
        source=raw.get("source", ""),
        source_url=raw.get("source_url", ""),
        last_updated=raw.get("last_updated", ""),
        overall_christian_percent=float(raw["overall_christian_percent"]),
        by_age=tuple(by_age),
        by_denomination=tuple(_parse_denomination(d) for d in raw.get("by_denomination", [])),
    )


@lru_cache(maxsize=1)
def load_census_data() -> CensusData:
    """Load census-marital.json (counts in thousands)."""
    path = DATA_DIR / CENSUS_FILE
    census = parse_census(_read_json(path))
    logger.info("Loaded census data %s (%d brackets) from %s",
                census.year, len(census.age_brackets), path)
    return census


@lru_cache(maxsize=1)
def load_religious_data() -> ReligiousData:
    """Load religious-demographics.json."""
    path = DATA_DIR / RELIGIOUS_FILE
    religious = parse_religious(_read_json(path))
    logger.info("Loaded religious data %s (%d denominations) from %s",
                religious.year, len(religious.by_denomination), path)
    return religious


@lru_cache(maxsize=1)
def load_sources() -> tuple[tuple[DataSource, ...], tuple[str, ...]]:
    """Return (data sources, methodology limitations) from sources.json."""
    raw = _read_json(DATA_DIR / SOURCES_FILE)
    sources = tuple(DataSource(**s) for s in raw["sources"])
    limitations = tuple(raw.get("methodology", {}).get("limitations", []))
    return sources, limitations
