"""Shared fixtures: small in-memory reference tables."""

import pytest

from surplus.types import (
    AGE_BRACKETS,
    AgeReligiosity,
    BracketMaritalData,
    CensusData,
    DenominationData,
    DenominationGenderRatio,
    MaritalStatus,
    ReligiousData,
)


def marital(never_married=0, married=0, divorced=0, widowed=0, separated=0):
    return MaritalStatus(
        total=never_married + married + divorced + widowed + separated,
        never_married=never_married,
        married=married,
        divorced=divorced,
        widowed=widowed,
        separated=separated,
    )


def make_census(brackets):
    """brackets: {label: (male MaritalStatus, female MaritalStatus)}"""
    return CensusData(
        year=2023,
        source="test",
        source_url="",
        last_updated="",
        age_brackets=tuple(
            BracketMaritalData(range=label, male=m, female=f) for label, (m, f) in brackets.items()
        ),
    )


def make_religious(by_age=(), by_denomination=()):
    return ReligiousData(
        year="2024",
        source="test",
        source_url="",
        last_updated="",
        overall_christian_percent=100,
        by_age=tuple(by_age),
        by_denomination=tuple(by_denomination),
    )


def all_christian(label):
    return AgeReligiosity(
        range=label,
        christian_percent=100,
        devout_percent=100,
        practicing_percent=100,
        nominal_percent=100,
    )


@pytest.fixture
def uniform_census():
    """Every bracket: 1,000 thousand unmarried women, 700 thousand never-married men."""
    return make_census({
        label: (marital(never_married=700, married=300), marital(never_married=1000, married=200))
        for label in AGE_BRACKETS
    })


@pytest.fixture
def all_christian_religious():
    return make_religious(by_age=[all_christian(label) for label in AGE_BRACKETS])


@pytest.fixture
def sample_census():
    return make_census({
        "18-24": (marital(never_married=100, divorced=10, widowed=2, separated=5),
                  marital(never_married=90, divorced=12, widowed=3, separated=6)),
        "25-34": (marital(never_married=80, divorced=20, widowed=4, separated=8),
                  marital(never_married=70, divorced=25, widowed=6, separated=9)),
    })


@pytest.fixture
def sample_religious():
    return make_religious(
        by_age=[
            AgeReligiosity(range="18-24", christian_percent=50, christian_percent_male=40,
                           christian_percent_female=60, devout_percent=20,
                           practicing_percent=30, nominal_percent=50),
            AgeReligiosity(range="25-34", christian_percent=60, devout_percent=25,
                           practicing_percent=35, nominal_percent=40),
        ],
        by_denomination=[
            DenominationData(id="catholic", name="Catholic", percent_of_population=20,
                             percent_of_christians=30,
                             gender_ratio=DenominationGenderRatio(men_per_100_women=80)),
            DenominationData(id="orthodox", name="Orthodox", percent_of_population=1,
                             percent_of_christians=2,
                             gender_ratio=DenominationGenderRatio(men_per_100_women=100)),
            DenominationData(id="other", name="Other Christian", percent_of_population=3,
                             percent_of_christians=5),
        ],
    )
