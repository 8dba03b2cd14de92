"""Tests for unmarried counts, religious multipliers and age matching."""

import pytest

from surplus.demography import (
    brackets_to_include,
    depletes_local_men,
    denomination_sex_factor,
    get_christian_multiplier,
    get_matching_brackets,
    get_older_brackets,
    get_unmarried_count,
    round_half_up,
)


class TestUnmarriedCount:

    def test_scales_thousands_and_includes_toggled_categories(self, sample_census):
        count = get_unmarried_count("18-24", "male", True, True, sample_census)
        assert count.total == (100 + 5 + 10 + 2) * 1000
        assert count.widowed == 2000
        assert count.divorced == 10000

    def test_toggles_off_keep_never_married_and_separated(self, sample_census):
        count = get_unmarried_count("18-24", "male", False, False, sample_census)
        assert count.total == (100 + 5) * 1000
        assert count.widowed == 0
        assert count.divorced == 0

    def test_widowed_only(self, sample_census):
        count = get_unmarried_count("25-34", "female", True, False, sample_census)
        assert count.total == (70 + 9 + 6) * 1000
        assert count.widowed == 6000
        assert count.divorced == 0

    def test_missing_bracket_is_zero(self, sample_census):
        count = get_unmarried_count("45-54", "female", True, True, sample_census)
        assert (count.total, count.widowed, count.divorced) == (0, 0, 0)


class TestChristianMultiplier:

    def test_sex_specific_percent(self, sample_religious):
        assert get_christian_multiplier("18-24", "male", "all", "all", sample_religious) == pytest.approx(0.40)
        assert get_christian_multiplier("18-24", "female", "all", "all", sample_religious) == pytest.approx(0.60)

    def test_falls_back_to_overall_percent(self, sample_religious):
        assert get_christian_multiplier("25-34", "male", "all", "all", sample_religious) == pytest.approx(0.60)

    def test_missing_bracket_short_circuits(self, sample_religious):
        assert get_christian_multiplier("75+", "female", "catholic", "devout", sample_religious) == 0.0

    def test_denomination_with_sex_ratio(self, sample_religious):
        men = get_christian_multiplier("18-24", "male", "catholic", "all", sample_religious)
        women = get_christian_multiplier("18-24", "female", "catholic", "all", sample_religious)
        assert men == pytest.approx(0.40 * 0.30 * (80 / 180) / 0.5)
        assert women == pytest.approx(0.60 * 0.30 * (100 / 180) / 0.5)

    def test_balanced_sex_ratio_leaves_share_unchanged(self, sample_religious):
        value = get_christian_multiplier("18-24", "male", "orthodox", "all", sample_religious)
        assert value == pytest.approx(0.40 * 0.02)

    def test_denomination_without_ratio(self, sample_religious):
        value = get_christian_multiplier("18-24", "female", "other", "all", sample_religious)
        assert value == pytest.approx(0.60 * 0.05)

    def test_unknown_denomination_is_skipped(self, sample_religious):
        value = get_christian_multiplier("18-24", "male", "evangelical", "all", sample_religious)
        assert value == pytest.approx(0.40)

    @pytest.mark.parametrize("tier,percent", [("devout", 20), ("practicing", 30), ("nominal", 50)])
    def test_religiosity_tier(self, sample_religious, tier, percent):
        value = get_christian_multiplier("18-24", "male", "all", tier, sample_religious)
        assert value == pytest.approx(0.40 * percent / 100)

    def test_filters_compound(self, sample_religious):
        value = get_christian_multiplier("18-24", "female", "catholic", "nominal", sample_religious)
        assert value == pytest.approx(0.60 * 0.30 * (100 / 180) / 0.5 * 0.50)

    def test_sex_factors_split_around_half(self):
        assert denomination_sex_factor(100, "male") == pytest.approx(1.0)
        assert denomination_sex_factor(100, "female") == pytest.approx(1.0)
        male = denomination_sex_factor(85, "male") * 0.5
        female = denomination_sex_factor(85, "female") * 0.5
        assert male + female == pytest.approx(1.0)


class TestAgeMatching:

    def test_overlap_converts_to_whole_brackets(self):
        assert brackets_to_include(0) == 0
        assert brackets_to_include(5) == 0
        assert brackets_to_include(10) == 1
        assert brackets_to_include(25) == 2

    def test_no_overlap_matches_own_bracket(self):
        assert get_matching_brackets("35-44", 0) == ["35-44"]

    def test_overlap_adds_older_brackets(self):
        assert get_matching_brackets("25-34", 10) == ["25-34", "35-44"]
        assert get_matching_brackets("25-34", 20) == ["25-34", "35-44", "45-54"]

    def test_older_brackets_clip_at_oldest(self):
        assert get_older_brackets("65-74", 20) == ["75+"]
        assert get_older_brackets("75+", 20) == []

    def test_unknown_bracket_has_no_older_brackets(self):
        assert get_older_brackets("90-99", 20) == []

    def test_local_depletion(self):
        assert not depletes_local_men("25-34", 0)
        assert depletes_local_men("25-34", 10)
        assert not depletes_local_men("18-24", 20)
        assert depletes_local_men("75+", 10)


class TestRounding:

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (2.5, 3), (1.49, 1), (0, 0), (700000.0, 700000)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


def test_matching_tail_is_older_brackets():
    for overlap in (0, 10, 20):
        assert get_matching_brackets("45-54", overlap)[1:] == get_older_brackets("45-54", overlap)
