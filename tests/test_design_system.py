"""Tests for palettes and KPI value formatting."""

import re

import pytest

from dashboard_engine.schema.design_system import (
    PALETTES,
    format_currency,
    format_kpi_value,
    format_number,
)
from dashboard_engine.schema.models import Aggregation, KpiDefinition


def _make_kpi(prefix=None, suffix=None):
    return KpiDefinition("Metric", re.compile("x"), Aggregation.SUM,
                         value_prefix=prefix, value_suffix=suffix)


class TestPalettes:
    def test_eight_palettes_of_five(self):
        assert len(PALETTES) == 8
        assert all(len(p) == 5 for p in PALETTES)


class TestFormatCurrency:
    @pytest.mark.parametrize("value,expected", [
        (0, "$0"),
        (500, "$500"),
        (999.4, "$999"),
        (999.6, "$1K"),
        (1000, "$1K"),
        (1500, "$1.5K"),
        (10_500, "$11K"),
        (250_000, "$250K"),
        (999_960, "$1M"),
        (2_400_000, "$2.4M"),
        (12_000_000, "$12M"),
        (3_100_000_000, "$3.1B"),
        (-1500, "-$1.5K"),
    ])
    def test_compact(self, value, expected):
        assert format_currency(value) == expected

    def test_missing(self):
        assert format_currency(None) == "N/A"
        assert format_currency(float("nan")) == "N/A"


class TestFormatNumber:
    @pytest.mark.parametrize("value,expected", [
        (0, "0"),
        (12.4, "12"),
        (500, "500"),
        (1000, "1000"),
        (2500, "2.5K"),
        (1_200_000, "1.2M"),
    ])
    def test_compact(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (999_940, "999.9K"),
        (999_960, "1.0M"),
        (-999_960, "-1.0M"),
    ])
    def test_thousands_roll_into_millions(self, value, expected):
        assert format_number(value) == expected


class TestFormatKpiValue:
    def test_currency_prefix(self):
        assert format_kpi_value(2_400_000, _make_kpi(prefix="$")) == "$2.4M"

    def test_suffix_appended(self):
        assert format_kpi_value(150, _make_kpi(suffix="%")) == "150%"

    def test_other_prefix_not_included(self):
        assert format_kpi_value(500, _make_kpi(prefix="₹")) == "500"
