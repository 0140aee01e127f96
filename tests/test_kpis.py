"""Tests for KPI column resolution, aggregation and formatting."""

import re

import pytest

from dashboard_engine.generator.registry import Registry
from dashboard_engine.processor.dataset import DatasetView
from dashboard_engine.processor.kpis import (
    compute_kpi,
    compute_kpis,
    default_kpis,
    resolve_kpi_column,
)
from dashboard_engine.schema.industries import IndustryKey
from dashboard_engine.schema.loader import IndustryOverride
from dashboard_engine.schema.models import Aggregation, KpiDefinition, SourceMapping


@pytest.fixture(scope="module")
def registry():
    return Registry()


def _make_kpi(title, pattern, agg=Aggregation.SUM, prefix=None, suffix=None):
    return KpiDefinition(title, re.compile(pattern, re.IGNORECASE), agg,
                         value_prefix=prefix, value_suffix=suffix)


def _by_title(cards):
    return {c.title: c for c in cards}


# ---------------------------------------------------------------------------
# Worked examples
# ---------------------------------------------------------------------------

class TestFinanceExample:
    ROWS = [
        {"region": "West", "sales": 100, "cost": 40},
        {"region": "East", "sales": 200, "cost": 90},
    ]

    def test_cards(self, registry):
        cards = _by_title(compute_kpis(registry, "finance", "template1", self.ROWS))
        assert len(cards) == 5
        # no profit column: currency KPIs fall back to the financial column
        assert cards["Net Profit"].formatted_value == "$300"
        assert cards["Burn Rate"].formatted_value == "$130"
        assert cards["Total Expenses"].value == pytest.approx(130)
        assert cards["ROI"].formatted_value == "150%"

    def test_display_tokens(self, registry):
        card = compute_kpis(registry, "finance", "template1", self.ROWS)[0]
        assert card.glyph == "DollarSign"
        assert card.style.startswith("bg-gradient-to-br")
        assert card.prefix == ""


class TestCrmExample:
    ROWS = [
        {"lead_status": "New", "est_value": 200},
        {"lead_status": "Won", "est_value": 300},
    ]

    def test_cards(self, registry):
        cards = _by_title(compute_kpis(registry, "SFW CRM", "template1", self.ROWS))
        assert cards["Pipeline Value"].value == pytest.approx(500)
        assert cards["Pipeline Value"].formatted_value == "500"
        assert cards["Pipeline Value"].prefix == "₹"
        assert cards["Total Leads"].value == 2
        assert cards["Avg Deal Size"].formatted_value == "250"


# ---------------------------------------------------------------------------
# Column fallbacks
# ---------------------------------------------------------------------------

class TestResolveKpiColumn:
    def test_key_match_first(self):
        view = DatasetView([{"x": 1, "Gross Sales": 2}])
        assert resolve_kpi_column(_make_kpi("Sales", "sales"), view) == "Gross Sales"

    def test_currency_prefers_mapped_metric(self):
        view = DatasetView([{"gross": 10, "net_amt": 5}])
        kpi = _make_kpi("Total Sales", "sales|revenue", prefix="$")
        assert resolve_kpi_column(kpi, view, SourceMapping(metric_col="net_amt")) == "net_amt"
        assert resolve_kpi_column(kpi, view) == "gross"

    def test_mapped_metric_must_exist(self):
        view = DatasetView([{"gross": 10}])
        kpi = _make_kpi("Total Sales", "sales", prefix="$")
        assert resolve_kpi_column(kpi, view, SourceMapping(metric_col="gone")) == "gross"

    def test_financial_column_for_cost_titles(self):
        view = DatasetView([{"units": 3, "unit_price": 9}])
        kpi = _make_kpi("Fuel Cost", "fuel")
        assert resolve_kpi_column(kpi, view) == "unit_price"

    def test_first_numeric_skips_date_parts(self):
        view = DatasetView([{"year": 2024, "order_id": 7, "weight": 3}])
        assert resolve_kpi_column(_make_kpi("Load", "zzz"), view) == "weight"

    def test_count_prefers_mapped_category(self):
        view = DatasetView([{"brand": "a", "customer": "c"}])
        kpi = _make_kpi("Brands", "zzz", Aggregation.COUNT)
        assert resolve_kpi_column(kpi, view, SourceMapping(category_col="brand")) == "brand"
        assert resolve_kpi_column(kpi, view) == "customer"

    def test_count_first_text_column(self):
        view = DatasetView([{"n": 1, "colour": "red"}])
        kpi = _make_kpi("Colours", "zzz", Aggregation.COUNT)
        assert resolve_kpi_column(kpi, view) == "colour"

    def test_nothing_fits(self):
        view = DatasetView([{"label": "a"}])
        assert resolve_kpi_column(_make_kpi("Total", "zzz"), view) is None


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

class TestAggregation:
    def test_sum_coerces_malformed_values(self):
        view = DatasetView([{"amount": "abc"}, {"amount": 10}])
        card = compute_kpi(_make_kpi("Revenue", "amount", prefix="$"), view)
        assert card.value == pytest.approx(10)
        assert card.formatted_value == "$10"

    def test_avg(self):
        view = DatasetView([{"conversion_rate": 2}, {"conversion_rate": 4}])
        card = compute_kpi(_make_kpi("Conversion", "conversion", Aggregation.AVG, suffix="%"), view)
        assert card.formatted_value == "3%"
        assert card.suffix == "%"

    def test_count_distinct(self):
        view = DatasetView([{"sku": "a"}, {"sku": "b"}, {"sku": "a"}])
        card = compute_kpi(_make_kpi("SKUs", "sku", Aggregation.COUNT), view)
        assert card.value == 2

    def test_count_without_column_is_row_count(self):
        view = DatasetView([{"a": 1}, {"a": 2}, {"a": 2}])
        card = compute_kpi(_make_kpi("Transactions", "transaction", Aggregation.COUNT), view)
        assert card.value == 3
        assert card.formatted_value == "3"

    def test_sum_without_column_is_zero(self):
        view = DatasetView([{"label": "a"}])
        card = compute_kpi(_make_kpi("Total", "zzz"), view)
        assert card.value == 0
        assert card.formatted_value == "0"

    def test_compact_number(self):
        view = DatasetView([{"units": 1500}, {"units": 1000}])
        card = compute_kpi(_make_kpi("Units", "units"), view)
        assert card.formatted_value == "2.5K"

    def test_compact_currency(self):
        view = DatasetView([{"sales": 2_400_000}])
        card = compute_kpi(_make_kpi("Sales", "sales", prefix="$"), view)
        assert card.formatted_value == "$2.4M"


class TestEmptyDataset:
    def test_every_card_zero(self, registry):
        for industry in ["finance", "crm", "hr", "sales"]:
            cards = compute_kpis(registry, industry, "template1", [])
            assert cards
            assert all(c.formatted_value == "0" for c in cards)


# ---------------------------------------------------------------------------
# Generic card set
# ---------------------------------------------------------------------------

class TestDefaultKpis:
    ROWS = [
        {"product": "A", "brand": "X", "qty": 2, "total": 100},
        {"product": "B", "brand": "X", "qty": 3, "total": 50},
    ]

    def test_used_for_industries_without_config(self, registry):
        cards = compute_kpis(registry, "B2B Sales", "template1", self.ROWS)
        assert [c.title for c in cards] == [
            "Total Sales", "Unique Entities", "Items Analyzed", "Total Units", "Data Rows",
        ]

    def test_values(self):
        cards = _by_title(default_kpis(DatasetView(self.ROWS)))
        assert cards["Total Sales"].formatted_value == "$150"
        assert cards["Unique Entities"].formatted_value == "1"
        assert cards["Items Analyzed"].formatted_value == "2"
        assert cards["Total Units"].formatted_value == "5"
        assert cards["Data Rows"].formatted_value == "2"

    def test_mapping_hints(self):
        rows = [{"gross": 10, "maker": "a"}, {"gross": 20, "maker": "b"}]
        cards = _by_title(default_kpis(DatasetView(rows),
                                       SourceMapping(metric_col="gross", category_col="maker")))
        assert cards["Total Sales"].formatted_value == "$30"
        assert cards["Unique Entities"].formatted_value == "2"

    def test_missing_columns(self):
        cards = _by_title(default_kpis(DatasetView([{"x": "a"}, {"x": "b"}])))
        assert cards["Total Sales"].formatted_value == "$0"
        assert cards["Unique Entities"].formatted_value == "N/A"
        assert cards["Items Analyzed"].formatted_value == "2"
        assert cards["Total Units"].formatted_value == "2"

    def test_mapping_dict_accepted(self, registry):
        rows = [{"gross": 10}]
        cards = _by_title(compute_kpis(registry, "marketing", "template1", rows,
                                       {"metricCol": "gross"}))
        assert cards["Total Sales"].formatted_value == "$10"


class TestOverriddenKpis:
    def test_template_kpis_follow_template_id(self):
        override = IndustryOverride("People", template_kpis={
            "0": [_make_kpi("Heads", "employee", Aggregation.COUNT)],
            "1": [_make_kpi("Overtime", "overtime", suffix="h")],
        })
        registry = Registry({IndustryKey.HR: override})
        rows = [{"employee": "a", "overtime": 4}, {"employee": "b", "overtime": 6}]
        assert compute_kpis(registry, "hr", "template1", rows)[0].formatted_value == "2"
        assert compute_kpis(registry, "hr", "template2", rows)[0].formatted_value == "10h"
