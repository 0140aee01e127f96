"""Tests for the engine facade, startup initialization and share links."""

import pytest

from dashboard_engine import (
    Dashboard,
    DashboardEngine,
    DashboardLink,
    OverrideConfigError,
    Registry,
    initialize,
)
from dashboard_engine.schema.industries import IndustryKey
from dashboard_engine.schema.loader import IndustryOverride


def _make_rows():
    return [
        {"region": "West", "sales": 100, "cost": 40},
        {"region": "East", "sales": 200, "cost": 90},
    ]


@pytest.fixture(scope="module")
def engine():
    return DashboardEngine(initialize())


# ---------------------------------------------------------------------------
# initialize
# ---------------------------------------------------------------------------

class TestInitialize:
    def test_no_overrides(self):
        assert isinstance(initialize(), Registry)

    def test_mapping_of_dicts(self):
        registry = initialize({
            "people": {"name": "People", "kpis": [{"title": "Heads", "keyMatch": "employee",
                                                    "agg": "count"}]},
        })
        assert registry.get_industry_config("hr").kpis[0].title == "Heads"

    def test_mapping_of_overrides(self):
        registry = initialize({IndustryKey.ENERGY: IndustryOverride("Grid")})
        assert registry.get_template_count("energy") == 10

    def test_unknown_industry_key_rejected(self):
        with pytest.raises(OverrideConfigError) as exc:
            initialize({
                "bogus vertical": {"name": "Bogus", "kpis": [{"title": "Hijacked",
                                                              "keyMatch": "x"}]},
            })
        assert exc.value.details == {"industry": "bogus vertical"}
        assert Registry().get_kpi_definitions("retail")[0].title != "Hijacked"

    def test_directory(self, tmp_path):
        (tmp_path / "hr.yaml").write_text(
            "name: People\nkpis:\n  - title: Heads\n    keyMatch: employee\n    agg: count\n",
            encoding="utf-8")
        registry = initialize(tmp_path)
        assert registry.get_industry_config("hr").name == "People"

    def test_directory_string(self, tmp_path):
        assert isinstance(initialize(str(tmp_path)), Registry)

    def test_bad_bundle_raises(self, tmp_path):
        (tmp_path / "hr.yaml").write_text("kpis: 3\n", encoding="utf-8")
        with pytest.raises(OverrideConfigError):
            initialize(tmp_path)


# ---------------------------------------------------------------------------
# DashboardEngine
# ---------------------------------------------------------------------------

class TestBuild:
    def test_dashboard(self, engine):
        dashboard = engine.build("finance", "template1", _make_rows())
        assert isinstance(dashboard, Dashboard)
        assert dashboard.industry_key is IndustryKey.FINANCE
        assert dashboard.template_id == "template1"
        assert len(dashboard.charts) == 4
        assert len(dashboard.kpis) == 5
        assert dashboard.has_data

    def test_template_id_normalized(self, engine):
        assert engine.build("finance", "template42", _make_rows()).template_id == "template10"
        assert engine.build("finance", "garbage", _make_rows()).template_id == "template1"
        assert engine.build("finance", None, _make_rows()).template_id == "template1"

    def test_default_template_has_no_charts(self, engine):
        dashboard = engine.build("finance", "default", _make_rows())
        assert dashboard.charts == []
        assert len(dashboard.kpis) == 5

    def test_empty_dataset(self, engine):
        dashboard = engine.build("hr", "template2", [])
        assert not dashboard.has_data
        assert all(k.formatted_value == "0" for k in dashboard.kpis)

    def test_to_dict(self, engine):
        data = engine.build("SFW CRM", "template3", [{"action": "call", "n": 1}]).to_dict()
        assert data["industry"] == "crm"
        assert data["template"] == "template3"
        assert data["charts"][0]["title"] == "Company Value by Industry"

    def test_template_count(self, engine):
        assert engine.template_count("Odoo") == 10


# ---------------------------------------------------------------------------
# Share links
# ---------------------------------------------------------------------------

class TestDashboardLink:
    def test_query_round_trip(self):
        link = DashboardLink("SFW CRM", "template3")
        assert link.to_query() == "industry=SFW+CRM&template=template3"
        assert DashboardLink.from_query(link.to_query()) == link

    def test_leading_question_mark(self):
        link = DashboardLink.from_query("?industry=hr&template=template2")
        assert link == DashboardLink("hr", "template2")

    def test_defaults(self):
        assert DashboardLink.from_query("").template_id == "template1"

    def test_link_reproduces_dashboard(self, engine):
        rows = _make_rows()
        original = engine.build("Manufacturing Plant 3", "template7", rows)
        link = DashboardLink.from_query(
            DashboardLink("Manufacturing Plant 3", "template7").to_query())
        rebuilt = DashboardEngine(initialize()).build_from_link(link, rows)
        assert rebuilt.to_dict() == original.to_dict()
