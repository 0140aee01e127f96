"""Tests for YAML override bundles."""

import pytest

from dashboard_engine.exceptions import OverrideConfigError
from dashboard_engine.schema.industries import IndustryKey
from dashboard_engine.schema.loader import (
    IndustryOverride,
    load_override,
    load_overrides,
    save_override,
)
from dashboard_engine.schema.models import Aggregation, ChartSize


HR_BUNDLE = """\
name: People Analytics
kpis:
  - title: Headcount
    keyMatch: employee|staff
    agg: count
    icon: Users
templateKpis:
  "0":
    - title: Headcount
      keyMatch: employee
      agg: count
  2:
    - title: Overtime
      keyMatch: overtime
      suffix: h
templates:
  - - type: bar
      title: Heads by Department
      x_axis: department
      y_axis: count
      size: large
      priority: high
      colorPalette: ["#3B82F6"]
    - type: pie
      title: Contract Mix
      x_axis: contract
      y_axis: [count, cost]
"""


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# load_override
# ---------------------------------------------------------------------------

class TestLoadOverride:
    def test_industry_from_file_stem(self, tmp_path):
        key, override = load_override(_write(tmp_path, "hr.yaml", HR_BUNDLE))
        assert key is IndustryKey.HR
        assert override.name == "People Analytics"

    def test_industry_from_key_field(self, tmp_path):
        key, _ = load_override(_write(tmp_path, "people.yaml", "key: telecom\nname: Telco\n"))
        assert key is IndustryKey.TELECOM

    def test_kpis_parsed(self, tmp_path):
        _, override = load_override(_write(tmp_path, "hr.yaml", HR_BUNDLE))
        assert len(override.kpis) == 1
        assert override.kpis[0].aggregation is Aggregation.COUNT
        assert override.kpis[0].key_match.search("Staff_Count")

    def test_template_kpis_keyed_by_string(self, tmp_path):
        _, override = load_override(_write(tmp_path, "hr.yaml", HR_BUNDLE))
        assert set(override.template_kpis) == {"0", "2"}
        assert override.kpis_for_index(2)[0].title == "Overtime"
        assert override.kpis_for_index(7)[0].title == "Headcount"

    def test_templates_parsed(self, tmp_path):
        _, override = load_override(_write(tmp_path, "hr.yaml", HR_BUNDLE))
        assert len(override.templates) == 1
        hero, pie = override.templates[0]
        assert hero.size is ChartSize.LARGE
        assert pie.y_role == ["count", "cost"]

    def test_json_bundle(self, tmp_path):
        path = _write(tmp_path, "finance.json",
                      '{"name": "Finance", "kpis": [{"title": "Cash", "keyMatch": "cash"}]}')
        key, override = load_override(path)
        assert key is IndustryKey.FINANCE
        assert override.kpis[0].title == "Cash"

    def test_name_defaults_to_industry(self, tmp_path):
        _, override = load_override(_write(tmp_path, "energy.yaml", "kpis: []\n"))
        assert override.name == "Energy"


class TestLoadOverrideErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(OverrideConfigError):
            load_override(tmp_path / "hr.yaml")

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(OverrideConfigError):
            load_override(_write(tmp_path, "hr.yaml", "- a\n- b\n"))

    def test_unknown_industry(self, tmp_path):
        with pytest.raises(OverrideConfigError) as exc:
            load_override(_write(tmp_path, "zzz.yaml", "name: Nothing\n"))
        assert "path" in exc.value.details

    def test_bad_regex(self, tmp_path):
        text = "kpis:\n  - title: Broken\n    keyMatch: '('\n"
        with pytest.raises(OverrideConfigError):
            load_override(_write(tmp_path, "hr.yaml", text))

    def test_bad_aggregation(self, tmp_path):
        text = "kpis:\n  - title: Median\n    keyMatch: x\n    agg: median\n"
        with pytest.raises(OverrideConfigError):
            load_override(_write(tmp_path, "hr.yaml", text))

    def test_kpi_without_key_match(self, tmp_path):
        with pytest.raises(OverrideConfigError):
            load_override(_write(tmp_path, "hr.yaml", "kpis:\n  - title: Nope\n"))

    def test_chart_without_y_axis(self, tmp_path):
        text = "templates:\n  - - type: bar\n      x_axis: region\n"
        with pytest.raises(OverrideConfigError):
            load_override(_write(tmp_path, "hr.yaml", text))

    def test_bad_size(self, tmp_path):
        text = "templates:\n  - - type: bar\n      x_axis: a\n      y_axis: b\n      size: huge\n"
        with pytest.raises(OverrideConfigError):
            load_override(_write(tmp_path, "hr.yaml", text))


# ---------------------------------------------------------------------------
# load_overrides / save_override
# ---------------------------------------------------------------------------

class TestLoadOverrides:
    def test_directory(self, tmp_path):
        _write(tmp_path, "hr.yaml", HR_BUNDLE)
        _write(tmp_path, "energy.yml", "name: Grid\n")
        _write(tmp_path, "notes.txt", "ignored")
        overrides = load_overrides(tmp_path)
        assert set(overrides) == {IndustryKey.HR, IndustryKey.ENERGY}

    def test_missing_directory(self, tmp_path):
        with pytest.raises(OverrideConfigError):
            load_overrides(tmp_path / "nope")


class TestSaveOverride:
    def test_round_trip(self, tmp_path):
        _, original = load_override(_write(tmp_path, "hr.yaml", HR_BUNDLE))
        out = tmp_path / "out" / "people.yaml"
        save_override(IndustryKey.HR, original, out)
        key, again = load_override(out)
        assert key is IndustryKey.HR
        assert again.to_dict() == original.to_dict()

    def test_empty_override(self, tmp_path):
        out = tmp_path / "x.yaml"
        save_override(IndustryKey.RETAIL, IndustryOverride(name="Shops"), out)
        key, again = load_override(out)
        assert key is IndustryKey.RETAIL
        assert again.kpis is None and again.templates is None
