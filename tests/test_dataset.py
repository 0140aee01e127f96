"""Tests for the dataset view and value coercion."""

import math

import pandas as pd
import pytest

from dashboard_engine.processor.dataset import DatasetView, load_dataset, to_number


class TestToNumber:
    @pytest.mark.parametrize("value,expected", [
        (42, 42.0),
        (3.5, 3.5),
        ("12.5", 12.5),
        (" 7 ", 7.0),
        ("63,571", 63571.0),
        ("-4", -4.0),
    ])
    def test_numbers(self, value, expected):
        assert to_number(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [
        None, True, False, "", "n/a", "abc", float("nan"), float("inf"), [1], {"a": 1},
    ])
    def test_not_numbers(self, value):
        assert to_number(value) is None


class TestDatasetView:
    def test_inventory_from_first_row(self):
        view = DatasetView([{"a": 1, "b": "x"}, {"a": 2, "b": "y", "c": 3}])
        assert view.columns == ["a", "b"]
        assert len(view) == 2

    def test_empty(self):
        assert DatasetView([]).is_empty
        assert DatasetView(None).is_empty
        assert DatasetView(pd.DataFrame()).is_empty
        assert DatasetView([]).columns == []

    def test_numeric_detection(self):
        view = DatasetView([
            {"a": "12.5", "b": True, "c": "x", "d": None},
            {"a": "3", "b": False, "c": "y", "d": 4},
        ])
        assert view.numeric_columns == ["a", "d"]
        assert view.textual_columns == ["b", "c"]

    def test_detection_samples_first_five_rows(self):
        rows = [{"v": i} for i in range(5)] + [{"v": "n/a"}]
        assert DatasetView(rows).numeric_columns == ["v"]

    def test_all_null_column_is_not_numeric(self):
        view = DatasetView([{"a": None, "b": 1}])
        assert view.numeric_columns == ["b"]

    def test_main_textual_skips_identifiers(self):
        view = DatasetView([{"order_id": "A1", "city": "Pune", "sales": 5}])
        assert view.main_textual == "city"

    def test_main_textual_falls_back_to_identifier(self):
        view = DatasetView([{"order_id": "A1", "sales": 5}])
        assert view.main_textual == "order_id"

    def test_main_textual_falls_back_to_first_column(self):
        view = DatasetView([{"sales": 5, "cost": 2}])
        assert view.main_textual == "sales"

    def test_numeric_picks(self):
        view = DatasetView([{"sales": 5, "cost": 2}])
        assert view.main_numeric == "sales"
        assert view.second_numeric == "cost"
        single = DatasetView([{"sales": 5}])
        assert single.second_numeric == "sales"

    def test_dataframe_input(self):
        view = DatasetView(pd.DataFrame({"region": ["W", "E"], "sales": [1, 2]}))
        assert view.columns == ["region", "sales"]
        assert view.numeric_columns == ["sales"]


class TestAggregates:
    def test_sum_coerces_bad_values_to_zero(self):
        view = DatasetView([{"amt": 10}, {"amt": "abc"}, {"amt": "5"}, {"amt": None}])
        assert view.sum("amt") == pytest.approx(15)

    def test_average_divides_by_row_count(self):
        view = DatasetView([{"amt": 10}, {"amt": "abc"}])
        assert view.average("amt") == pytest.approx(5)

    def test_distinct_count(self):
        view = DatasetView([{"s": "a"}, {"s": "b"}, {"s": "a"}, {"s": None}])
        assert view.distinct_count("s") == 3

    def test_missing_column(self):
        view = DatasetView([{"a": 1}])
        assert view.sum("zzz") == 0
        assert view.distinct_count("zzz") == 0

    def test_no_nan_leaks(self):
        view = DatasetView([{"a": float("nan")}, {"a": 2}])
        assert not math.isnan(view.sum("a"))


class TestLoadDataset:
    def test_csv(self, tmp_path):
        path = tmp_path / "rows.csv"
        path.write_text("region,sales\nWest,100\nEast,200\n", encoding="utf-8")
        view = load_dataset(path)
        assert view.columns == ["region", "sales"]
        assert view.sum("sales") == pytest.approx(300)

    def test_utf16_tab_csv(self, tmp_path):
        path = tmp_path / "export.csv"
        path.write_bytes("region\tsales\nWest\t100\n".encode("utf-16"))
        view = load_dataset(path)
        assert view.columns == ["region", "sales"]

    def test_json_rows(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text('[{"lead_status": "New", "est_value": 200}]', encoding="utf-8")
        assert load_dataset(path).columns == ["lead_status", "est_value"]

    def test_json_wrapped_rows(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text('{"rows": [{"a": 1}]}', encoding="utf-8")
        assert load_dataset(path).columns == ["a"]

    def test_json_not_rows(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text('"hello"', encoding="utf-8")
        with pytest.raises(ValueError):
            load_dataset(path)

    def test_json_object_without_rows(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text('{"items": [{"a": 1}]}', encoding="utf-8")
        with pytest.raises(ValueError):
            load_dataset(path)

    def test_json_rows_must_be_objects(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_dataset(path)
