"""
Tests for build_contingency_table() and ContingencyTable.

Covers every accepted input form, the one-way (1 x k) layout, labels,
and rejection of malformed counts and observations.
"""

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_array_equal

from pycategorical.association import ContingencyTable, build_contingency_table
from pycategorical.core.exceptions import (
    InvalidInputError,
    ValidationError,
)


class TestFromCounts:

    def test_matrix(self, weather_table):
        table = build_contingency_table(weather_table)
        assert table.shape == (2, 2)
        assert table.is_2x2
        assert not table.is_one_way
        assert table.counts.dtype == np.float64
        assert table.total == 145
        assert_array_equal(table.row_totals, [70, 75])
        assert_array_equal(table.col_totals, [62, 83])
        assert table.row_labels == (0, 1)

    def test_vector_is_one_way(self):
        table = build_contingency_table([25, 37])
        assert table.shape == (1, 2)
        assert table.is_one_way
        assert not table.is_2x2
        assert table.row_labels == ("count",)

    def test_column_vector_is_one_way(self):
        table = build_contingency_table(np.array([[4], [6], [9]]))
        assert table.shape == (1, 3)
        assert_array_equal(table.counts, [[4, 6, 9]])

    def test_labels(self, weather_table):
        table = build_contingency_table(
            weather_table,
            row_labels=["No Smile", "Smile"],
            col_labels=["Rainy", "Sunny"],
        )
        assert table.row_labels == ("No Smile", "Smile")
        frame = table.to_frame()
        assert frame.loc["Smile", "Sunny"] == 50

    def test_input_not_aliased(self):
        counts = np.array([[1.0, 2.0], [3.0, 4.0]])
        table = build_contingency_table(counts)
        counts[0, 0] = 100
        assert table.counts[0, 0] == 1

    def test_passthrough(self, weather_table):
        table = build_contingency_table(weather_table)
        assert build_contingency_table(table) is table

    def test_three_dimensional(self):
        with pytest.raises(InvalidInputError, match="expected 2D") as exc_info:
            build_contingency_table(np.ones((2, 2, 2)))
        assert exc_info.value.field == "counts"


class TestFromMappings:

    def test_flat_mapping(self, smile_counts):
        table = build_contingency_table(smile_counts)
        assert table.is_one_way
        assert table.col_labels == ("Smile", "No Smile")
        assert_array_equal(table.counts, [[25, 37]])

    def test_nested_mapping_fills_missing(self):
        counts = {
            "a": {"x": 3, "y": 1},
            "b": {"x": 2},
        }
        table = build_contingency_table(counts)
        assert table.shape == (2, 2)
        assert table.row_labels == ("a", "b")
        assert table.col_labels == ("x", "y")
        assert_array_equal(table.counts, [[3, 1], [2, 0]])

    def test_series(self):
        ser = pd.Series([10, 20, 30], index=["low", "mid", "high"], name="level")
        table = build_contingency_table(ser)
        assert table.shape == (1, 3)
        assert table.col_labels == ("low", "mid", "high")
        assert table.col_name == "level"

    def test_count_frame(self, weather_table):
        frame = pd.DataFrame(
            weather_table,
            index=pd.Index(["No Smile", "Smile"], name="mood"),
            columns=pd.Index(["Rainy", "Sunny"], name="weather"),
        )
        table = build_contingency_table(frame)
        assert table.row_name == "mood"
        assert table.col_name == "weather"
        assert_array_equal(table.counts, weather_table)


class TestFromObservations:

    def test_records_two_fields(self, weather_records, weather_table):
        table = build_contingency_table(weather_records, ["mood", "weather"])
        assert table.row_labels == ("No Smile", "Smile")
        assert table.col_labels == ("Rainy", "Sunny")
        assert_array_equal(table.counts, weather_table)
        assert table.row_name == "mood"

    def test_every_observation_counted_once(self, weather_records):
        table = build_contingency_table(weather_records, ["mood", "weather"])
        assert table.total == len(weather_records)

    def test_records_one_field(self, weather_records):
        table = build_contingency_table(weather_records, "weather")
        assert table.is_one_way
        assert table.col_labels == ("Rainy", "Sunny")
        assert_array_equal(table.counts, [[62, 83]])

    def test_dataframe(self, weather_records):
        frame = pd.DataFrame(weather_records)
        table = build_contingency_table(frame, ["weather", "mood"])
        assert table.row_labels == ("Rainy", "Sunny")
        assert_array_equal(table.counts, [[37, 25], [33, 50]])

    def test_label_vectors(self):
        table = ContingencyTable.from_labels(
            ["a", "b", "a", "c"], ["u", "u", "v", "v"],
        )
        assert table.shape == (3, 2)
        assert table.total == 4

    def test_label_vectors_differ_in_length(self):
        with pytest.raises(InvalidInputError) as exc_info:
            ContingencyTable.from_labels(["a", "b", "a"], ["u", "v"])
        assert exc_info.value.field == "y"

    def test_missing_field(self, weather_records):
        with pytest.raises(InvalidInputError) as exc_info:
            build_contingency_table(weather_records, ["mood", "season"])
        assert exc_info.value.field == "season"

    def test_null_category(self):
        records = [
            {"mood": "Smile", "weather": "Sunny"},
            {"mood": None, "weather": "Rainy"},
        ]
        with pytest.raises(InvalidInputError) as exc_info:
            build_contingency_table(records, ["mood", "weather"])
        assert exc_info.value.field == "mood"

    def test_single_level_field(self):
        records = [
            {"mood": "Smile", "weather": "Sunny"},
            {"mood": "Smile", "weather": "Rainy"},
        ]
        with pytest.raises(InvalidInputError) as exc_info:
            build_contingency_table(records, ["mood", "weather"])
        assert exc_info.value.field == "mood"

    def test_three_fields(self, weather_records):
        with pytest.raises(InvalidInputError):
            build_contingency_table(weather_records, ["a", "b", "c"])

    def test_fields_on_array(self, weather_table):
        with pytest.raises(InvalidInputError):
            build_contingency_table(weather_table, ["mood", "weather"])

    def test_empty_frame(self):
        frame = pd.DataFrame({"mood": [], "weather": []})
        with pytest.raises(InvalidInputError):
            build_contingency_table(frame, ["mood", "weather"])


class TestCountValidation:

    def test_negative(self):
        with pytest.raises(InvalidInputError, match="non-negative"):
            build_contingency_table([[3, -1], [2, 4]])

    def test_fractional(self):
        with pytest.raises(InvalidInputError, match="whole numbers"):
            build_contingency_table([2.5, 3, 4])

    def test_nan(self):
        with pytest.raises(InvalidInputError, match="non-finite"):
            build_contingency_table([[1, np.nan], [2, 3]])

    def test_non_numeric(self):
        with pytest.raises(InvalidInputError):
            build_contingency_table(np.array([["a", "b"], ["c", "d"]]))

    def test_single_row(self):
        with pytest.raises(InvalidInputError):
            build_contingency_table([7])

    def test_single_cell(self):
        with pytest.raises(InvalidInputError):
            build_contingency_table(np.array([[5]]))

    def test_label_count_mismatch(self, weather_table):
        with pytest.raises(InvalidInputError) as exc_info:
            build_contingency_table(weather_table, row_labels=["only one"])
        assert exc_info.value.field == "row_labels"

    def test_duplicate_labels(self, weather_table):
        with pytest.raises(InvalidInputError):
            build_contingency_table(weather_table, col_labels=["x", "x"])

    def test_all_are_validation_errors(self):
        with pytest.raises(ValidationError):
            build_contingency_table([[1, -1], [1, 1]])
