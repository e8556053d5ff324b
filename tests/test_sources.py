# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from pathlib import Path
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest

from py_table_loader.sources import (
    CsvRowSource,
    DataFrameRowSource,
    ListRowSource,
    RowSource,
    source_for,
)


@pytest.fixture
def sample_df():
    """
    Fixture for a sample pandas DataFrame with a missing value.
    """
    return pd.DataFrame({"col_int": [1, 2], "col_str": ["A", None]})


def test_list_row_source_reads_with_cursor():
    """
    Test that the list source returns each row once and leaves the data intact.
    """
    data = [["a", 1], ["b", 2]]
    source = ListRowSource(data)
    assert source.next_raw_row() == ["a", 1]
    assert source.next_raw_row() == ["b", 2]
    assert source.next_raw_row() is None
    assert source.next_raw_row() is None
    assert data == [["a", 1], ["b", 2]]
    assert source.default_name() == "data"


def test_list_row_source_empty():
    """
    Test that a source without data is exhausted immediately.
    """
    assert ListRowSource().next_raw_row() is None


def test_dataframe_row_source_with_header(sample_df):
    """
    Test that the column labels come first and missing values become None.
    """
    source = DataFrameRowSource(sample_df)
    assert source.next_raw_row() == ["col_int", "col_str"]
    first = source.next_raw_row()
    assert first == [1, "A"]
    assert type(first[0]) is int
    assert source.next_raw_row() == [2, None]
    assert source.next_raw_row() is None


def test_dataframe_row_source_without_header():
    """
    Test that header=False yields only the data rows, with NaN as None.
    """
    df = pd.DataFrame({"x": [1.5, None]})
    source = DataFrameRowSource(df, header=False, name="measurements")
    assert source.next_raw_row() == [1.5]
    assert source.next_raw_row() == [None]
    assert source.next_raw_row() is None
    assert source.default_name() == "measurements"


def test_csv_row_source(tmp_path: Path):
    """
    Test that a CSV file is streamed as rows of strings, header first.
    """
    csv_file = tmp_path / "animals.csv"
    csv_file.write_text("color,smell,size\nblack,skunk,medium\ngreen,,small\n")

    source = CsvRowSource(csv_file, chunk_size=1)
    assert source.default_name() == "animals"
    assert source.next_raw_row() == ["color", "smell", "size"]
    assert source.next_raw_row() == ["black", "skunk", "medium"]
    assert source.next_raw_row() == ["green", "", "small"]
    assert source.next_raw_row() is None


def test_csv_row_source_read_csv_options(tmp_path: Path):
    """
    Test that extra options are passed through to pandas.read_csv.
    """
    csv_file = tmp_path / "pipes.txt"
    csv_file.write_text("a|b\n1|2\n")

    source = CsvRowSource(csv_file, sep="|", skiprows=1)
    assert source.next_raw_row() == ["1", "2"]
    assert source.next_raw_row() is None


def test_source_for(sample_df):
    """
    Test that source_for picks a source matching the type of data.
    """
    assert isinstance(source_for([[1]]), ListRowSource)
    assert isinstance(source_for(None), ListRowSource)
    assert isinstance(source_for(sample_df), DataFrameRowSource)

    custom = ListRowSource([[1]])
    assert source_for(custom) is custom


def test_row_source_base_is_abstract():
    """
    Test that the base source must be subclassed to produce rows.
    """
    with pytest.raises(NotImplementedError):
        RowSource().next_raw_row()


@patch("pandas.read_csv")
def test_csv_row_source_close_releases_reader(mock_read_csv):
    """
    Test that closing a partly read CSV source closes the pandas reader.
    """
    reader = MagicMock()
    reader.__enter__.return_value = iter(
        [pd.DataFrame([["a", "b"]]), pd.DataFrame([["c", "d"]])]
    )
    mock_read_csv.return_value = reader

    source = CsvRowSource("rows.csv", chunk_size=1)
    assert source.next_raw_row() == ["a", "b"]
    reader.__exit__.assert_not_called()

    source.close()
    reader.__exit__.assert_called_once()
    assert source.next_raw_row() is None


def test_data_frame_row_source_close():
    """
    Test that no rows are returned after a source is closed.
    """
    source = DataFrameRowSource(pd.DataFrame({"x": [1, 2]}), header=False)
    assert source.next_raw_row() == [1]
    source.close()
    assert source.next_raw_row() is None
