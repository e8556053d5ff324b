# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

"""
Raw row sources.

A source hands out raw rows (before any filter or transform) one at a time
and knows a sensible default table name for its data. `next_raw_row()`
returns None once the data is exhausted.
"""

from contextlib import closing
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Union

import pandas as pd
from loguru import logger

Row = Sequence[Any]

DEFAULT_TABLE_NAME = "data"


class RowSource:
    """
    Base class for raw row sources.
    """

    def default_name(self) -> str:
        return DEFAULT_TABLE_NAME

    def next_raw_row(self) -> Optional[Row]:
        raise NotImplementedError

    def close(self):
        """
        Release anything the source holds open. Rows are not returned afterwards.
        """


class ListRowSource(RowSource):
    """
    Rows from an in-memory list of lists, read with a cursor.

    The list itself is never modified.
    """

    def __init__(self, data: Optional[Sequence[Row]] = None):
        self.data = data if data is not None else []
        self.row_index = 0

    def next_raw_row(self) -> Optional[Row]:
        if self.row_index >= len(self.data):
            return None
        row = self.data[self.row_index]
        self.row_index += 1
        return row


class _FrameRowIterator(RowSource):
    # Shared by the pandas-backed sources: walks frames row by row.

    def __init__(self):
        self._rows: Optional[Iterator[List[Any]]] = None

    def _frames(self) -> Iterator[pd.DataFrame]:
        raise NotImplementedError

    def _iter_rows(self) -> Iterator[List[Any]]:
        with closing(self._frames()) as frames:
            for frame in frames:
                # object dtype so values come out as Python scalars, NaN/NaT as None
                frame = frame.astype(object).where(pd.notna(frame), None)
                for values in frame.itertuples(index=False, name=None):
                    yield list(values)

    def next_raw_row(self) -> Optional[Row]:
        if self._rows is None:
            self._rows = self._iter_rows()
        return next(self._rows, None)

    def close(self):
        # closing the generator also closes an open CSV reader
        if self._rows is not None:
            self._rows.close()
        self._rows = iter(())


class DataFrameRowSource(_FrameRowIterator):
    """
    Rows from a pandas DataFrame.

    With `header` set (the default) the column labels are returned as the
    first row so that a loader without explicit columns can use them.
    """

    def __init__(self, df: pd.DataFrame, header: bool = True, name: Optional[str] = None):
        super().__init__()
        self.df = df
        self.header = header
        self.name = name

    def default_name(self) -> str:
        return self.name or DEFAULT_TABLE_NAME

    def _iter_rows(self) -> Iterator[List[Any]]:
        if self.header:
            yield [str(label) for label in self.df.columns]
        yield from super()._iter_rows()

    def _frames(self) -> Iterator[pd.DataFrame]:
        yield self.df


class CsvRowSource(_FrameRowIterator):
    """
    Rows streamed from a CSV file in chunks.

    Every value is read as a string and empty fields stay empty strings;
    the header line, if the file has one, is the first row.
    """

    def __init__(
        self, path: Union[str, Path], chunk_size: int = 10000, **read_csv_kwargs: Any
    ):
        super().__init__()
        self.path = Path(path)
        self.chunk_size = chunk_size
        self.read_csv_kwargs = read_csv_kwargs

    def default_name(self) -> str:
        return self.path.stem or DEFAULT_TABLE_NAME

    def _frames(self) -> Iterator[pd.DataFrame]:
        logger.info(f"Reading CSV file: {self.path}")
        options = {
            "header": None,
            "dtype": str,
            "keep_default_na": False,
            **self.read_csv_kwargs,
        }
        with pd.read_csv(self.path, chunksize=self.chunk_size, **options) as reader:
            yield from reader


def source_for(data: Any) -> RowSource:
    """
    Pick a row source for the `data` option of a loader.
    """
    if isinstance(data, RowSource):
        return data
    if isinstance(data, pd.DataFrame):
        return DataFrameRowSource(data)
    return ListRowSource(data)
