# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Union

from loguru import logger

from .exceptions import ConfigurationError, RowValidationError
from .sources import Row, RowSource

RowFetcher = Callable[[], Optional[Row]]
RowFilter = Callable[[Row], bool]
RowTransform = Callable[[Row], Row]


@dataclass(frozen=True)
class Replace:
    """Insert this row instead of the invalid one."""

    row: Row


@dataclass(frozen=True)
class Skip:
    """Drop the invalid row and fetch the next one."""


@dataclass(frozen=True)
class Abort:
    """Stop the load by raising `error`."""

    error: Exception


Outcome = Union[Replace, Skip, Abort]
InvalidRowHandler = Callable[[Any, RowValidationError, Row], Outcome]


def _pass_through(context: Any, error: RowValidationError, row: Row) -> Outcome:
    return Replace(row)


def _raise(context: Any, error: RowValidationError, row: Row) -> Outcome:
    return Abort(error)


def _warn(context: Any, error: RowValidationError, row: Row) -> Outcome:
    logger.warning(f"Invalid row passed through unchanged: {error} Row: {row!r}")
    return Replace(row)


INVALID_ROW_POLICIES = {
    "raise": _raise,
    "warn": _warn,
}


def resolve_invalid_row_handler(policy: Any) -> InvalidRowHandler:
    """
    Turn an `invalid_row_policy` option into a handler returning an Outcome.

    Args:
        policy: None (pass rows through), "raise", "warn", or a callable
                receiving (loader, message, row). A callable may return an
                Outcome, a replacement row, or a falsy value to skip the row.

    Raises:
        ConfigurationError: If the policy is not recognized.
    """
    if policy is None:
        return _pass_through

    if isinstance(policy, str):
        handler = INVALID_ROW_POLICIES.get(policy)
        if handler is None:
            raise ConfigurationError(f"Unsupported invalid_row_policy: {policy}")
        return handler

    if not callable(policy):
        raise ConfigurationError(f"Unsupported invalid_row_policy: {policy!r}")

    def custom(context: Any, error: RowValidationError, row: Row) -> Outcome:
        result = policy(context, str(error), row)
        if isinstance(result, (Replace, Skip, Abort)):
            return result
        if not result:
            return Skip()
        return Replace(result)

    return custom


class RowPipeline:
    """
    Produces the rows to insert for one load.

    Each raw row is fetched, filtered, transformed and checked against the
    number of columns; rows of the wrong length go to the invalid row handler.

    A filter that rejects every row of a source that never ends keeps the
    pipeline fetching forever; there is no retry limit.
    """

    def __init__(
        self,
        source: RowSource,
        column_count: int,
        fetch: Optional[RowFetcher] = None,
        row_filter: Optional[RowFilter] = None,
        row_transform: Optional[RowTransform] = None,
        invalid_row_handler: InvalidRowHandler = _pass_through,
        context: Any = None,
    ):
        self.source = source
        self.column_count = column_count
        self.fetch = fetch
        self.row_filter = row_filter
        self.row_transform = row_transform
        self.invalid_row_handler = invalid_row_handler
        self.context = context

    def __iter__(self) -> Iterator[Row]:
        while True:
            row = self.next_row()
            if row is None:
                return
            yield row

    def fetch_row(self) -> Optional[Row]:
        if self.fetch is not None:
            return self.fetch()
        return self.source.next_raw_row()

    def validate(self, row: Row):
        if len(row) != self.column_count:
            raise RowValidationError(self.column_count, len(row), row)

    def next_row(self) -> Optional[Row]:
        """
        Return the next row to insert, or None when the source is exhausted.
        """
        while True:
            row = self.fetch_row()
            if row is None:
                return None

            if self.row_filter is not None and not self.row_filter(row):
                continue

            if self.row_transform is not None:
                row = self.row_transform(row)

            try:
                self.validate(row)
            except RowValidationError as e:
                outcome = self.invalid_row_handler(self.context, e, row)
                if isinstance(outcome, Abort):
                    raise outcome.error
                if isinstance(outcome, Skip):
                    logger.debug(f"Skipping invalid row: {e}")
                    continue
                return outcome.row

            return row
