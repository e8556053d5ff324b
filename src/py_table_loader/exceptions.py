# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from typing import Any, Optional, Sequence


class ConfigurationError(ValueError):
    """
    Raised when a loader is configured with unknown options or cannot determine its columns.
    """


class RowValidationError(ValueError):
    """
    Raised when a row does not have one value per column.
    """

    def __init__(self, expected: int, actual: int, row: Optional[Sequence[Any]] = None):
        self.expected = expected
        self.actual = actual
        self.row = row
        super().__init__(
            f"Row has {actual} values but the table has {expected} columns."
        )


class ExecutionError(RuntimeError):
    """
    Raised when the database driver fails to prepare or execute a statement.
    """
