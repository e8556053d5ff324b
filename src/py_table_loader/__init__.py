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
A small, configurable helper for loading a data set into a database table.
It generates and executes the DROP TABLE, CREATE TABLE and INSERT statements
for the data, with per-row filtering, transformation and validation, and
wraps the whole load in a transaction.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .base import SQL_CHAR, SQL_LONGVARCHAR, SQL_VARCHAR, DatabaseHandle
from .columns import Column
from .config import LoaderConfig
from .exceptions import ConfigurationError, ExecutionError, RowValidationError
from .loader import TableLoader
from .main import get_handle, get_loader
from .rows import Abort, Replace, Skip
from .sources import CsvRowSource, DataFrameRowSource, ListRowSource, RowSource

__all__ = [
    "Abort",
    "Column",
    "ConfigurationError",
    "CsvRowSource",
    "DataFrameRowSource",
    "DatabaseHandle",
    "ExecutionError",
    "ListRowSource",
    "LoaderConfig",
    "Replace",
    "RowSource",
    "RowValidationError",
    "SQL_CHAR",
    "SQL_LONGVARCHAR",
    "SQL_VARCHAR",
    "Skip",
    "TableLoader",
    "get_handle",
    "get_loader",
]
