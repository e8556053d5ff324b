# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from typing import Any, Dict, Optional, Type

from loguru import logger

from .base import DatabaseHandle
from .config import LoaderConfig
from .duckdb_handle import DuckDBHandle
from .loader import TableLoader
from .mysql_handle import MySQLHandle
from .postgres_handle import PostgresHandle
from .sources import RowSource
from .sqlite_handle import SQLiteHandle

# Mapping of db_type to handle class
HANDLE_MAPPING: Dict[str, Type[DatabaseHandle]] = {
    "sqlite": SQLiteHandle,
    "duckdb": DuckDBHandle,
    "postgres": PostgresHandle,
    "mysql": MySQLHandle,
}


def get_handle(config: Dict[str, Any]) -> DatabaseHandle:
    """
    Factory function to get the correct database-specific handle object.

    Args:
        config: A dictionary containing the connection settings.
                Must include a 'db_type' key.

    Returns:
        An unconnected instance of a DatabaseHandle subclass.

    Raises:
        ValueError: If the 'db_type' is missing or not supported.
    """
    db_type = config.get("db_type")
    logger.info(f"Attempting to get handle for db_type: {db_type}")

    if db_type is None:
        raise ValueError("Configuration dictionary must contain a 'db_type' key.")

    handle_class = HANDLE_MAPPING.get(db_type)

    if handle_class:
        return handle_class(config)

    raise ValueError(f"Unsupported database type: {db_type}")


def get_loader(
    options: Dict[str, Any], source: Optional[RowSource] = None
) -> TableLoader:
    """
    Factory function to build a TableLoader from a dictionary of options.

    Args:
        options: Loader options; keys must be LoaderConfig field names.
        source: Optional raw row source used instead of options['data'].

    Raises:
        ConfigurationError: If an option is unknown or no columns can be determined.
    """
    return TableLoader(LoaderConfig.from_dict(options), source=source)
