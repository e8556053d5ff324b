# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from typing import Any, Dict, Optional, Sequence

import duckdb
from loguru import logger

from .base import SQL_CHAR, SQL_LONGVARCHAR, SQL_VARCHAR, DatabaseHandle


class DuckDBHandle(DatabaseHandle):
    """
    Handle for DuckDB databases.
    """

    placeholder = "?"
    driver_error = (duckdb.Error,)
    type_names = {
        SQL_LONGVARCHAR: "VARCHAR",
        SQL_VARCHAR: "VARCHAR",
        SQL_CHAR: "VARCHAR",
    }

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.connection: duckdb.DuckDBPyConnection | None = None

    def connect(self):
        """
        Establish and open the database connection.
        """
        db_path = self.config.get("db_path", ":memory:")
        logger.info(f"Connecting to DuckDB database at: {db_path}")
        self.connection = duckdb.connect(database=db_path, read_only=False)

    def close(self):
        """
        Terminate the database connection.
        """
        if self.connection:
            logger.info("Closing DuckDB connection.")
            self.connection.close()
            self.connection = None

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None):
        self._require_connection()
        with self._driver_errors("execute statement"):
            if params:
                self.connection.execute(sql, list(params))
            else:
                self.connection.execute(sql)

    def begin(self):
        self._require_connection()
        with self._driver_errors("begin transaction"):
            self.connection.begin()

    def commit(self):
        self._require_connection()
        with self._driver_errors("commit transaction"):
            self.connection.commit()

    def rollback(self):
        self._require_connection()
        with self._driver_errors("roll back transaction"):
            self.connection.rollback()
