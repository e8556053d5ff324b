# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

import sqlite3
from typing import Any, Optional, Sequence

from loguru import logger

from .base import SQL_CHAR, SQL_LONGVARCHAR, SQL_VARCHAR, DatabaseHandle


class SQLiteHandle(DatabaseHandle):
    """
    Handle for SQLite databases.
    """

    placeholder = "?"
    driver_error = (sqlite3.Error,)
    type_names = {
        SQL_LONGVARCHAR: "TEXT",
        SQL_VARCHAR: "TEXT",
        SQL_CHAR: "TEXT",
    }

    def connect(self):
        """
        Establish and open the database connection.
        """
        db_path = self.config.get("db_path", ":memory:")
        logger.info(f"Connecting to SQLite database at: {db_path}")
        # Autocommit; transactions are opened explicitly by begin().
        self.connection = sqlite3.connect(db_path, isolation_level=None)

    def close(self):
        """
        Terminate the database connection.
        """
        if self.connection:
            logger.info("Closing SQLite connection.")
            self.connection.close()
            self.connection = None

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None):
        self._require_connection()
        with self._driver_errors("execute statement"):
            self.connection.execute(sql, tuple(params or ()))

    def begin(self):
        self._require_connection()
        with self._driver_errors("begin transaction"):
            self.connection.execute("BEGIN")

    def commit(self):
        self._require_connection()
        with self._driver_errors("commit transaction"):
            self.connection.execute("COMMIT")

    def rollback(self):
        self._require_connection()
        with self._driver_errors("roll back transaction"):
            self.connection.execute("ROLLBACK")
