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

import psycopg2
from psycopg2 import extensions
from loguru import logger

from .base import SQL_CHAR, SQL_LONGVARCHAR, SQL_VARCHAR, DatabaseHandle


class PostgresHandle(DatabaseHandle):
    """
    Handle for PostgreSQL databases.
    """

    placeholder = "%s"
    driver_error = (psycopg2.Error,)
    type_names = {
        SQL_LONGVARCHAR: "text",
        SQL_VARCHAR: "varchar",
        SQL_CHAR: "bpchar",
    }

    def connect(self):
        """
        Establish and open the database connection.
        """
        conn_str = (
            f"dbname='{self.config['db']}' user='{self.config['user']}' "
            f"host='{self.config['host']}' password='{self.config['password']}' "
            f"port='{self.config.get('port', 5432)}'"
        )
        logger.info(f"Connecting to PostgreSQL database at: {self.config['host']}")
        self.connection = psycopg2.connect(conn_str)
        # Transactions are opened explicitly by begin().
        self.connection.autocommit = True

    def close(self):
        """
        Terminate the database connection.
        """
        if self.connection:
            logger.info("Closing PostgreSQL connection.")
            self.connection.close()
            self.connection = None

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None):
        self._require_connection()
        with self._driver_errors("execute statement"):
            with self.connection.cursor() as cursor:
                cursor.execute(sql, tuple(params) if params else None)

    def begin(self):
        self._require_connection()
        # psycopg2 opens a transaction on the next statement once autocommit is off.
        self.connection.autocommit = False

    def commit(self):
        self._require_connection()
        with self._driver_errors("commit transaction"):
            self.connection.commit()
        self.connection.autocommit = True

    def rollback(self):
        self._require_connection()
        with self._driver_errors("roll back transaction"):
            self.connection.rollback()
        self.connection.autocommit = True

    def quote_identifier(self, *parts: Optional[str]) -> str:
        self._require_connection()
        return ".".join(
            extensions.quote_ident(str(part), self.connection)
            for part in parts
            if part is not None and part != ""
        )
