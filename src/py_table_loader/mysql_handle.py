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

import mysql.connector
from loguru import logger

from .base import SQL_CHAR, SQL_LONGVARCHAR, SQL_VARCHAR, DatabaseHandle


class MySQLHandle(DatabaseHandle):
    """
    Handle for MySQL/MariaDB databases.

    MySQL commits implicitly on DDL, so a DROP or CREATE executed inside
    a transaction is not undone by rollback(); only the inserts are.
    """

    placeholder = "%s"
    identifier_quote = "`"
    driver_error = (mysql.connector.Error,)
    type_names = {
        SQL_LONGVARCHAR: "LONGTEXT",
        SQL_VARCHAR: "VARCHAR(255)",
        SQL_CHAR: "CHAR(255)",
    }

    def connect(self):
        """
        Establish and open the database connection.
        """
        conn_info = {
            "user": self.config.get("user"),
            "password": self.config.get("password"),
            "host": self.config.get("host"),
            "database": self.config.get("database"),
            "port": self.config.get("port", 3306),
            "autocommit": True,
        }
        logger.info(
            f"Connecting to MySQL database at: {conn_info['host']}:{conn_info['port']}"
        )
        self.connection = mysql.connector.connect(**conn_info)

    def close(self):
        """
        Terminate the database connection.
        """
        if self.connection:
            logger.info("Closing MySQL connection.")
            self.connection.close()
            self.connection = None

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None):
        self._require_connection()
        with self._driver_errors("execute statement"):
            with self.connection.cursor() as cursor:
                cursor.execute(sql, tuple(params) if params else None)

    def begin(self):
        self._require_connection()
        with self._driver_errors("begin transaction"):
            self.connection.start_transaction()

    def commit(self):
        self._require_connection()
        with self._driver_errors("commit transaction"):
            self.connection.commit()

    def rollback(self):
        self._require_connection()
        with self._driver_errors("roll back transaction"):
            self.connection.rollback()
