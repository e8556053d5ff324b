# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Optional, Sequence, Tuple, Type

from .exceptions import ExecutionError

# SQL standard type codes as used by ODBC and DBI.
SQL_CHAR = 1
SQL_VARCHAR = 12
SQL_LONGVARCHAR = -1


class PreparedStatement:
    """
    A statement prepared once and executed with a new set of parameters per row.
    """

    def __init__(self, handle: "DatabaseHandle", sql: str):
        self.handle = handle
        self.sql = sql

    def execute(self, *params: Any):
        self.handle.execute(self.sql, params)


class DatabaseHandle(ABC):
    """
    Abstract base class for all database handles.

    A handle wraps one driver connection and exposes the small set of
    capabilities a table loader needs: executing statements, transactions,
    identifier quoting and the driver's name for a SQL standard type.
    """

    # Marker for a positional parameter in the driver's paramstyle.
    placeholder = "?"
    identifier_quote = '"'
    # Driver exception class(es) to be wrapped in ExecutionError.
    driver_error: Tuple[Type[BaseException], ...] = ()
    type_names: Dict[int, str] = {}

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.connection = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @abstractmethod
    def connect(self):
        """
        Establish and open the database connection.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self):
        """
        Terminate the database connection.
        """
        raise NotImplementedError

    @abstractmethod
    def execute(self, sql: str, params: Optional[Sequence[Any]] = None):
        """
        Execute a single statement, optionally with positional parameters.
        """
        raise NotImplementedError

    @abstractmethod
    def begin(self):
        """
        Start a transaction.
        """
        raise NotImplementedError

    @abstractmethod
    def commit(self):
        """
        Commit the current transaction.
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self):
        """
        Roll back the current transaction.
        """
        raise NotImplementedError

    def prepare(self, sql: str) -> PreparedStatement:
        return PreparedStatement(self, sql)

    def quote_identifier(self, *parts: Optional[str]) -> str:
        """
        Quote each non-empty identifier part and join them with dots.

        quote_identifier(None, "main", "data") -> '"main"."data"'
        """
        quote = self.identifier_quote
        return ".".join(
            quote + str(part).replace(quote, quote * 2) + quote
            for part in parts
            if part is not None and part != ""
        )

    def default_type_for(self, type_tag: int) -> Optional[str]:
        """
        Return the driver's type name for a SQL standard type code, if it has one.
        """
        return self.type_names.get(type_tag)

    def _require_connection(self):
        if not self.connection:
            raise ConnectionError("Database connection is not established.")

    @contextmanager
    def _driver_errors(self, action: str):
        """
        Re-raise driver exceptions as ExecutionError.
        """
        try:
            yield
        except self.driver_error as e:
            raise ExecutionError(f"Failed to {action}: {e}") from e
