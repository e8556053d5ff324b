# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from pathlib import Path

import duckdb
import pytest

from py_table_loader.base import SQL_LONGVARCHAR
from py_table_loader.config import LoaderConfig
from py_table_loader.duckdb_handle import DuckDBHandle
from py_table_loader.exceptions import ExecutionError
from py_table_loader.loader import TableLoader
from py_table_loader.main import get_handle


def test_get_handle_duckdb():
    """
    Test that get_handle returns a DuckDBHandle instance for db_type 'duckdb'.
    """
    handle = get_handle({"db_type": "duckdb"})
    assert isinstance(handle, DuckDBHandle)


def test_duckdb_handle_connect_in_memory():
    """
    Test the connect method with an in-memory DuckDB database.
    """
    handle = DuckDBHandle({"db_type": "duckdb", "db_path": ":memory:"})
    handle.connect()
    assert isinstance(handle.connection, duckdb.DuckDBPyConnection)
    handle.close()
    assert handle.connection is None


def test_duckdb_handle_connect_on_disk(tmp_path: Path):
    """
    Test the connect method with a file-based DuckDB database.
    """
    db_file = tmp_path / "test.db"
    handle = DuckDBHandle({"db_type": "duckdb", "db_path": str(db_file)})
    handle.connect()
    assert db_file.exists()
    handle.close()


def test_duckdb_handle_default_type():
    """
    Test that DuckDB reports VARCHAR as its long varchar type.
    """
    assert DuckDBHandle({}).default_type_for(SQL_LONGVARCHAR) == "VARCHAR"


def test_duckdb_handle_transaction_rollback():
    """
    Test that rollback undoes statements made since begin.
    """
    with DuckDBHandle({"db_path": ":memory:"}) as handle:
        handle.execute('CREATE TABLE "t" ("a" VARCHAR)')
        handle.begin()
        handle.execute('INSERT INTO "t" VALUES(?)', ["x"])
        handle.rollback()
        assert handle.connection.execute('SELECT COUNT(*) FROM "t"').fetchone() == (0,)


def test_duckdb_handle_wraps_driver_errors():
    """
    Test that driver errors are raised as ExecutionError.
    """
    with DuckDBHandle({"db_path": ":memory:"}) as handle:
        with pytest.raises(ExecutionError):
            handle.execute("SELECT * FROM missing")


def test_duckdb_table_loader_round_trip():
    """
    Test a full table load into DuckDB.
    """
    with DuckDBHandle({"db_path": ":memory:"}) as handle:
        loader = TableLoader(
            LoaderConfig(
                handle=handle,
                data=[["color", "size"], ["black", "medium"], ["green", "small"]],
                drop=False,
            )
        )
        assert loader.load() == 2
        assert loader.columns[0].data_type == "VARCHAR"
        rows = handle.connection.execute(
            'SELECT * FROM "data" ORDER BY "color"'
        ).fetchall()
    assert rows == [("black", "medium"), ("green", "small")]


def test_duckdb_handle_execute_no_connection():
    """
    Test that execute raises a ConnectionError if connect has not been called.
    """
    with pytest.raises(
        ConnectionError, match="Database connection is not established."
    ):
        DuckDBHandle({}).execute("SELECT 1")
