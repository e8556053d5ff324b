# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from functools import cached_property
from typing import List, Optional, Sequence

from .base import DatabaseHandle
from .columns import Column
from .config import LoaderConfig


class SqlGenerator:
    """
    Builds the DROP, CREATE and INSERT statements for one table.

    Every statement and fragment is computed on first access and kept;
    configured values are used verbatim instead of generating them.
    """

    def __init__(
        self,
        handle: Optional[DatabaseHandle],
        columns: Sequence[Column],
        name: str,
        config: LoaderConfig,
    ):
        self.handle = handle
        self.columns = columns
        self.name = name
        self.config = config

    @cached_property
    def quoted_name(self) -> str:
        """
        The full table name including catalog and schema, quoted by the handle.
        """
        if self.config.quoted_name:
            return self.config.quoted_name
        return self.handle.quote_identifier(
            self.config.catalog, self.config.schema, self.name
        )

    @cached_property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    @cached_property
    def quoted_column_names(self) -> List[str]:
        return [self.handle.quote_identifier(name) for name in self.column_names]

    @cached_property
    def create_prefix(self) -> str:
        return (
            self.config.create_prefix
            or f"CREATE {self.config.table_type} TABLE {self.quoted_name} ("
        )

    @cached_property
    def create_suffix(self) -> str:
        return self.config.create_suffix or ")"

    @cached_property
    def create_sql(self) -> str:
        if self.config.create_sql:
            return self.config.create_sql

        column_definitions = ", ".join(
            f"{quoted} {column.data_type}"
            for quoted, column in zip(self.quoted_column_names, self.columns)
        )
        return " ".join([self.create_prefix, column_definitions, self.create_suffix])

    @cached_property
    def drop_prefix(self) -> str:
        # Plain DROP TABLE, without table_type: SQLite, PostgreSQL and MySQL all accept it.
        return self.config.drop_prefix or "DROP TABLE"

    @cached_property
    def drop_suffix(self) -> str:
        return self.config.drop_suffix

    @cached_property
    def drop_sql(self) -> str:
        if self.config.drop_sql:
            return self.config.drop_sql
        return " ".join([self.drop_prefix, self.quoted_name, self.drop_suffix])

    @cached_property
    def insert_sql(self) -> str:
        placeholders = ", ".join([self.handle.placeholder] * len(self.columns))
        return " ".join(
            [
                "INSERT INTO",
                self.quoted_name,
                "(",
                ", ".join(self.quoted_column_names),
                ")",
                "VALUES(",
                placeholders,
                ")",
            ]
        )
