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
from typing import List, Optional

from loguru import logger

from .base import DatabaseHandle
from .columns import Column, default_column_type, resolve_columns
from .config import LoaderConfig
from .exceptions import ConfigurationError
from .rows import RowPipeline, resolve_invalid_row_handler
from .sources import RowSource, source_for
from .sql import SqlGenerator


class TableLoader:
    """
    Loads a data set into a database table.

    Columns are resolved when the loader is created: if none are configured,
    the first raw row of the data is taken as the column names. A loader is
    meant for a single load() call; generated names and statements are
    computed once and never recomputed.

    Example:
        loader = TableLoader(LoaderConfig(handle=handle, data=rows))
        count = loader.load()
    """

    def __init__(self, config: LoaderConfig, source: Optional[RowSource] = None):
        self.config = config
        self.source = source if source is not None else source_for(config.data)
        self.invalid_row_handler = resolve_invalid_row_handler(
            config.invalid_row_policy
        )

        columns = config.columns
        if columns is None:
            # header row: bypasses filter and transform
            if config.row_source is not None:
                columns = config.row_source()
            else:
                columns = self.source.next_raw_row()
        self.columns: List[Column] = resolve_columns(
            columns, self.default_column_type
        )

    @property
    def handle(self) -> Optional[DatabaseHandle]:
        return self.config.handle

    @cached_property
    def default_column_type(self) -> str:
        return default_column_type(
            self.handle,
            explicit=self.config.default_column_type,
            type_tag=self.config.default_sql_data_type,
        )

    @cached_property
    def name(self) -> str:
        """
        The full table name: name_prefix + (name or the source's default) + name_suffix.
        """
        return (
            self.config.name_prefix
            + (self.config.name or self.source.default_name())
            + self.config.name_suffix
        )

    @property
    def column_names(self) -> List[str]:
        return self.sql.column_names

    @cached_property
    def sql(self) -> SqlGenerator:
        self._require_handle()
        return SqlGenerator(self.handle, self.columns, self.name, self.config)

    @property
    def quoted_name(self) -> str:
        return self.sql.quoted_name

    @property
    def create_sql(self) -> str:
        return self.sql.create_sql

    @property
    def drop_sql(self) -> str:
        return self.sql.drop_sql

    @property
    def insert_sql(self) -> str:
        return self.sql.insert_sql

    def rows(self) -> RowPipeline:
        """
        Return a fresh pipeline over the remaining rows of the source.
        """
        return RowPipeline(
            self.source,
            len(self.columns),
            fetch=self.config.row_source,
            row_filter=self.config.row_filter,
            row_transform=self.config.row_transform,
            invalid_row_handler=self.invalid_row_handler,
            context=self,
        )

    def drop(self):
        """
        Execute the DROP TABLE statement.
        """
        logger.info(f"Dropping table: {self.name}")
        logger.debug(self.drop_sql)
        self.handle.execute(self.drop_sql)

    def create(self):
        """
        Execute the CREATE TABLE statement.
        """
        logger.info(f"Creating table: {self.name}")
        logger.debug(self.create_sql)
        self.handle.execute(self.create_sql)

    def insert_all(self) -> int:
        """
        Insert every row produced by the row pipeline and return how many were inserted.
        """
        logger.debug(self.insert_sql)
        statement = self.handle.prepare(self.insert_sql)
        count = 0
        for row in self.rows():
            statement.execute(*row)
            count += 1
        return count

    def load(self) -> int:
        """
        Drop (if configured), create (if configured) and fill the table.

        With `transaction` enabled every statement runs in one transaction
        that is rolled back if any of them fails.

        Returns:
            The number of rows inserted.
        """
        self._require_handle()
        logger.info(f"Loading data into table: {self.name}")

        if self.config.transaction:
            self.handle.begin()

        try:
            if self.config.drop:
                self.drop()
            if self.config.create:
                self.create()
            count = self.insert_all()
        except Exception:
            if self.config.transaction:
                self._rollback()
            raise
        finally:
            self.source.close()

        if self.config.transaction:
            self.handle.commit()

        logger.info(f"Loaded {count} rows into table: {self.name}")
        return count

    def _rollback(self):
        logger.info(f"Rolling back load of table: {self.name}")
        try:
            self.handle.rollback()
        except Exception as e:
            logger.error(f"Failed to roll back transaction: {e}")

    def _require_handle(self):
        if self.handle is None:
            raise ConfigurationError("A database handle is required to load a table.")
