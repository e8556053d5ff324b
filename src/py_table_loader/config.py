# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Optional, Sequence

from .base import DatabaseHandle
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class LoaderConfig:
    """
    Options for a single table load.

    Empty strings and None mean "generate the default" for every SQL fragment.

    Attributes:
        columns: Column definitions (bare names or (name, type) pairs).
                 When None, the first raw row of the data is used as the names.
        data: The rows to load: a list of lists, a pandas DataFrame or a RowSource.
        handle: The database handle statements are executed on.
        name: Base table name; the row source provides a default ('data').
        name_prefix: String prepended to the table name.
        name_suffix: String appended to the table name.
        catalog: Catalog qualifier passed to the handle's identifier quoting.
        schema: Schema qualifier passed to the handle's identifier quoting.
        table_type: Inserted before TABLE in CREATE (e.g. 'TEMPORARY').
        create: Whether to execute the CREATE TABLE statement.
        create_prefix: Everything before the column definitions.
        create_suffix: Everything after the column definitions.
        create_sql: The complete CREATE TABLE statement.
        drop: Whether to execute a DROP TABLE statement before creating.
        drop_prefix: Everything before the table name in DROP.
        drop_suffix: Everything after the table name in DROP.
        drop_sql: The complete DROP TABLE statement.
        quoted_name: The full, quoted table name, bypassing identifier quoting.
        default_column_type: Data type for columns without an explicit type.
        default_sql_data_type: SQL standard type code the driver is asked
                               about when default_column_type is not set.
        transaction: Whether to wrap the load in a transaction.
        row_source: Zero-argument callable returning the next row or None,
                    used instead of the data's own rows.
        row_filter: Callable deciding whether a raw row is loaded.
        row_transform: Callable returning a replacement for each row.
        invalid_row_policy: None, 'raise', 'warn', or a callable receiving
                            (loader, message, row). The message is the
                            text of the row's RowValidationError.
    """

    columns: Optional[Sequence[Any]] = None
    data: Any = None
    handle: Optional[DatabaseHandle] = None
    name: str = ""
    name_prefix: str = ""
    name_suffix: str = ""
    catalog: Optional[str] = None
    schema: Optional[str] = None
    table_type: str = ""
    create: bool = True
    create_prefix: str = ""
    create_suffix: str = ""
    create_sql: str = ""
    drop: bool = False
    drop_prefix: str = ""
    drop_suffix: str = ""
    drop_sql: str = ""
    quoted_name: Optional[str] = None
    default_column_type: str = ""
    default_sql_data_type: Optional[int] = None
    transaction: bool = True
    row_source: Optional[Callable[[], Any]] = None
    row_filter: Optional[Callable[[Any], bool]] = None
    row_transform: Optional[Callable[[Any], Any]] = None
    invalid_row_policy: Any = None

    @classmethod
    def option_names(cls) -> frozenset:
        return frozenset(field.name for field in fields(cls))

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> "LoaderConfig":
        """
        Build a config from an untyped mapping of options.

        Raises:
            ConfigurationError: If the mapping contains unknown option names.
        """
        unknown = sorted(set(options) - cls.option_names())
        if unknown:
            raise ConfigurationError(f"Unknown options: {', '.join(unknown)}")
        return cls(**options)
