# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/py_table_loader

from typing import Any, List, NamedTuple, Optional, Sequence

from loguru import logger

from .base import SQL_LONGVARCHAR, DatabaseHandle
from .exceptions import ConfigurationError

FALLBACK_COLUMN_TYPE = "text"


class Column(NamedTuple):
    name: str
    data_type: str


def resolve_columns(
    columns: Optional[Sequence[Any]], default_type: str
) -> List[Column]:
    """
    Normalize a column list into (name, data_type) pairs.

    Args:
        columns: Column definitions. Each element may be a bare name,
                 a one-element sequence holding the name, or a (name, type) pair.
        default_type: Data type given to columns without an explicit one.

    Returns:
        A new list of Column tuples in the original order.

    Raises:
        ConfigurationError: If no columns were given.
    """
    if not columns:
        raise ConfigurationError("Unable to determine columns!")

    resolved = []
    for column in columns:
        if isinstance(column, str):
            resolved.append(Column(column, default_type))
        elif not isinstance(column, Sequence):
            resolved.append(Column(str(column), default_type))
        elif len(column) > 1:
            resolved.append(Column(column[0], column[1]))
        else:
            resolved.append(Column(column[0], default_type))
    return resolved


def default_column_type(
    handle: Optional[DatabaseHandle],
    explicit: Optional[str] = None,
    type_tag: Optional[int] = None,
) -> str:
    """
    Pick the data type used for columns without an explicit type.

    An explicit type wins. Otherwise the driver is asked which type name it
    uses for `type_tag` (SQL_LONGVARCHAR by default), falling back to 'text'
    when there is no handle or the driver cannot answer.
    """
    if explicit:
        return explicit

    if handle is None:
        return FALLBACK_COLUMN_TYPE

    if type_tag is None:
        type_tag = SQL_LONGVARCHAR

    try:
        data_type = handle.default_type_for(type_tag)
    except Exception as e:
        logger.debug(f"Driver could not provide a type for tag {type_tag}: {e}")
        data_type = None

    return data_type or FALLBACK_COLUMN_TYPE
