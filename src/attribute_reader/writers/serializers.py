"""
Serialization utilities for converting attribute records to table rows.

Handles nested schema values (restrictions, enumerations) and dates.
"""

import json
from datetime import datetime, timezone
from typing import Any

import pyarrow as pa

from attribute_reader.models.record import AttributeRecord


def serialize_value(value: Any, column_type: pa.DataType) -> Any:
    """
    Serialize a value for a column of the given type.

    Handles:
    - None -> preserved as None
    - naive datetimes -> assumed UTC
    - dicts/lists/Pydantic models -> JSON strings in string columns
    - other values in string columns -> str()

    Args:
        value: Record field value
        column_type: Target column type

    Returns:
        Parquet-compatible representation
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value
    if not pa.types.is_string(column_type):
        return value
    if hasattr(value, "model_dump"):
        return json.dumps(value.model_dump(), default=str)
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    if isinstance(value, bool):
        # JSON spelling, matching how schema documents write booleans
        return "true" if value else "false"
    return str(value)


def record_to_row(record: AttributeRecord, schema: pa.Schema) -> dict[str, Any]:
    """
    Convert an attribute record to a flat dict for Parquet.

    Args:
        record: The attribute record
        schema: Table schema (see schemas.schema_for_fields)

    Returns:
        Dict with keys matching the schema columns
    """
    data = record.to_dict()
    return {
        column.name: serialize_value(data.get(column.name), column.type)
        for column in schema
    }
