"""
PyArrow schema definitions for attribute record tables.

The table layout follows the reader's field spec: one column per field,
typed from the field's conversion.
"""

from typing import Optional

import pyarrow as pa

from attribute_reader.models.fields import FieldSpec

# Column types for built-in field conversions
FIELD_TYPE_ARROW = {
    "int": pa.int64(),
    "float": pa.float64(),
    "boolean": pa.bool_(),
    "date": pa.timestamp("us", tz="UTC"),
    "string": pa.string(),
}


def arrow_type_for_field(field_type: str, has_custom_convert: bool = False) -> pa.DataType:
    """
    Get the column type for a field.

    Fields with a custom conversion or "auto" type can hold anything, so
    they are stored as strings.
    """
    if has_custom_convert:
        return pa.string()
    return FIELD_TYPE_ARROW.get(field_type, pa.string())


def schema_for_fields(fields: FieldSpec, description: Optional[str] = None) -> pa.Schema:
    """
    Build the table schema for a field spec.

    Args:
        fields: Reader field spec
        description: Optional table description stored in schema metadata

    Returns:
        PyArrow schema with one column per field
    """
    schema = pa.schema(
        [
            pa.field(f.name, arrow_type_for_field(f.type, f.convert is not None))
            for f in fields
        ]
    )
    if description:
        schema = schema.with_metadata({b"description": description.encode("utf-8")})
    return schema
