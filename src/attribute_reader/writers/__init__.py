"""
Writers module for outputting attribute result sets to JSON and Parquet files.

Module structure:
- schemas.py: PyArrow schema derived from a field spec
- serializers.py: Record-to-row conversion utilities
- parquet_writer.py: ParquetWriter class
- json_writer.py: JSONWriter class
"""

from pathlib import Path
from typing import Optional

from attribute_reader.models.fields import FieldSpec
from attribute_reader.result import ResultSet

from .json_writer import JSONEncoder, JSONWriter, result_to_json
from .parquet_writer import ParquetWriter
from .schemas import arrow_type_for_field, schema_for_fields
from .serializers import record_to_row, serialize_value

__all__ = [
    # Schemas
    "arrow_type_for_field",
    "schema_for_fields",
    # Serializers
    "serialize_value",
    "record_to_row",
    # Writers
    "JSONEncoder",
    "JSONWriter",
    "ParquetWriter",
    "OUTPUT_FORMATS",
    # Convenience functions
    "result_to_json",
    "write_result",
]

OUTPUT_FORMATS = ("json", "parquet")


def write_result(
    result: ResultSet,
    output_path: str | Path,
    output_format: str = "json",
    fields: Optional[FieldSpec] = None,
) -> Path:
    """
    Convenience function to write a result set.

    Args:
        result: The ResultSet to write
        output_path: File to write
        output_format: "json" or "parquet"
        fields: Field spec for Parquet column types

    Returns:
        Path to the written file
    """
    if output_format == "json":
        return JSONWriter(output_path).write(result)
    if output_format == "parquet":
        return ParquetWriter(output_path).write(result, fields=fields)
    raise ValueError(f"Unsupported output format: {output_format} (expected one of {OUTPUT_FORMATS})")
