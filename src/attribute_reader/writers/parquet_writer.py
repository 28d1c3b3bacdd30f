"""
Parquet file writer for attribute result sets.

Writes one row per attribute record, with columns derived from the reader's
field spec.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pyarrow as pa
import pyarrow.parquet as pq

from attribute_reader.models.fields import FieldSpec, RecordField
from attribute_reader.result import ResultSet

from .schemas import schema_for_fields
from .serializers import record_to_row


class ParquetWriter:
    """
    Writes attribute result sets to Parquet files.

    Example:
        builder = AttributeRecordBuilder(fields=["name", "type"])
        result = builder.build_records(schema_text)

        writer = ParquetWriter("/data/attributes.parquet")
        writer.write(result, fields=builder.fields)
    """

    def __init__(self, output_path: str | Path):
        """
        Initialize the writer.

        Args:
            output_path: File to write; parent directories are created
        """
        self.output_path = Path(output_path)

    def write(self, result: ResultSet, fields: Optional[FieldSpec] = None) -> Path:
        """
        Write a result set to Parquet.

        Args:
            result: The ResultSet to write
            fields: Field spec the records were built with. Without it,
                    columns are taken from the record model as strings.

        Returns:
            Path to the written file
        """
        if fields is None:
            fields = self._fields_from_records(result)

        schema = schema_for_fields(fields, description="Feature type attributes")
        rows = [record_to_row(record, schema) for record in result.records]
        table = pa.Table.from_pylist(rows, schema=schema)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        pq.write_table(table, self.output_path)
        return self.output_path

    @staticmethod
    def _fields_from_records(result: ResultSet) -> FieldSpec:
        if not result.records:
            return ()
        model = type(result.records[0])
        return tuple(RecordField(name) for name in model.model_fields)
