"""
JSON writer for attribute result sets.

Writes the full ResultSet envelope (success, count, total, message,
records) to a JSON file.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from attribute_reader.result import ResultSet


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for datetime, Path and Pydantic objects."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        if hasattr(obj, "model_dump"):
            return obj.model_dump()
        return super().default(obj)


def result_to_json(result: ResultSet, indent: int | None = 2) -> str:
    """Serialize a result set to a JSON string."""
    return json.dumps(result.to_dict(), cls=JSONEncoder, indent=indent)


class JSONWriter:
    """
    Writes attribute result sets to JSON files.
    """

    def __init__(self, output_path: str | Path):
        """
        Initialize the JSON writer.

        Args:
            output_path: File to write; parent directories are created
        """
        self.output_path = Path(output_path)

    def write(self, result: ResultSet) -> Path:
        """
        Write a result set to JSON.

        Args:
            result: The ResultSet to write

        Returns:
            Path to the written JSON file
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.output_path, "w") as f:
            f.write(result_to_json(result))

        return self.output_path
