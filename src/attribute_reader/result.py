"""
Result set dataclass.

Holds the output of one attribute reader call.
"""

from dataclasses import dataclass, field
from typing import Any

from attribute_reader.models.record import AttributeRecord


@dataclass
class ResultSet:
    """
    Records produced by reading one schema document or descriptor list.

    Attributes:
        success: Always True; failures raise instead
        records: Attribute records, in descriptor order
        count: Number of records
        total: Number of records (no pagination)
        message: Always empty
    """

    success: bool = True
    records: list[AttributeRecord] = field(default_factory=list)
    count: int = 0
    total: int = 0
    message: str = ""

    @classmethod
    def from_records(cls, records: list[AttributeRecord]) -> "ResultSet":
        """Create a successful result set holding all records."""
        return cls(
            success=True,
            records=records,
            count=len(records),
            total=len(records),
            message="",
        )

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "count": self.count,
            "total": self.total,
            "message": self.message,
            "records": [r.to_dict() for r in self.records],
        }

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [f"Attributes: {self.count}"]
        for record in self.records:
            data = record.to_dict()
            name = data.get("name", "?")
            details = ", ".join(
                f"{k}={v}" for k, v in data.items() if k != "name" and v is not None
            )
            lines.append(f"  - {name}" + (f" ({details})" if details else ""))
        return "\n".join(lines)
