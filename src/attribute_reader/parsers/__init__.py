"""
Schema parsers.

Provides the default parser for WFS DescribeFeatureType documents. Any
object with a compatible ``parse(data)`` method can replace it.
"""

from typing import Any, Protocol

from attribute_reader.parsers.describe_feature_type import (
    XSD_NAMESPACE,
    DescribeFeatureTypeData,
    DescribeFeatureTypeParser,
    FeatureTypeDescription,
)

__all__ = [
    "SchemaParser",
    "DescribeFeatureTypeParser",
    "DescribeFeatureTypeData",
    "FeatureTypeDescription",
    "XSD_NAMESPACE",
]


class SchemaParser(Protocol):
    """Contract for schema parsers used by the attribute reader."""

    def parse(self, data: Any) -> DescribeFeatureTypeData:
        ...
