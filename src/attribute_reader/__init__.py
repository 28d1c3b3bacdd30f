"""
Attribute Reader - Feature type attribute records from WFS schema documents.

This package reads WFS DescribeFeatureType documents (or already parsed
attribute lists) into uniform attribute records, with optional ignore
filtering and enrichment from a live feature.
"""

__version__ = "0.1.0"

from attribute_reader.config import ReaderConfig
from attribute_reader.errors import (
    AttributeReaderError,
    ConfigurationError,
    FeatureTypeCountError,
    IgnoreRuleError,
    SchemaParseError,
)
from attribute_reader.ignore import ExactValue, IgnoreMatcher, OneOf, Pattern
from attribute_reader.models import AttributeRecord, FeatureContext, RecordField
from attribute_reader.parsers import DescribeFeatureTypeData, DescribeFeatureTypeParser
from attribute_reader.reader import AttributeRecordBuilder, SchemaResponse, read_attributes
from attribute_reader.result import ResultSet
from attribute_reader.writers import JSONWriter, ParquetWriter, write_result

__all__ = [
    # Reader
    "AttributeRecordBuilder",
    "SchemaResponse",
    "ResultSet",
    "read_attributes",
    # Configuration
    "ReaderConfig",
    "RecordField",
    "FeatureContext",
    "AttributeRecord",
    # Ignore matchers
    "IgnoreMatcher",
    "ExactValue",
    "OneOf",
    "Pattern",
    # Parsing
    "DescribeFeatureTypeParser",
    "DescribeFeatureTypeData",
    # Errors
    "AttributeReaderError",
    "ConfigurationError",
    "FeatureTypeCountError",
    "IgnoreRuleError",
    "SchemaParseError",
    # Writers
    "JSONWriter",
    "ParquetWriter",
    "write_result",
]
