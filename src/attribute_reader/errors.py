"""
Exception types raised by the attribute reader.

Builder errors are never translated into a failed ResultSet; they propagate
to the caller.
"""


class AttributeReaderError(Exception):
    """Base class for all attribute reader errors."""


class SchemaParseError(AttributeReaderError, ValueError):
    """Raised when a describe-feature-type document cannot be parsed."""


class FeatureTypeCountError(AttributeReaderError, ValueError):
    """Raised when a schema document does not describe exactly one feature type."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Expected exactly one feature type in the schema document, found {count} "
            "(multiple or zero feature types are not supported)"
        )


class IgnoreRuleError(AttributeReaderError, TypeError):
    """Raised when an ignore rule has an unrecognized shape."""


class ConfigurationError(AttributeReaderError, ValueError):
    """Raised when reader configuration is invalid."""
