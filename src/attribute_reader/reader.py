"""
Attribute record builder.

Turns a DescribeFeatureType response, or a list of already parsed attribute
descriptors, into a ResultSet of attribute records. Records can be filtered
with ignore rules and enriched with the current values of a feature.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union
from xml.etree.ElementTree import Element, ElementTree

from attribute_reader.config import ReaderConfig
from attribute_reader.errors import FeatureTypeCountError
from attribute_reader.ignore import IgnoreMatcher, make_ignore_rules
from attribute_reader.models.feature import FeatureContext
from attribute_reader.models.fields import (
    VALUE_FIELD,
    FieldLike,
    FieldSpec,
    make_field_spec,
    with_value_field,
)
from attribute_reader.models.record import AttributeRecord, make_record_model
from attribute_reader.parsers import DescribeFeatureTypeParser, SchemaParser
from attribute_reader.result import ResultSet

logger = logging.getLogger(__name__)


@dataclass
class SchemaResponse:
    """
    A fetched DescribeFeatureType response.

    Attributes:
        response_xml: Parsed XML document, if the transport produced one
        response_text: Raw response body
    """

    response_xml: Optional[Union[Element, ElementTree]] = None
    response_text: Union[str, bytes] = ""


def _select_document(response: Any) -> Any:
    """Pick the parsed XML document if it is usable, else the raw text."""
    document = getattr(response, "response_xml", None)
    if isinstance(document, ElementTree):
        if document.getroot() is not None:
            return document
    elif document is not None:
        return document
    return getattr(response, "response_text", None)


def _feature_type_properties(parsed: Any) -> list[Mapping[str, Any]]:
    """
    Get the property list of the single feature type of a parsed document.

    Accepts parser output exposing ``feature_types`` or a mapping with a
    ``featureTypes``/``feature_types`` list.

    Raises:
        FeatureTypeCountError: If the document has zero or several feature types
    """
    if isinstance(parsed, Mapping):
        feature_types = parsed.get("featureTypes", parsed.get("feature_types"))
    else:
        feature_types = getattr(parsed, "feature_types", None)
    feature_types = list(feature_types or [])

    if len(feature_types) != 1:
        raise FeatureTypeCountError(len(feature_types))

    feature_type = feature_types[0]
    if isinstance(feature_type, Mapping):
        return list(feature_type.get("properties") or [])
    return list(feature_type.properties)


class AttributeRecordBuilder:
    """
    Builds attribute records from DescribeFeatureType data.

    Configuration (fields, ignore rules, feature, parser) is fixed at
    construction. Calls never change the builder, so one instance can serve
    many calls.

    Usage:
        builder = AttributeRecordBuilder(
            fields=["name", "type"],
            ignore={"name": re.compile("^geom")},
        )
        result = builder.build_records(schema_text)

        for record in result.records:
            print(f"{record.name}: {record.type}")
    """

    def __init__(
        self,
        fields: Optional[Iterable[FieldLike]] = None,
        parser: Optional[SchemaParser] = None,
        ignore: Optional[Mapping[str, Any]] = None,
        feature: Any = None,
    ):
        """
        Initialize the builder.

        Args:
            fields: Field names or definitions records carry (default fields if None)
            parser: Schema parser (defaults to DescribeFeatureTypeParser)
            ignore: Ignore rules keyed by field name
            feature: Feature context, object with an ``attributes`` mapping,
                     or plain mapping of attribute values

        Raises:
            ConfigurationError: If the field spec is invalid
            IgnoreRuleError: If an ignore rule has an unrecognized shape
        """
        self.parser: SchemaParser = parser or DescribeFeatureTypeParser()
        self.ignore: dict[str, IgnoreMatcher] = make_ignore_rules(ignore)
        self.feature = FeatureContext.coerce(feature)

        spec = make_field_spec(fields)
        if self.feature is not None:
            spec = with_value_field(spec)
        self._fields: FieldSpec = spec
        self.record_model: type[AttributeRecord] = make_record_model(spec)

        logger.debug(
            f"Attribute reader fields: {[f.name for f in spec]}, "
            f"ignore rules: {sorted(self.ignore)}, feature: {self.feature is not None}"
        )

    @classmethod
    def from_config(cls, config: ReaderConfig) -> "AttributeRecordBuilder":
        """Create a builder from a validated configuration."""
        return cls(
            fields=config.fields,
            parser=config.parser,
            ignore=config.ignore,
            feature=config.feature,
        )

    @property
    def fields(self) -> FieldSpec:
        """The field spec records carry."""
        return self._fields

    def parse_response(self, response: Any) -> ResultSet:
        """
        Read a transport response.

        Uses the response's parsed XML document when it exists and has a
        root element, otherwise the raw response text.

        Args:
            response: Object exposing ``response_xml`` and ``response_text``

        Returns:
            ResultSet with the attribute records
        """
        return self.build_records(_select_document(response))

    def build_records(self, data: Any) -> ResultSet:
        """
        Build attribute records.

        Args:
            data: A list of attribute descriptors (used directly), or schema
                  data handed to the parser

        Returns:
            ResultSet with one record per descriptor that was not ignored

        Raises:
            FeatureTypeCountError: If parsed data does not describe exactly one feature type
        """
        if isinstance(data, (list, tuple)):
            attributes = data
        else:
            logger.debug(f"Parsing schema data with {type(self.parser).__name__}")
            attributes = _feature_type_properties(self.parser.parse(data))

        records = []
        for attr in attributes:
            values = self._read_values(attr)
            if values is not None:
                records.append(self.record_model(**values))

        logger.debug(
            f"Built {len(records)} attribute record(s), ignored {len(attributes) - len(records)}"
        )
        return ResultSet.from_records(records)

    def should_ignore(self, field_name: str, value: Any) -> bool:
        """
        Determine if a record should be ignored.

        Args:
            field_name: The field name
            value: The field value

        Returns:
            True if an ignore rule for the field matches the value
        """
        matcher = self.ignore.get(field_name)
        if matcher is None:
            return False
        return matcher.matches(value)

    def _read_values(self, attr: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        """Collect field values for one descriptor, or None if it is ignored."""
        values: dict[str, Any] = {}
        for f in self._fields:
            value = f.extract(attr)
            if self.should_ignore(f.name, value):
                return None
            # An absent descriptor value leaves the field unassigned
            if f is not VALUE_FIELD or f.name in attr:
                values[f.name] = value

        if self.feature is not None:
            feature_attributes = self.feature.attributes
            name = values.get("name")
            if name is not None and name in feature_attributes:
                value = feature_attributes[name]
                if self.should_ignore(VALUE_FIELD.name, value):
                    return None
                values[VALUE_FIELD.name] = value

        return values


def read_attributes(
    file_path: str | Path,
    config: Optional[ReaderConfig] = None,
) -> ResultSet:
    """
    Convenience function to read attribute records from a schema file.

    For more control, create an AttributeRecordBuilder directly.

    Args:
        file_path: Path to a DescribeFeatureType document
        config: Reader configuration (defaults if None)

    Returns:
        ResultSet with the attribute records

    Example:
        result = read_attributes("/data/states.xsd")
        print(f"Read {result.count} attributes")
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    builder = AttributeRecordBuilder.from_config(config if config is not None else ReaderConfig())
    return builder.parse_response(SchemaResponse(response_text=file_path.read_bytes()))
