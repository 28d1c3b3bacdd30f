"""
Parser for WFS DescribeFeatureType responses.

A DescribeFeatureType response is an XML schema (xsd) document with one
complexType per feature type. Each element in the complexType sequence
describes one attribute of the feature type.
"""

import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
from xml.etree.ElementTree import Element, ElementTree

from defusedxml import ElementTree as SafeET
from defusedxml.ElementTree import ParseError as SafeParseError
from defusedxml.common import DefusedXmlException

from attribute_reader.errors import SchemaParseError

logger = logging.getLogger(__name__)

XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"

# Restriction facets copied as-is into the restriction dict
RESTRICTION_FACETS = (
    "length",
    "minLength",
    "maxLength",
    "pattern",
    "totalDigits",
    "fractionDigits",
    "minInclusive",
    "maxInclusive",
    "minExclusive",
    "maxExclusive",
    "whiteSpace",
)

XML_DECLARATION = re.compile(r"^\ufeff?\s*<\?xml\b[^>]*\?>")

SchemaInput = Union[str, bytes, Element, ElementTree]


def _split_tag(tag: str) -> tuple[Optional[str], str]:
    """Split an ElementTree tag into (namespace, local name)."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return None, tag


def _is_xsd(node: Element, local_name: str) -> bool:
    namespace, local = _split_tag(node.tag)
    return namespace == XSD_NAMESPACE and local == local_name


def _local_type(type_name: str) -> str:
    """Strip the namespace prefix from a qualified type name."""
    return type_name.split(":")[-1]


@dataclass
class FeatureTypeDescription:
    """One feature type from a DescribeFeatureType document."""

    type_name: str
    properties: list[dict[str, Any]] = field(default_factory=list)

    @property
    def property_names(self) -> list[str]:
        """Names of all properties, in document order."""
        return [p.get("name") for p in self.properties]

    def get_property(self, name: str) -> Optional[dict[str, Any]]:
        """Find a property by name."""
        for prop in self.properties:
            if prop.get("name") == name:
                return prop
        return None


@dataclass
class DescribeFeatureTypeData:
    """
    Complete parsed data from a DescribeFeatureType document.

    Contains the feature types and the schema root attributes.
    """

    feature_types: list[FeatureTypeDescription] = field(default_factory=list)

    # Namespace of the described feature types
    target_namespace: Optional[str] = None

    # Prefix bound to the target namespace, when the document declares one
    target_prefix: Optional[str] = None

    # All other schema root attributes (elementFormDefault, version, ...)
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def num_feature_types(self) -> int:
        """Number of feature types in the document."""
        return len(self.feature_types)

    def get_feature_type(self, type_name: str) -> Optional[FeatureTypeDescription]:
        """Find a feature type by name, with or without prefix."""
        for feature_type in self.feature_types:
            if feature_type.type_name == type_name or feature_type.type_name == _local_type(type_name):
                return feature_type
        return None


class DescribeFeatureTypeParser:
    """
    Parser for WFS DescribeFeatureType schema documents.

    Text input is parsed with defusedxml, so entity expansion and external
    references are refused.

    Usage:
        parser = DescribeFeatureTypeParser()
        data = parser.parse(response_text)

        for prop in data.feature_types[0].properties:
            print(f"{prop['name']}: {prop['localType']}")
    """

    def parse(self, data: SchemaInput) -> DescribeFeatureTypeData:
        """
        Parse a DescribeFeatureType document.

        Args:
            data: XML text, or an already parsed Element / ElementTree

        Returns:
            DescribeFeatureTypeData with feature types and properties

        Raises:
            SchemaParseError: If the XML is malformed or is not an xsd schema
        """
        namespaces: dict[str, str] = {}
        if isinstance(data, ElementTree):
            root = data.getroot()
        elif isinstance(data, Element):
            root = data
        elif isinstance(data, (str, bytes)):
            root, namespaces = self._parse_text(data)
        else:
            raise SchemaParseError(
                f"Cannot parse schema from {type(data).__name__}; expected text or an XML element"
            )

        if root is None or not _is_xsd(root, "schema"):
            tag = root.tag if root is not None else None
            raise SchemaParseError(f"Document root is not an xsd:schema element: {tag}")

        return self._read_schema(root, namespaces)

    def parse_file(self, file_path: str | Path) -> DescribeFeatureTypeData:
        """
        Parse a DescribeFeatureType document from a file.

        Raises:
            FileNotFoundError: If file doesn't exist
            SchemaParseError: If the XML is malformed
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        return self.parse(file_path.read_bytes())

    def _parse_text(self, text: str | bytes) -> tuple[Element, dict[str, str]]:
        """Parse XML text, collecting namespace declarations along the way."""
        if isinstance(text, str):
            # Already decoded; a declared encoding no longer applies
            text = XML_DECLARATION.sub("", text, count=1).encode("utf-8")

        namespaces: dict[str, str] = {}
        root = None
        try:
            for event, item in SafeET.iterparse(io.BytesIO(text), events=("start-ns", "start")):
                if event == "start-ns":
                    prefix, uri = item
                    namespaces.setdefault(uri, prefix)
                elif root is None:
                    root = item
        except (SafeParseError, DefusedXmlException) as e:
            raise SchemaParseError(f"Malformed schema document: {e}") from e

        if root is None:
            raise SchemaParseError("Schema document is empty")

        return root, namespaces

    def _read_schema(self, root: Element, namespaces: dict[str, str]) -> DescribeFeatureTypeData:
        result = DescribeFeatureTypeData()
        result.attributes = dict(root.attrib)
        result.target_namespace = result.attributes.pop("targetNamespace", None)
        if result.target_namespace is not None:
            result.target_prefix = namespaces.get(result.target_namespace) or None

        # Top-level elements map complexType names to feature type names
        element_names: dict[str, str] = {}
        for node in root:
            if _is_xsd(node, "element") and node.get("type") and node.get("name"):
                element_names[_local_type(node.get("type"))] = node.get("name")

        for node in root:
            if _is_xsd(node, "complexType"):
                result.feature_types.append(self._read_complex_type(node, element_names))

        logger.debug(
            f"Parsed schema with {result.num_feature_types} feature type(s) "
            f"in namespace {result.target_namespace}"
        )
        return result

    def _read_complex_type(
        self,
        node: Element,
        element_names: dict[str, str],
    ) -> FeatureTypeDescription:
        complex_name = node.get("name", "")
        feature_type = FeatureTypeDescription(
            type_name=element_names.get(complex_name, complex_name),
        )

        feature_type.properties = self._read_sequences(node)
        return feature_type

    def _read_sequences(self, node: Element) -> list[dict[str, Any]]:
        """Collect properties from sequences, descending through complexContent/extension."""
        properties = []
        for child in node:
            if _is_xsd(child, "sequence"):
                for element in child:
                    if _is_xsd(element, "element"):
                        properties.append(self._read_property(element))
            elif _is_xsd(child, "complexContent") or _is_xsd(child, "extension"):
                properties.extend(self._read_sequences(child))
        return properties

    def _read_property(self, node: Element) -> dict[str, Any]:
        prop: dict[str, Any] = dict(node.attrib)

        if "type" not in prop:
            restriction = self._read_restriction(node)
            if restriction is not None:
                prop["restriction"] = restriction
                prop["type"] = restriction.get("base")

        if prop.get("type"):
            prop["localType"] = _local_type(prop["type"])

        return prop

    def _read_restriction(self, node: Element) -> Optional[dict[str, Any]]:
        """Read an inline simpleType restriction, if the element has one."""
        restriction_node = node.find(
            f"{{{XSD_NAMESPACE}}}simpleType/{{{XSD_NAMESPACE}}}restriction"
        )
        if restriction_node is None:
            return None

        restriction: dict[str, Any] = {"base": restriction_node.get("base")}
        enumeration = []
        for facet in restriction_node:
            namespace, local = _split_tag(facet.tag)
            if namespace != XSD_NAMESPACE:
                continue
            if local == "enumeration":
                enumeration.append(facet.get("value"))
            elif local in RESTRICTION_FACETS:
                restriction[local] = facet.get("value")
        if enumeration:
            restriction["enumeration"] = enumeration

        return restriction
