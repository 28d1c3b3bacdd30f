"""
Field descriptors for attribute records.

A field spec is the ordered, immutable set of fields the reader extracts from
each attribute descriptor. Each field may carry a conversion applied to the
raw descriptor value before ignore rules see it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from dateutil import parser as date_parser

from attribute_reader.errors import ConfigurationError

Converter = Callable[[Any], Any]


def to_string(value: Any) -> str:
    """Convert to string; missing values become an empty string."""
    if value is None:
        return ""
    return str(value)


def to_int(value: Any) -> Optional[int]:
    """Convert to int; missing or empty values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return int(value)
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def to_float(value: Any) -> Optional[float]:
    """Convert to float; missing or empty values become None."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_boolean(value: Any) -> bool:
    """
    Convert to bool.

    Schema documents carry booleans as text, so "true" and "1" are true and
    everything else (including a missing value) is false.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    if isinstance(value, (int, float)):
        return value == 1
    return False


def to_date(value: Any) -> Optional[datetime]:
    """Parse a date/time value; unparseable or missing values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return date_parser.parse(str(value))
    except (ValueError, OverflowError):
        return None


# Built-in conversions selectable by field type name
CONVERTERS: dict[str, Optional[Converter]] = {
    "auto": None,
    "string": to_string,
    "int": to_int,
    "float": to_float,
    "boolean": to_boolean,
    "date": to_date,
}


@dataclass(frozen=True)
class RecordField:
    """
    A single field extracted from an attribute descriptor.

    Attributes:
        name: Descriptor key to read, and name of the record field
        type: Built-in conversion name (see CONVERTERS), default "auto"
        convert: Explicit conversion function; takes precedence over type
        default: Record default when the field is never assigned
    """

    name: str
    type: str = "auto"
    convert: Optional[Converter] = None
    default: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError("Field name must be a non-empty string")
        if self.type not in CONVERTERS:
            raise ConfigurationError(
                f"Unknown field type '{self.type}' for field '{self.name}' "
                f"(expected one of: {', '.join(CONVERTERS)})"
            )

    @property
    def converter(self) -> Optional[Converter]:
        """The conversion applied to raw values, if any."""
        if self.convert is not None:
            return self.convert
        return CONVERTERS[self.type]

    def extract(self, descriptor: Mapping[str, Any]) -> Any:
        """Read this field from a descriptor and apply the conversion."""
        value = descriptor.get(self.name)
        converter = self.converter
        if converter is not None:
            value = converter(value)
        return value


FieldLike = Union[str, Mapping[str, Any], RecordField]

FieldSpec = tuple[RecordField, ...]

# Fields read when none are configured
DEFAULT_FIELDS: FieldSpec = (
    RecordField("name"),
    RecordField("type"),
    RecordField("restriction"),
    RecordField("nillable", type="boolean"),
)

# Synthetic field holding the live feature value
VALUE_FIELD = RecordField("value")


def make_field(field: FieldLike) -> RecordField:
    """
    Normalize a field definition.

    Accepts a field name, a mapping with "name" and optional "type"/"convert"/
    "default" keys, or a RecordField.
    """
    if isinstance(field, RecordField):
        return field
    if isinstance(field, str):
        return RecordField(field)
    if isinstance(field, Mapping):
        unknown = set(field) - {"name", "type", "convert", "default"}
        if unknown:
            raise ConfigurationError(
                f"Unknown field option(s): {', '.join(sorted(unknown))}"
            )
        if "name" not in field:
            raise ConfigurationError(f"Field definition is missing 'name': {dict(field)}")
        return RecordField(
            name=field["name"],
            type=field.get("type") or "auto",
            convert=field.get("convert"),
            default=field.get("default"),
        )
    raise ConfigurationError(f"Invalid field definition: {field!r}")


def make_field_spec(fields: Optional[Iterable[FieldLike]]) -> FieldSpec:
    """Build an immutable field spec, rejecting duplicate names."""
    if fields is None:
        return DEFAULT_FIELDS

    spec = tuple(make_field(f) for f in fields)

    seen: set[str] = set()
    for f in spec:
        if f.name in seen:
            raise ConfigurationError(f"Duplicate field name: '{f.name}'")
        seen.add(f.name)

    return spec


def with_value_field(spec: FieldSpec) -> FieldSpec:
    """Append the synthetic "value" field unless the field spec already declares it."""
    if any(f.name == VALUE_FIELD.name for f in spec):
        return spec
    return spec + (VALUE_FIELD,)
