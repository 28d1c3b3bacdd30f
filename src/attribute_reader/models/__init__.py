"""
Models for attribute records.

- Field descriptors and conversions
- Attribute record base model
- Feature context
"""

from attribute_reader.models.feature import FeatureContext
from attribute_reader.models.fields import (
    CONVERTERS,
    DEFAULT_FIELDS,
    VALUE_FIELD,
    FieldSpec,
    RecordField,
    make_field,
    make_field_spec,
    with_value_field,
)
from attribute_reader.models.record import AttributeRecord, make_record_model

__all__ = [
    "AttributeRecord",
    "make_record_model",
    "FeatureContext",
    "RecordField",
    "FieldSpec",
    "CONVERTERS",
    "DEFAULT_FIELDS",
    "VALUE_FIELD",
    "make_field",
    "make_field_spec",
    "with_value_field",
]
