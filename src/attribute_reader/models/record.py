"""
Attribute record model.

Records are immutable pydantic models. Their fields are not known until a
field spec is configured, so each reader builds its own record model class
with make_record_model().
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, create_model

from attribute_reader.errors import ConfigurationError
from attribute_reader.models.fields import VALUE_FIELD, FieldSpec


class AttributeRecord(BaseModel):
    """
    Base model for attribute records.

    Provides:
    - Immutability once created
    - Tracking of whether the synthetic "value" field was assigned
    - Dict serialization
    """

    model_config = ConfigDict(
        # Records are create-once
        frozen=True,
        # Descriptor values are passed through untouched
        arbitrary_types_allowed=True,
        # Field names come from schema documents, e.g. "model"
        protected_namespaces=(),
    )

    @property
    def has_value(self) -> bool:
        """
        Check if a feature value was assigned to this record.

        A record whose feature value is None still has a value; a record
        whose attribute is absent from the feature does not.
        """
        return VALUE_FIELD.name in self.model_fields_set

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.model_dump()


def make_record_model(
    fields: FieldSpec,
    model_name: str = "AttributeRecord",
) -> type[AttributeRecord]:
    """
    Create a record model class with one field per field spec entry.

    Args:
        fields: The field spec the records carry
        model_name: Name of the generated class

    Returns:
        AttributeRecord subclass

    Raises:
        ConfigurationError: If a field name cannot be used as a model field
    """
    definitions: dict[str, Any] = {}
    for f in fields:
        if not f.name.isidentifier() or f.name.startswith("_"):
            raise ConfigurationError(
                f"Field name '{f.name}' must be a valid identifier not starting with '_'"
            )
        definitions[f.name] = (Optional[Any], f.default)

    return create_model(model_name, __base__=AttributeRecord, **definitions)
