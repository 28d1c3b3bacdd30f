"""
Reader configuration.

The configuration surface is set once, when a reader is created:
fields, ignore rules, feature context and parser. It can be written as JSON:

    {
        "fields": ["name", {"name": "nillable", "type": "boolean"}],
        "ignore": {"name": {"pattern": "^geom"}, "type": ["gml:PointPropertyType"]},
        "feature": {"attributes": {"FOO": 42}}
    }
"""

import json
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from attribute_reader.errors import AttributeReaderError, ConfigurationError
from attribute_reader.ignore import make_ignore_rules
from attribute_reader.models.feature import FeatureContext
from attribute_reader.models.fields import make_field_spec


class ReaderConfig(BaseModel):
    """
    Validated attribute reader configuration.

    Attributes:
        fields: Field spec (None selects the default fields)
        ignore: Ignore matchers keyed by field name
        feature: Feature context used to fill the "value" field
        parser: Schema parser (None selects the DescribeFeatureType parser)
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="forbid",
        frozen=True,
    )

    fields: Optional[Any] = Field(
        default=None,
        description="Field names or definitions, in record order",
    )

    ignore: dict[str, Any] = Field(
        default_factory=dict,
        description="Ignore rules keyed by field name",
    )

    feature: Optional[Any] = Field(
        default=None,
        description="Feature context or mapping of attribute values",
    )

    parser: Optional[Any] = Field(
        default=None,
        description="Schema parser with a parse(data) method",
    )

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, v: Any) -> Any:
        """Normalize field definitions into an immutable field spec."""
        if v is None:
            return None
        if not isinstance(v, (list, tuple)):
            raise ValueError("fields must be a list of field names or definitions")
        try:
            return make_field_spec(v)
        except AttributeReaderError as e:
            raise ValueError(str(e)) from e

    @field_validator("ignore", mode="before")
    @classmethod
    def validate_ignore(cls, v: Any) -> Any:
        """Normalize ignore rules into matchers."""
        if v is None:
            return {}
        try:
            return make_ignore_rules(v)
        except AttributeReaderError as e:
            raise ValueError(str(e)) from e

    @field_validator("feature")
    @classmethod
    def validate_feature(cls, v: Any) -> Any:
        """Accept a feature context, an {"attributes": ...} mapping or a plain mapping."""
        if isinstance(v, Mapping) and set(v) <= {"attributes", "fid"} and isinstance(
            v.get("attributes"), Mapping
        ):
            return FeatureContext.model_validate(v)
        try:
            return FeatureContext.coerce(v)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @field_validator("parser")
    @classmethod
    def validate_parser(cls, v: Any) -> Any:
        if v is not None and not callable(getattr(v, "parse", None)):
            raise ValueError("parser must provide a parse(data) method")
        return v

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReaderConfig":
        """
        Create a configuration from a dictionary.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid reader configuration: {e}") from e

    @classmethod
    def from_json_file(cls, file_path: str | Path) -> "ReaderConfig":
        """
        Load a configuration from a JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigurationError: If the file is not valid JSON or the configuration is invalid
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            with open(file_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {file_path} must be a JSON object")

        return cls.from_dict(data)

    def merge(self, **overrides: Any) -> "ReaderConfig":
        """Return a copy with non-empty overrides applied and re-validated."""
        data = {
            "fields": self.fields,
            "ignore": dict(self.ignore),
            "feature": self.feature,
            "parser": self.parser,
        }
        for key, value in overrides.items():
            if value is None:
                continue
            if key == "ignore":
                data["ignore"].update(value)
            else:
                data[key] = value
        return ReaderConfig.from_dict(data)
