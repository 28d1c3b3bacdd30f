"""
Tests for field descriptors, record models and feature contexts.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from attribute_reader.errors import ConfigurationError
from attribute_reader.models import (
    DEFAULT_FIELDS,
    VALUE_FIELD,
    AttributeRecord,
    FeatureContext,
    RecordField,
    make_field,
    make_field_spec,
    make_record_model,
    with_value_field,
)
from attribute_reader.models.fields import to_boolean, to_date, to_float, to_int, to_string


class TestConverters:
    """Tests for built-in conversions."""

    def test_to_string(self):
        assert to_string(None) == ""
        assert to_string(5) == "5"

    def test_to_int(self):
        assert to_int("12") == 12
        assert to_int("12.7") == 12
        assert to_int("") is None
        assert to_int(None) is None
        assert to_int("abc") is None

    def test_to_float(self):
        assert to_float("1.5") == pytest.approx(1.5)
        assert to_float(None) is None
        assert to_float("nan?") is None

    def test_to_boolean(self):
        assert to_boolean("true") is True
        assert to_boolean("1") is True
        assert to_boolean("false") is False
        assert to_boolean(None) is False
        assert to_boolean(1) is True

    def test_to_date(self):
        assert to_date("2024-01-15") == datetime(2024, 1, 15)
        assert to_date(None) is None
        assert to_date("not a date") is None


class TestRecordField:
    """Tests for field definitions."""

    def test_extract_raw(self):
        assert RecordField("name").extract({"name": "FOO"}) == "FOO"

    def test_extract_missing(self):
        assert RecordField("name").extract({}) is None

    def test_extract_with_type(self):
        assert RecordField("nillable", type="boolean").extract({"nillable": "true"}) is True

    def test_convert_wins_over_type(self):
        f = RecordField("name", type="int", convert=str.lower)
        assert f.extract({"name": "FOO"}) == "foo"

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError):
            RecordField("name", type="decimal")

    def test_empty_name(self):
        with pytest.raises(ConfigurationError):
            RecordField("")

    def test_make_field_shapes(self):
        assert make_field("name") == RecordField("name")
        assert make_field({"name": "n", "type": "int"}) == RecordField("n", type="int")
        f = RecordField("x")
        assert make_field(f) is f

    def test_make_field_invalid(self):
        with pytest.raises(ConfigurationError):
            make_field({"type": "int"})
        with pytest.raises(ConfigurationError):
            make_field({"name": "n", "kind": "int"})
        with pytest.raises(ConfigurationError):
            make_field(3)

    def test_field_spec_defaults(self):
        assert make_field_spec(None) == DEFAULT_FIELDS

    def test_field_spec_duplicates(self):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            make_field_spec(["name", "name"])

    def test_with_value_field(self):
        spec = with_value_field(make_field_spec(["name"]))
        assert [f.name for f in spec] == ["name", "value"]
        assert spec[-1] is VALUE_FIELD
        # Not appended twice
        assert with_value_field(spec) == spec


class TestRecordModel:
    """Tests for generated record models."""

    def test_record_fields(self):
        model = make_record_model(make_field_spec(["name", "type"]))
        record = model(name="FOO", type="string")

        assert issubclass(model, AttributeRecord)
        assert record.name == "FOO"
        assert record.to_dict() == {"name": "FOO", "type": "string"}

    def test_record_is_frozen(self):
        model = make_record_model(make_field_spec(["name"]))
        record = model(name="FOO")
        with pytest.raises(ValidationError):
            record.name = "BAR"

    def test_has_value(self):
        model = make_record_model(with_value_field(make_field_spec(["name"])))

        assert model(name="FOO").has_value is False
        assert model(name="FOO").value is None
        assert model(name="FOO", value=None).has_value is True
        assert model(name="FOO", value="").value == ""

    def test_invalid_field_name(self):
        with pytest.raises(ConfigurationError):
            make_record_model((RecordField("max-occurs"),))
        with pytest.raises(ConfigurationError):
            make_record_model((RecordField("_private"),))


class TestFeatureContext:
    """Tests for feature contexts."""

    def test_create(self):
        feature = FeatureContext(attributes={"FOO": 42}, fid="states.1")
        assert feature.attributes["FOO"] == 42
        assert feature.fid == "states.1"

    def test_coerce_mapping(self):
        feature = FeatureContext.coerce({"FOO": 42})
        assert isinstance(feature, FeatureContext)
        assert feature.attributes == {"FOO": 42}

    def test_coerce_object_with_attributes(self):
        class Vector:
            attributes = {"FOO": 1}

        vector = Vector()
        assert FeatureContext.coerce(vector) is vector

    def test_coerce_none(self):
        assert FeatureContext.coerce(None) is None

    def test_coerce_invalid(self):
        with pytest.raises(TypeError):
            FeatureContext.coerce(42)
