"""Tests for SchemaNode construction and the known type table."""
import pytest

from schema_shapes.errors import InvalidInputError
from schema_shapes.introspection import known_types
from schema_shapes.introspection.known_types import is_known_type_format, register_known_type
from schema_shapes.schema.models import SchemaNode


class TestSchemaNode:
    """Normalization of raw schema mappings."""

    def test_pointer_hides_siblings(self):
        node = SchemaNode.from_dict({"$ref": "#/definitions/Pet", "type": "object", "description": "x"})

        assert node.is_pointer is True
        assert node.pointer == "#/definitions/Pet"
        assert node.types == ()
        assert node.properties == {}

    def test_full_schema(self):
        node = SchemaNode.from_dict(
            {
                "type": "object",
                "format": "custom",
                "properties": {"id": {"type": "integer"}},
                "additionalProperties": {"type": "string"},
                "discriminator": "kind",
                "allOf": [{"$ref": "#/definitions/Base"}],
                "enum": [1, 2],
            },
            location="/specs/api.yaml",
        )

        assert node.declared_type == "object"
        assert node.format == "custom"
        assert node.properties["id"].types == ("integer",)
        assert node.properties["id"].location == "/specs/api.yaml"
        assert node.additional_properties.types == ("string",)
        assert node.discriminator == "kind"
        assert node.all_of[0].pointer == "#/definitions/Base"
        assert node.enum == (1, 2)

    def test_items_forms(self):
        assert SchemaNode.from_dict({"type": "array"}).items is None
        assert SchemaNode.from_dict({"items": {}}).items == SchemaNode()
        assert SchemaNode.from_dict({"items": []}).items == ()
        assert len(SchemaNode.from_dict({"items": [{}, {"type": "string"}]}).items) == 2

    def test_boolean_additional_fields(self):
        node = SchemaNode.from_dict({"additionalProperties": True, "additionalItems": False})

        assert node.additional_properties is True
        assert node.additional_items is False

    def test_empty_type_is_no_type(self):
        assert SchemaNode.from_dict({"type": ""}).declared_type is None

    def test_openapi3_discriminator(self):
        node = SchemaNode.from_dict({"discriminator": {"propertyName": "petType"}})

        assert node.discriminator == "petType"

    def test_invalid_nested_schema(self):
        with pytest.raises(InvalidInputError):
            SchemaNode.from_dict({"properties": {"id": "integer"}})

    def test_nodes_compare_by_value_but_are_unhashable(self):
        node = SchemaNode.from_dict({"type": "object", "properties": {"id": {"type": "integer"}}})

        assert node == SchemaNode.from_dict({"type": "object", "properties": {"id": {"type": "integer"}}})
        with pytest.raises(TypeError, match="unhashable"):
            hash(node)


class TestKnownTypeTable:
    """Data-driven (type, format) lookups."""

    @pytest.fixture(autouse=True)
    def restore_table(self):
        saved = dict(known_types.KNOWN_TYPE_FORMATS)
        yield
        known_types.KNOWN_TYPE_FORMATS.clear()
        known_types.KNOWN_TYPE_FORMATS.update(saved)

    def test_primitives_accept_any_format(self):
        assert is_known_type_format("integer", "int64") is True
        assert is_known_type_format("string", None) is True
        assert is_known_type_format("array", None) is False

    def test_register_restricted_type(self):
        register_known_type("file", ["binary"])

        assert is_known_type_format("file", "binary") is True
        assert is_known_type_format("file", "other") is False

    def test_register_widens_existing_entry(self):
        register_known_type("file", ["binary"])
        register_known_type("file", ["stream"])

        assert is_known_type_format("file", "binary") is True
        assert is_known_type_format("file", "stream") is True
