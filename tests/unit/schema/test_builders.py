import pytest

from folio.core.exceptions import SchemaDefinitionError
from folio.schema import builders as s
from folio.schema.nodes import ArrayNode, EnumNode, ObjectNode, PrimitiveNode


class TestPrimitiveBuilders:
    """Primitive constructors."""

    @pytest.mark.parametrize(
        "factory, kind",
        [(s.string, "string"), (s.number, "number"), (s.boolean, "boolean"), (s.date, "date")],
    )
    def test_primitive_kind(self, factory, kind):
        node = factory()
        assert isinstance(node, PrimitiveNode)
        assert node.kind == kind
        assert node.constraints == ()


class TestEnumBuilder:
    """Enumerations."""

    def test_varargs_and_iterable_forms_match(self):
        assert s.enum("xs", "sm") == s.enum(["xs", "sm"])

    def test_values_keep_order(self):
        node = s.enum("solid", "outline", "ghost")
        assert isinstance(node, EnumNode)
        assert node.values == ("solid", "outline", "ghost")

    def test_empty_enum_fails(self):
        with pytest.raises(SchemaDefinitionError, match="at least one"):
            s.enum()

    def test_empty_iterable_fails(self):
        with pytest.raises(SchemaDefinitionError):
            s.enum([])

    def test_duplicate_values_fail(self):
        with pytest.raises(SchemaDefinitionError, match="Duplicate"):
            s.enum("a", "b", "a")

    def test_non_string_values_fail(self):
        with pytest.raises(SchemaDefinitionError, match="strings"):
            s.enum("a", 1)


class TestObjectBuilder:
    """Object construction from mappings and pairs."""

    def test_from_mapping(self):
        node = s.obj({"a": s.string(), "b": s.number()})
        assert isinstance(node, ObjectNode)
        assert node.field_names == ("a", "b")

    def test_from_pairs(self):
        node = s.obj([("a", s.string()), ("b", s.number())])
        assert node.field_names == ("a", "b")

    def test_duplicate_field_name_fails(self):
        with pytest.raises(SchemaDefinitionError, match="Duplicate field 'title'"):
            s.obj([("title", s.string()), ("title", s.string())])

    def test_non_node_field_fails(self):
        with pytest.raises(SchemaDefinitionError, match="schema node"):
            s.obj({"title": str})

    def test_empty_field_name_fails(self):
        with pytest.raises(SchemaDefinitionError):
            s.obj({"": s.string()})

    def test_empty_object_is_allowed(self):
        assert s.obj({}).fields == ()


class TestArrayBuilder:
    """Array construction."""

    def test_array_element(self):
        node = s.array(s.string())
        assert isinstance(node, ArrayNode)
        assert node.element == s.string()

    def test_array_requires_node(self):
        with pytest.raises(SchemaDefinitionError):
            s.array("string")


class TestCheckSchema:
    """Whole-tree consistency checks for hand-assembled trees."""

    def test_built_schema_passes(self):
        node = s.obj({"tags": s.array(s.enum("a", "b")), "meta": s.obj({"x": s.number()})})
        assert s.check_schema(node) is node

    def test_duplicate_fields_detected(self):
        node = ObjectNode(fields=(("a", s.string()), ("a", s.number())))
        with pytest.raises(SchemaDefinitionError, match="duplicate field 'a'"):
            s.check_schema(node)

    def test_empty_enum_detected(self):
        node = s.obj({"size": EnumNode(values=())})
        with pytest.raises(SchemaDefinitionError, match="size: enum has no allowed values"):
            s.check_schema(node)

    def test_array_without_element_detected(self):
        node = s.obj({"items": ArrayNode()})
        with pytest.raises(SchemaDefinitionError, match="no element schema"):
            s.check_schema(node)

    def test_all_problems_reported(self):
        node = ObjectNode(
            fields=(
                ("a", EnumNode(values=())),
                ("b", ArrayNode()),
                ("nested", ObjectNode(fields=(("x", s.string()), ("x", s.string())))),
            )
        )
        with pytest.raises(SchemaDefinitionError) as exc_info:
            s.check_schema(node)
        message = str(exc_info.value)
        assert "a: enum has no allowed values" in message
        assert "b: array has no element schema" in message
        assert "nested: duplicate field 'x'" in message
