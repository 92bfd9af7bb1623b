import pytest

from alpaca_codegen.errors import InvariantError
from alpaca_codegen.normalizer.registry import TypeTable, get_kind, ref_to, set_kind
from alpaca_codegen.parser.base import SchemaKind


class TestSetKind:
    def test_sets_tag(self):
        schema = {"type": "object"}
        set_kind(schema, SchemaKind.PATH)
        assert schema["x-kind"] == "Path"
        assert get_kind(schema) is SchemaKind.PATH

    def test_same_kind_twice_is_fine(self):
        schema = {"type": "object"}
        set_kind(schema, SchemaKind.RESPONSE)
        set_kind(schema, SchemaKind.RESPONSE)
        assert get_kind(schema) is SchemaKind.RESPONSE

    def test_conflicting_kind_fails(self):
        schema = {"type": "object"}
        set_kind(schema, SchemaKind.PATH)
        with pytest.raises(InvariantError, match="Conflicting x-kind: Path vs Request"):
            set_kind(schema, SchemaKind.REQUEST)
        assert get_kind(schema) is SchemaKind.PATH

    def test_untagged(self):
        assert get_kind({"type": "object"}) is None

    def test_unknown_tag(self):
        with pytest.raises(InvariantError, match="Unknown x-kind"):
            get_kind({"x-kind": "Query"})


class TestTypeTable:
    def test_creates_components(self):
        doc = {"paths": {}}
        TypeTable(doc)
        assert doc["components"] == {"schemas": {}}

    def test_register_returns_reference(self):
        doc = {"paths": {}}
        table = TypeTable(doc)
        schema = {"type": "object", "properties": {}}
        ref = table.register("GetTelescopeConnectedPath", schema)
        assert ref == {"$ref": "#/components/schemas/GetTelescopeConnectedPath"}
        assert doc["components"]["schemas"]["GetTelescopeConnectedPath"] is schema

    def test_register_last_write_wins(self):
        table = TypeTable({"paths": {}})
        table.register("Foo", {"type": "object", "title": "first"})
        table.register("Foo", {"type": "object", "title": "second"})
        assert table["Foo"]["title"] == "second"
        assert len(table) == 1

    def test_items_is_snapshot(self):
        table = TypeTable({"paths": {}})
        table.register("A", {"type": "object"})
        table.register("B", {"type": "object"})
        for name, _ in table.items():
            table.remove(name)
        assert len(table) == 0

    def test_ref_to(self):
        assert ref_to("EmptyRequest") == "#/components/schemas/EmptyRequest"
