import pytest

from alpaca_codegen.errors import InvariantError
from alpaca_codegen.parser.document import RefResolver
from alpaca_codegen.parser.params import group_parameters

DEVICE_NUMBER = {
    "name": "device_number",
    "in": "path",
    "required": True,
    "description": "Zero based device number",
    "schema": {"type": "integer", "format": "uint32"},
}


class TestGroupParameters:
    def test_groups_by_location(self):
        params = [
            DEVICE_NUMBER,
            {"name": "ClientID", "in": "query", "schema": {"type": "integer", "format": "uint32"}},
        ]
        path, query = group_parameters(params, RefResolver({}))
        assert path == {
            "type": "object",
            "properties": {
                "device_number": {"description": "Zero based device number", "type": "integer", "format": "uint32"},
            },
            "required": ["device_number"],
        }
        assert query == {
            "type": "object",
            "properties": {"ClientID": {"type": "integer", "format": "uint32"}},
        }

    def test_missing_locations_are_none(self):
        path, query = group_parameters([DEVICE_NUMBER], RefResolver({}))
        assert path is not None
        assert query is None
        assert group_parameters([], RefResolver({})) == (None, None)

    def test_resolves_references(self):
        doc = {"components": {"parameters": {"device_number": DEVICE_NUMBER}}}
        path, _ = group_parameters([{"$ref": "#/components/parameters/device_number"}], RefResolver(doc))
        assert "device_number" in path["properties"]

    def test_property_schema_is_a_copy(self):
        path, _ = group_parameters([DEVICE_NUMBER], RefResolver({}))
        path["properties"]["device_number"]["minimum"] = 0
        assert "minimum" not in DEVICE_NUMBER["schema"]

    def test_header_location_rejected(self):
        params = [DEVICE_NUMBER, {"name": "X-Token", "in": "header", "schema": {"type": "string"}}]
        with pytest.raises(InvariantError, match="header"):
            group_parameters(params, RefResolver({}))
