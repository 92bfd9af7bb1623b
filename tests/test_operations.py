from alpaca_codegen.parser.operations import iter_operations, path_id


def _make_document(paths: dict) -> dict:
    return {"openapi": "3.0.1", "paths": paths}


class TestPathId:
    def test_drops_placeholders(self):
        assert path_id("/telescope/{device_number}/connected") == "telescope_connected"

    def test_generic_device_path(self):
        assert path_id("/{device_type}/{device_number}/connected") == "connected"

    def test_keeps_partial_placeholder_segment(self):
        assert path_id("/camera/{device_number}/image{kind}") == "camera_image{kind}"


class TestIterOperations:
    def test_single_get(self):
        doc = _make_document({"/telescope/{device_number}/connected": {"get": {"responses": {}}}})
        ops = list(iter_operations(doc))
        assert len(ops) == 1
        assert ops[0].id == "get_telescope_connected"
        assert ops[0].method == "get"
        assert ops[0].path == "/telescope/{device_number}/connected"
        assert ops[0].type_id == "GetTelescopeConnected"

    def test_method_order_is_fixed(self):
        doc = _make_document({
            "/focuser/{device_number}/position": {"put": {"a": 1}, "post": {"b": 2}, "get": {"c": 3}},
        })
        assert [op.method.value for op in iter_operations(doc)] == ["get", "put", "post"]

    def test_path_order_then_method_order(self):
        doc = _make_document({
            "/b/{n}/x": {"put": {"a": 1}, "get": {"a": 1}},
            "/a/{n}/y": {"get": {"a": 1}},
        })
        assert [op.id for op in iter_operations(doc)] == ["get_b_x", "put_b_x", "get_a_y"]

    def test_ignores_non_method_keys(self):
        doc = _make_document({"/a/{n}/x": {"summary": "text", "parameters": [], "get": {"a": 1}}})
        assert [op.id for op in iter_operations(doc)] == ["get_a_x"]

    def test_operation_is_not_copied(self):
        operation = {"responses": {}}
        doc = _make_document({"/a/{n}/x": {"get": operation}})
        op = next(iter_operations(doc))
        op.operation["x-tag"] = True
        assert operation["x-tag"] is True

    def test_restartable(self):
        doc = _make_document({"/a/{n}/x": {"get": {"a": 1}, "put": {"a": 1}}})
        assert [op.id for op in iter_operations(doc)] == [op.id for op in iter_operations(doc)]
