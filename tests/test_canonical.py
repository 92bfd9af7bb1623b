from alpaca_codegen.normalizer.canonical import canonicalize, shape_key


class TestCanonicalizeScalars:
    def test_uint32_range_elided(self):
        schema = canonicalize({"type": "integer", "format": "uint32", "minimum": 0, "maximum": 4294967295})
        assert schema == {"type": "integer", "format": "uint32"}

    def test_narrower_minimum_kept(self):
        schema = canonicalize({"type": "integer", "format": "uint32", "minimum": 1, "maximum": 4294967295})
        assert schema == {"type": "integer", "format": "uint32", "minimum": 1}

    def test_int32_range_elided(self):
        schema = canonicalize({"type": "integer", "format": "int32", "minimum": -2147483648, "maximum": 2147483647})
        assert schema == {"type": "integer", "format": "int32"}

    def test_missing_integer_format_defaults_to_int32(self):
        assert canonicalize({"type": "integer"}) == {"type": "integer", "format": "int32"}

    def test_unknown_format_keeps_bounds(self):
        schema = canonicalize({"type": "integer", "format": "int64", "minimum": 0})
        assert schema == {"type": "integer", "format": "int64", "minimum": 0}

    def test_zero_defaults_dropped(self):
        assert canonicalize({"type": "number", "default": 0}) == {"type": "number"}
        assert canonicalize({"type": "integer", "format": "int32", "default": 0}) == {"type": "integer", "format": "int32"}

    def test_non_zero_default_kept(self):
        assert canonicalize({"type": "number", "default": 1.5}) == {"type": "number", "default": 1.5}

    def test_string_and_boolean_defaults(self):
        assert canonicalize({"type": "string", "default": ""}) == {"type": "string"}
        assert canonicalize({"type": "string", "default": "a"}) == {"type": "string", "default": "a"}
        assert canonicalize({"type": "boolean", "default": False}) == {"type": "boolean"}
        assert canonicalize({"type": "boolean", "default": True}) == {"type": "boolean", "default": True}

    def test_descriptions_kept_on_schema(self):
        schema = canonicalize({"type": "string", "description": "Name", "default": ""})
        assert schema == {"type": "string", "description": "Name"}


class TestCanonicalizeContainers:
    def test_recurses_into_object_and_array(self):
        schema = {
            "type": "object",
            "properties": {
                "Values": {"type": "array", "items": {"type": "integer", "minimum": -2147483648}},
            },
        }
        canonicalize(schema)
        assert schema["properties"]["Values"]["items"] == {"type": "integer", "format": "int32"}

    def test_does_not_follow_references(self):
        ref = {"$ref": "#/components/schemas/Other"}
        schema = {"type": "object", "properties": {"Other": ref}}
        canonicalize(schema)
        assert schema["properties"]["Other"] == {"$ref": "#/components/schemas/Other"}

    def test_is_idempotent(self):
        schema = {"type": "object", "properties": {"A": {"type": "integer", "format": "uint32", "minimum": 0}}}
        once = canonicalize(schema)
        key = shape_key(once)
        assert shape_key(canonicalize(once)) == key


class TestShapeKey:
    def test_ignores_descriptions(self):
        a = {"type": "object", "description": "A", "properties": {"X": {"type": "string", "description": "x"}}}
        b = {"type": "object", "properties": {"X": {"type": "string", "description": "other"}}}
        assert shape_key(a) == shape_key(b)

    def test_ignores_key_and_required_order(self):
        a = {"type": "object", "properties": {"X": {}, "Y": {}}, "required": ["X", "Y"]}
        b = {"required": ["Y", "X"], "properties": {"Y": {}, "X": {}}, "type": "object"}
        assert shape_key(a) == shape_key(b)

    def test_property_named_description_is_kept(self):
        a = {"type": "object", "properties": {"description": {"type": "string"}}}
        b = {"type": "object", "properties": {}}
        assert shape_key(a) != shape_key(b)

    def test_kind_is_part_of_key(self):
        a = {"type": "object", "properties": {}, "x-kind": "Request"}
        b = {"type": "object", "properties": {}, "x-kind": "Response"}
        assert shape_key(a) != shape_key(b)

    def test_other_defaults_distinguish(self):
        a = canonicalize({"type": "object", "properties": {"Rate": {"type": "number", "default": 1}}})
        b = canonicalize({"type": "object", "properties": {"Rate": {"type": "number", "default": 2}}})
        assert shape_key(a) != shape_key(b)
