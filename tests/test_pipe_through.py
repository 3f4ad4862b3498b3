from types import SimpleNamespace

from swag.pipe_through import deep_merge, empty_pipe_through, merge_pipe_through, pipe_through_mapping

TABLE = {
    "api": {"headers": {"X-Api-Version": {"type": "string"}}, "query_params": {"locale": "string"}},
    "auth": {"headers": {"Authorization": {"type": "string", "required": True}}},
    "empty": None,
}


class TestMergePipeThrough:
    def test_disjoint_headers_union(self):
        assert merge_pipe_through([{"headers": {"a": 1}}, {"headers": {"b": 2}}]) == {
            "headers": {"a": 1, "b": 2}
        }

    def test_later_scalar_wins(self):
        assert merge_pipe_through([{"headers": {"a": 1}}, {"headers": {"a": 2}}]) == {
            "headers": {"a": 2}
        }

    def test_nested_maps_merge_recursively(self):
        result = merge_pipe_through([
            {"headers": {"X": {"type": "string"}}},
            {"headers": {"X": {"required": True}}},
        ])
        assert result == {"headers": {"X": {"type": "string", "required": True}}}

    def test_other_keys_replaced_outright(self):
        result = merge_pipe_through([{"tags": {"a": 1}}, {"tags": {"b": 2}}])
        assert result == {"tags": {"b": 2}}

    def test_query_params_and_body_merge(self):
        result = merge_pipe_through([
            {"query_params": {"page": "integer"}, "body": {"a": "string"}},
            {"query_params": {"size": "integer"}, "body": {"b": "string"}},
        ])
        assert result == {
            "query_params": {"page": "integer", "size": "integer"},
            "body": {"a": "string", "b": "string"},
        }

    def test_inputs_are_not_mutated(self):
        first = {"headers": {"a": 1}}
        second = {"headers": {"b": 2}}
        merge_pipe_through([first, second])
        assert first == {"headers": {"a": 1}}

    def test_empty_list(self):
        assert merge_pipe_through([]) == {}


class TestDeepMerge:
    def test_non_map_replaces_map(self):
        assert deep_merge({"a": {"x": 1}}, {"a": 3}) == {"a": 3}


class TestPipeThroughMapping:
    def test_unconfigured_table_short_circuits(self):
        config = SimpleNamespace(pipe_through_mapping=None)
        assert pipe_through_mapping(["api", "auth"], config) == empty_pipe_through()
        assert pipe_through_mapping([], config) == empty_pipe_through()

    def test_no_identifiers(self):
        config = SimpleNamespace(pipe_through_mapping=TABLE)
        assert pipe_through_mapping(None, config) == empty_pipe_through()

    def test_resolves_and_merges(self):
        config = SimpleNamespace(pipe_through_mapping=TABLE)
        result = pipe_through_mapping(["api", "auth"], config)
        assert result == {
            "headers": {
                "X-Api-Version": {"type": "string"},
                "Authorization": {"type": "string", "required": True},
            },
            "query_params": {"locale": "string"},
            "body": {},
        }

    def test_unknown_and_empty_identifiers_are_skipped(self):
        config = SimpleNamespace(pipe_through_mapping=TABLE)
        result = pipe_through_mapping(["browser", "empty", "auth"], config)
        assert result["headers"] == {"Authorization": {"type": "string", "required": True}}
