"""Tests for raw records, links and map/reduce jobs."""

import pytest

from kv_bridge.riak.link import Link
from kv_bridge.riak.mapreduce import MapReduce
from kv_bridge.riak.robject import RObject, is_json
from tests.conftest import MemoryClient, not_found_marker, riak_object


class TestRObject:
    def test_json_round_trip_through_data(self):
        robject = RObject("boxes", "square")
        robject.data = {"shape": "square"}

        assert robject.raw_data == '{"shape": "square"}'

    def test_empty_body_has_no_data(self):
        robject = RObject("boxes", "square")
        robject.raw_data = ""

        assert robject.data is None

    def test_bytes_body(self):
        robject = RObject("boxes", "square")
        robject.raw_data = b'{"shape":"square"}'

        assert robject.data == {"shape": "square"}

    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("application/json", True),
            ("application/json; charset=utf-8", True),
            ("application/vnd.api+json", True),
            ("text/plain", False),
            (None, False),
        ],
    )
    def test_is_json(self, content_type, expected):
        assert is_json(content_type) is expected


class TestLoadFromMapReduce:
    def test_loads_objects(self):
        result = riak_object("boxes", "square", {"shape": "square"})
        result["values"][0]["metadata"]["Links"] = [["lids", "top", "lid"]]

        (robject,) = RObject.load_from_mapreduce([result])

        assert robject.bucket == "boxes"
        assert robject.key == "square"
        assert robject.data == {"shape": "square"}
        assert robject.etag == "4DNB6Vt0zLl5VJ6P2xx9dc"
        assert robject.links == {Link("/riak/lids/top", "lid")}
        assert not robject.not_found

    def test_not_found_markers(self):
        (robject,) = RObject.load_from_mapreduce([not_found_marker("boxes", "rectangle")])

        assert robject.not_found
        assert robject.key == "rectangle"
        assert robject.data["not_found"]["keydata"] == "undefined"

    def test_first_sibling_wins(self):
        result = riak_object("boxes", "square", {"shape": "square"})
        result["values"].append({"metadata": {"content-type": "application/json"}, "data": '{"shape":"circle"}'})

        (robject,) = RObject.load_from_mapreduce([result])

        assert robject.data == {"shape": "square"}

    def test_decoded_data(self):
        result = riak_object("boxes", "square", None)
        result["values"][0]["data"] = {"shape": "square"}

        (robject,) = RObject.load_from_mapreduce([result])

        assert robject.data == {"shape": "square"}

    def test_rejects_unexpected_results(self):
        with pytest.raises(ValueError):
            RObject.load_from_mapreduce([42])


class TestLink:
    def test_parse(self):
        links = Link.parse('</riak/boxes/lid>; riaktag="lid", </riak/boxes>; rel="up"')

        assert links == [Link("/riak/boxes/lid", "lid"), Link("/riak/boxes", "up")]
        assert links[0].bucket == "boxes"
        assert links[0].key == "lid"
        assert links[1].key is None

    def test_parse_empty_header(self):
        assert Link.parse(None) == []
        assert Link.parse("") == []

    def test_to_string(self):
        assert str(Link("/riak/boxes/lid", "lid")) == '</riak/boxes/lid>; rel="lid"'

    def test_to_object_quotes_path(self):
        link = Link.to_object("my boxes", "a/b", "lid")

        assert link.url == "/riak/my%20boxes/a%2Fb"
        assert link.bucket == "my boxes"
        assert link.key == "a/b"
        assert link.tag == "lid"


class TestMapReduce:
    def test_builds_job(self):
        job = MapReduce(MemoryClient()).add("boxes", "a").add("boxes", "b")
        job.map("function(v) {return [v]}").map("function(v, arg) {return [arg]}", keep=True, arg="desc")

        assert job.to_dict() == {
            "inputs": [["boxes", "a"], ["boxes", "b"]],
            "query": [
                {"map": {"language": "javascript", "source": "function(v) {return [v]}", "keep": False}},
                {"map": {"language": "javascript", "source": "function(v, arg) {return [arg]}", "keep": True, "arg": "desc"}},
            ],
        }

    def test_run_requires_a_phase(self):
        with pytest.raises(ValueError):
            MapReduce(MemoryClient()).add("boxes", "a").run()

    def test_run_uses_client(self):
        client = MemoryClient({"boxes": {"a": {"n": 1}}})
        job = MapReduce(client).add("boxes", "a").map("function(v) {return [v]}", keep=True)

        results = job.run()

        assert results == [riak_object("boxes", "a", {"n": 1})]
        assert client.jobs == [job.to_dict()]
