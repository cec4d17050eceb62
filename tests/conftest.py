"""Pytest configuration and fixtures."""

import json
import os
from collections.abc import Mapping
from typing import Any

import pytest
import requests

# Keep the suite independent of a developer's environment
for _name in list(os.environ):
    if _name.startswith("KV_BRIDGE_"):
        del os.environ[_name]

from kv_bridge import connection
from kv_bridge.base.backends.sync import SyncBucket, SyncClient
from kv_bridge.config import reset_settings
from kv_bridge.errors import HTTPFailedRequest
from kv_bridge.riak.robject import RObject


class MemoryBucket(SyncBucket):
    """In-memory bucket following the HTTP client's contract."""

    def __init__(self, client: "MemoryClient", name: str) -> None:
        self.client = client
        self.name = name
        self.get_calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def records(self) -> dict[str, Any]:
        return self.client.store.setdefault(self.name, {})

    def get(self, key, options=None):
        self.get_calls.append((key, dict(options or {})))
        if key not in self.records:
            raise HTTPFailedRequest("get", 200, 404, {}, "not found")
        robject = RObject(self.name, key)
        robject.raw_data = None if self.records[key] is None else json.dumps(self.records[key])
        return robject

    def keys(self, callback=None):
        keys = list(self.records)
        if callback is None:
            return keys
        size = self.client.chunk_size
        for start in range(0, len(keys), size):
            callback(keys[start:start + size])
        return []


class MemoryClient(SyncClient):
    """In-memory client; map/reduce answers in reverse input order."""

    def __init__(self, store: Mapping[str, dict[str, Any]] | None = None, chunk_size: int = 1) -> None:
        self.store: dict[str, dict[str, Any]] = {name: dict(records) for name, records in (store or {}).items()}
        self.chunk_size = chunk_size
        self.jobs: list[dict[str, Any]] = []
        self._buckets: dict[str, MemoryBucket] = {}

    def bucket(self, name):
        if name not in self._buckets:
            self._buckets[name] = MemoryBucket(self, name)
        return self._buckets[name]

    def mapred(self, job):
        self.jobs.append(job.to_dict())
        results = []
        for bucket, key in job.inputs:
            records = self.store.get(bucket, {})
            if key in records:
                results.append(riak_object(bucket, key, records[key]))
            else:
                results.append(not_found_marker(bucket, key))
        return list(reversed(results))


def riak_object(bucket: str, key: str, data: Any, content_type: str = "application/json") -> dict[str, Any]:
    """A whole object as a kept map phase returns it."""
    return {
        "bucket": bucket,
        "key": key,
        "vclock": "a85hYGBgzGDKBVIcypz/fgaUHjmdwZTImMfKkD3z10m+LAA=",
        "values": [
            {
                "metadata": {
                    "content-type": content_type,
                    "X-Riak-VTag": "4DNB6Vt0zLl5VJ6P2xx9dc",
                    "X-Riak-Last-Modified": "Tue, 22 Dec 2009 18:48:37 GMT",
                    "Links": [],
                },
                "data": json.dumps(data) if data is not None else None,
            }
        ],
    }


def not_found_marker(bucket: str, key: str) -> dict[str, Any]:
    return {"not_found": {"bucket": bucket, "key": key, "keydata": "undefined"}}


def make_response(
    status: int = 200,
    body: str | bytes = b"",
    headers: Mapping[str, str] | None = None,
    url: str = "http://127.0.0.1:8098/",
) -> requests.Response:
    """Build a fully-read ``requests.Response``."""
    response = requests.Response()
    response.status_code = status
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response._content_consumed = True
    response.headers.update(headers or {})
    response.encoding = "utf-8"
    response.url = url
    return response


@pytest.fixture(autouse=True)
def clean_state():
    """Reset settings and the default client around every test."""
    reset_settings()
    connection.reset()
    yield
    reset_settings()
    connection.reset()


@pytest.fixture
def memory_client():
    return MemoryClient(
        {
            "boxes": {
                "square": {"shape": "square"},
                "rectangle": {"shape": "rectangle", "_type": "CardboardBox"},
            }
        }
    )
