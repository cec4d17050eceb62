"""Raw records as stored under a bucket/key."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from ..logging import get_logger
from .link import Link

logger = get_logger(__name__)

JSON_CONTENT_TYPES = ("application/json", "text/json")


def is_json(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in JSON_CONTENT_TYPES or media_type.endswith("+json")


class RObject:
    """A raw record: payload plus the metadata the store returned with it.

    ``data`` is the decoded payload when the content type is JSON and the raw
    body otherwise. Records produced by map/reduce for keys that hold nothing
    have ``not_found`` set and carry the store's marker as their data.
    """

    def __init__(self, bucket: str, key: str | None = None) -> None:
        self.bucket = bucket
        self.key = key
        self.content_type: str | None = "application/json"
        self.vclock: str | None = None
        self.etag: str | None = None
        self.last_modified: str | None = None
        self.links: set[Link] = set()
        self.meta: dict[str, list[str]] = {}
        self.not_found = False
        self._raw_data: str | None = None
        self._data: Any = None

    @property
    def raw_data(self) -> str | None:
        return self._raw_data

    @raw_data.setter
    def raw_data(self, value: str | bytes | None) -> None:
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        self._raw_data = value
        self._data = self.deserialize(value)

    @property
    def data(self) -> Any:
        return self._data

    @data.setter
    def data(self, value: Any) -> None:
        self._data = value
        self._raw_data = self.serialize(value)

    def deserialize(self, body: str | None) -> Any:
        if body is None or body == "":
            return None
        if is_json(self.content_type):
            return json.loads(body)
        return body

    def serialize(self, value: Any) -> str | None:
        if value is None:
            return None
        if is_json(self.content_type):
            return json.dumps(value)
        return str(value)

    @classmethod
    def load_from_response(
        cls,
        bucket: str,
        key: str,
        headers: Mapping[str, str],
        body: str | bytes | None,
    ) -> RObject:
        """Build a record from an HTTP fetch response."""
        robject = cls(bucket, key)
        robject.content_type = headers.get("Content-Type")
        robject.vclock = headers.get("X-Riak-Vclock")
        robject.etag = headers.get("ETag")
        robject.last_modified = headers.get("Last-Modified")
        robject.links = {
            link for link in Link.parse(headers.get("Link")) if link.rel != "up"
        }
        robject.meta = {
            name[len("X-Riak-Meta-"):].lower(): [value]
            for name, value in headers.items()
            if name.lower().startswith("x-riak-meta-")
        }
        robject.raw_data = body
        return robject

    @classmethod
    def load_from_mapreduce(cls, results: Iterable[Any]) -> list[RObject]:
        """Build records from the raw output of a map phase that kept whole objects."""
        robjects = []
        for result in results:
            if not isinstance(result, Mapping):
                raise ValueError(f"Unexpected map/reduce result: {result!r}")
            if "not_found" in result:
                robjects.append(cls._load_not_found(result))
            else:
                robjects.append(cls._load_mapreduce_object(result))
        return robjects

    @classmethod
    def _load_not_found(cls, result: Mapping[str, Any]) -> RObject:
        marker = result["not_found"]
        robject = cls(marker.get("bucket", ""), marker.get("key"))
        robject.not_found = True
        robject._data = dict(result)
        robject._raw_data = json.dumps(result)
        return robject

    @classmethod
    def _load_mapreduce_object(cls, result: Mapping[str, Any]) -> RObject:
        robject = cls(result["bucket"], result["key"])
        robject.vclock = result.get("vclock")
        values = result.get("values") or []
        if len(values) > 1:
            # Siblings are not resolved here; the first value wins.
            logger.warning(
                "riak_siblings_ignored",
                bucket=robject.bucket,
                key=robject.key,
                count=len(values),
            )
        if values:
            metadata = values[0].get("metadata") or {}
            robject.content_type = metadata.get("content-type", robject.content_type)
            robject.etag = metadata.get("X-Riak-VTag")
            robject.last_modified = metadata.get("X-Riak-Last-Modified")
            robject.links = {
                Link.to_object(bucket, key, tag)
                for bucket, key, tag in metadata.get("Links") or []
            }
            robject.meta = {
                name.lower(): [value]
                for name, value in (metadata.get("X-Riak-Meta") or {}).items()
            }
            data = values[0].get("data")
            if isinstance(data, (str, bytes)) or data is None:
                robject.raw_data = data
            else:
                robject.data = data
        return robject

    def __repr__(self) -> str:
        return f"RObject({self.bucket!r}, {self.key!r}, not_found={self.not_found})"
