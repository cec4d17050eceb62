"""HTTP client for Riak-compatible key-value stores."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any
from urllib.parse import quote

import requests

from ..base.backends.sync import KeysCallback, SyncClient
from ..config import Settings, get_settings
from ..errors import HTTPFailedRequest
from ..logging import get_logger
from .bucket import Bucket
from .mapreduce import MapReduce
from .robject import RObject

logger = get_logger(__name__)


class Client(SyncClient):
    """Synchronous client speaking the store's HTTP/JSON interface.

    Transport errors raised by ``requests`` propagate unchanged; non-2xx
    replies become :class:`~kv_bridge.errors.HTTPFailedRequest`. Nothing is
    retried.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 8098,
        *,
        protocol: str = "http",
        prefix: str = "riak",
        mapred_prefix: str = "mapred",
        timeout: float | None = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.protocol = protocol
        self.prefix = prefix.strip("/")
        self.mapred_prefix = mapred_prefix.strip("/")
        self.timeout = timeout
        self.session = session or self._create_session()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Client:
        settings = settings or get_settings()
        return cls(
            settings.host,
            settings.port,
            protocol=settings.protocol,
            prefix=settings.http_prefix,
            mapred_prefix=settings.mapred_prefix,
            timeout=settings.timeout,
        )

    @staticmethod
    def _create_session() -> requests.Session:
        session = requests.Session()
        adapter = requests.adapters.HTTPAdapter(
            pool_connections=10,
            pool_maxsize=10,
            max_retries=0,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Accept": "application/json, */*"})
        return session

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"

    def close(self) -> None:
        self.session.close()

    def bucket(self, name: str) -> Bucket:
        return Bucket(self, name)

    def _object_path(self, bucket: str, key: str | None = None) -> str:
        path = f"/{self.prefix}/{quote(bucket, safe='')}"
        if key is not None:
            path += f"/{quote(key, safe='')}"
        return path

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        response = self.session.request(method, self.base_url + path, **kwargs)
        logger.debug(
            "riak_request",
            method=method,
            path=path,
            status=response.status_code,
        )
        return response

    @staticmethod
    def _check(response: requests.Response, method: str, expected: int = 200) -> None:
        if response.status_code != expected:
            raise HTTPFailedRequest(
                method,
                expected,
                response.status_code,
                response.headers,
                response.text,
            )

    def get_object(self, bucket: str, key: str, options: Mapping[str, Any] | None = None) -> RObject:
        """Fetch ``bucket/key``, raising ``HTTPFailedRequest`` (404 included) on failure."""
        params = {name: value for name, value in (options or {}).items() if value is not None}
        response = self._request("GET", self._object_path(bucket, key), params=params)
        self._check(response, "get")
        return RObject.load_from_response(bucket, key, response.headers, response.content)

    def list_keys(self, bucket: str, callback: KeysCallback | None = None) -> list[str]:
        """List the keys of ``bucket``.

        With ``callback`` the store streams the listing and each non-empty
        chunk of keys is passed to the callback as it is decoded; an empty
        list is returned.
        """
        path = self._object_path(bucket)
        if callback is None:
            response = self._request("GET", path, params={"keys": "true", "props": "false"})
            self._check(response, "get")
            return list(response.json().get("keys", []))

        response = self._request(
            "GET", path, params={"keys": "stream", "props": "false"}, stream=True
        )
        try:
            self._check(response, "get")
            if response.encoding is None:
                response.encoding = "utf-8"
            for chunk in iter_json_objects(response.iter_content(chunk_size=None, decode_unicode=True)):
                keys = chunk.get("keys") or []
                if keys:
                    callback(list(keys))
        finally:
            response.close()
        return []

    def mapred(self, job: MapReduce) -> list[Any]:
        """Submit a map/reduce job and return the decoded results."""
        response = self._request(
            "POST",
            f"/{self.mapred_prefix}",
            data=job.to_json(),
            headers={"Content-Type": "application/json"},
        )
        self._check(response, "post")
        return list(response.json())

    def __repr__(self) -> str:
        return f"Client({self.base_url!r})"


def iter_json_objects(chunks: Iterable[str | bytes]) -> Iterator[dict[str, Any]]:
    """Decode a stream of concatenated JSON objects, e.g. ``{"keys":[..]}{"keys":[..]}``."""
    decoder = json.JSONDecoder()
    buffer = ""
    for chunk in chunks:
        if isinstance(chunk, bytes):
            chunk = chunk.decode("utf-8")
        buffer += chunk
        while True:
            buffer = buffer.lstrip()
            if not buffer:
                break
            try:
                obj, end = decoder.raw_decode(buffer)
            except json.JSONDecodeError:
                break  # incomplete object; wait for more data
            yield obj
            buffer = buffer[end:]
    if buffer.strip():
        raise ValueError(f"Truncated JSON stream: {buffer[:80]!r}")
