"""Buckets of key-addressed records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..base.backends.sync import KeysCallback, SyncBucket

if TYPE_CHECKING:
    from .client import Client
    from .robject import RObject


class Bucket(SyncBucket):
    """A named bucket on a :class:`~kv_bridge.riak.client.Client`."""

    def __init__(self, client: Client, name: str) -> None:
        if not name:
            raise ValueError("Bucket name must not be empty")
        self.client = client
        self.name = name

    def get(self, key: str, options: Mapping[str, Any] | None = None) -> RObject:
        return self.client.get_object(self.name, key, options or {})

    def keys(self, callback: KeysCallback | None = None) -> list[str]:
        return self.client.list_keys(self.name, callback)

    def __repr__(self) -> str:
        return f"Bucket({self.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bucket):
            return NotImplemented
        return self.client is other.client and self.name == other.name

    def __hash__(self) -> int:
        return hash((id(self.client), self.name))
