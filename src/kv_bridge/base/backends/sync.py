from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...riak.mapreduce import MapReduce
    from ...riak.robject import RObject

KeysCallback = Callable[[list[str]], Any]


class SyncBucket(ABC):
    """Abstract base class for a synchronous bucket of key-addressed records."""

    name: str
    client: SyncClient

    @abstractmethod
    def get(self, key: str, options: Mapping[str, Any] | None = None) -> RObject:
        """Fetch the record stored under ``key``.

        Raises a ``FailedRequest`` whose ``not_found`` is true when the key
        holds no record.
        """
        pass

    @abstractmethod
    def keys(self, callback: KeysCallback | None = None) -> list[str]:
        """List the bucket's keys.

        With ``callback`` the keys are streamed to it in chunks and an empty
        list is returned.
        """
        pass


class SyncClient(ABC):
    """Abstract base class for synchronous record store clients."""

    @abstractmethod
    def bucket(self, name: str) -> SyncBucket:
        """Return the bucket called ``name``."""
        pass

    @abstractmethod
    def mapred(self, job: MapReduce) -> Sequence[Any]:
        """Run a map/reduce job and return its raw results."""
        pass
