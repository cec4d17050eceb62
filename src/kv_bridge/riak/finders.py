"""Class-level finders for documents stored in a bucket."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar, Self

from ..base.metaclass import resolve_document_type
from ..base.model import TYPE_TAG
from ..config import get_settings
from ..errors import DocumentNotFound, FailedRequest
from ..logging import get_logger
from .mapreduce import MapReduce
from .robject import RObject

logger = get_logger(__name__)

IDENTITY_MAP = "function(value) {return [value]}"


def _flatten(args: Iterable[Any]) -> list[Any]:
    flat: list[Any] = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            flat.extend(_flatten(arg))
        else:
            flat.append(arg)
    return flat


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class Finders:
    """Finder classmethods mixed into :class:`~kv_bridge.riak.document.Document`.

    A lookup never raises for a missing key: the plain finders return
    ``None`` in its place. Only ``find_or_raise`` and ``first_or_raise``
    turn absence into :class:`~kv_bridge.errors.DocumentNotFound`. Any other
    store failure propagates unchanged.
    """

    # Request quorums (r, w, dw, rw); finders only use "r".
    quorums: ClassVar[Mapping[str, Any]] = {}

    @classmethod
    def find(cls, *keys: Any, callback: Callable[[Self | None], Any] | None = None) -> Any:
        """Retrieve one or several documents.

        ``find("key")`` returns the document or ``None``.
        ``find("k1", "k2")`` or ``find(["k1", "k2"])`` returns a list in key
        order with ``None`` for missing documents, fetched with a single
        map/reduce query. With ``callback``, each key is fetched on its own
        and every result, ``None`` included, is passed to the callback in key
        order; the return value is then an empty list.

        Returns ``None`` when no usable key is given.
        """
        flat = _flatten(keys)
        if not flat or all(_blank(key) for key in flat):
            return None
        if len(flat) == 1:
            return cls._find_one(flat[0])
        if callback is not None:
            for key in flat:
                callback(cls._find_one(key))
            return []
        return cls._find_many(flat)

    @classmethod
    def find_or_raise(cls, *keys: Any, callback: Callable[[Self | None], Any] | None = None) -> Any:
        """Like :meth:`find`, but raise ``DocumentNotFound`` if any key is missing."""
        found = cls.find(*keys, callback=callback)
        if found is None or (isinstance(found, list) and any(doc is None for doc in found)):
            requested = _flatten(keys)
            if found is None:
                requested = [key for key in requested if not _blank(key)]
            error = DocumentNotFound(requested, found)
            logger.debug("document_not_found", model=cls.__name__, keys=error.missing)
            raise error
        return found

    @classmethod
    def first(cls) -> Self | None:
        """Find the document under the first key the bucket lists.

        The store does not order keys; this is not the first document added.
        """
        keys = cls.bucket().keys()
        return cls.find(keys[0] if keys else None)

    @classmethod
    def first_or_raise(cls) -> Self:
        """Like :meth:`first`, but raise ``DocumentNotFound`` on an empty bucket."""
        keys = cls.bucket().keys()
        return cls.find_or_raise(keys[0] if keys else None)

    @classmethod
    def all(cls, callback: Callable[[Self], Any] | None = None) -> list[Self]:
        """Return every document in the bucket.

        With ``callback``, keys are streamed from the store and each existing
        document is fetched and passed to the callback; an empty list is
        returned.
        """
        bucket = cls.bucket()
        if callback is None:
            keys = list(dict.fromkeys(bucket.keys()))
            return [doc for doc in cls._find_many(keys) if doc is not None]

        seen: set[str] = set()

        def stream(keys: list[str]) -> None:
            for key in keys:
                if key in seen:
                    continue
                seen.add(key)
                doc = cls._find_one(key)
                if doc is not None:
                    callback(doc)

        bucket.keys(callback=stream)
        return []

    @classmethod
    def _read_options(cls) -> dict[str, Any]:
        r = cls.quorums.get("r")
        if r is None:
            r = get_settings().read_quorum
        return {} if r is None else {"r": r}

    @classmethod
    def _find_one(cls, key: Any) -> Self | None:
        logger.debug("document_find", model=cls.__name__, key=key)
        try:
            robject = cls.bucket().get(key, cls._read_options())
        except FailedRequest as exc:
            if not exc.not_found:
                raise
            return None
        return cls._instantiate(robject)

    @classmethod
    def _find_many(cls, keys: list[Any]) -> list[Self | None]:
        if not keys:
            return []

        bucket = cls.bucket()
        mapreduce = MapReduce(bucket.client)
        for key in keys:
            mapreduce.add(bucket.name, key)
        mapreduce.map(IDENTITY_MAP, keep=True)
        robjects = RObject.load_from_mapreduce(mapreduce.run())
        logger.debug("document_find_many", model=cls.__name__, requested=len(keys), returned=len(robjects))

        indexed: dict[Any, Self] = {}
        for robject in robjects:
            if robject.not_found:
                continue
            doc = cls._instantiate(robject)
            indexed[doc.key] = doc
        return [indexed.get(key) for key in keys]

    @classmethod
    def _instantiate(cls, robject: RObject) -> Self:
        data = robject.data if isinstance(robject.data, Mapping) else None
        type_name = data.get(TYPE_TAG) if data is not None else None
        klass = resolve_document_type(type_name, cls)
        if type_name is not None and klass is cls and type_name != cls.__name__:
            logger.debug("document_type_fallback", model=cls.__name__, type=type_name)

        doc = klass()
        doc.key = robject.key
        if data is not None:
            doc.assign_attributes({k: v for k, v in data.items() if k != TYPE_TAG}, strict=False)
        doc._mark_loaded(robject)
        return doc
