"""
kv-bridge - A type-based ODM for Riak-style HTTP key-value document stores.

Documents are JSON objects stored under keys in buckets. This package maps
them to Python classes and provides class-level finders:

Usage:
    from kv_bridge import Document, StringField, init

    init("http://127.0.0.1:8098")

    class Box(Document):
        shape = StringField()

    Box.find("square")              # Box or None
    Box.find("square", "circle")    # [Box | None, ...] in key order
    Box.find_or_raise("square")     # raises DocumentNotFound if missing
    Box.all()                       # every Box in the "boxes" bucket
"""

from .base.fields import BoolField, DictField, Field, FloatField, IntField, ListField, StringField
from .connection import close, get_client, init, is_connected, reset
from .errors import (
    DocumentNotFound,
    FailedRequest,
    HTTPFailedRequest,
    KVBridgeError,
    UnknownAttributeError,
)
from .riak import Bucket, Client, Document, Link, MapReduce, RObject

__version__ = "0.1.0"

__all__ = [
    "BoolField",
    "Bucket",
    "Client",
    "DictField",
    "Document",
    "DocumentNotFound",
    "FailedRequest",
    "Field",
    "FloatField",
    "HTTPFailedRequest",
    "IntField",
    "KVBridgeError",
    "Link",
    "ListField",
    "MapReduce",
    "RObject",
    "StringField",
    "UnknownAttributeError",
    "close",
    "get_client",
    "init",
    "is_connected",
    "reset",
]
