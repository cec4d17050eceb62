"""
Base utilities and abstractions for kv-bridge documents.

This package provides the store-independent pieces: field descriptors, the
document metaclass and its type registry, and the client contracts.
"""

from .backends import SyncBucket, SyncClient
from .fields import BoolField, DictField, Field, FloatField, IntField, ListField, StringField
from .metaclass import ModelMetaclass, resolve_document_type
from .model import TYPE_TAG, BaseDocument

__all__ = [
    "BaseDocument",
    "BoolField",
    "DictField",
    "Field",
    "FloatField",
    "IntField",
    "ListField",
    "ModelMetaclass",
    "StringField",
    "SyncBucket",
    "SyncClient",
    "TYPE_TAG",
    "resolve_document_type",
]
