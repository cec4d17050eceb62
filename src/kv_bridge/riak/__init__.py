"""
Riak-compatible HTTP store support.

Usage:
    from kv_bridge.riak import Client, Document
    from kv_bridge import StringField

    class Box(Document):
        shape = StringField()

    Box.set_client(Client("127.0.0.1", 8098))
    box = Box.find("square")
"""

from .bucket import Bucket
from .client import Client
from .document import Document
from .finders import Finders
from .link import Link
from .mapreduce import MapReduce
from .robject import RObject

__all__ = [
    "Bucket",
    "Client",
    "Document",
    "Finders",
    "Link",
    "MapReduce",
    "RObject",
]
