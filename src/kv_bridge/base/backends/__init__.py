"""Base backend abstractions."""

from .sync import SyncBucket, SyncClient

__all__ = [
    "SyncBucket",
    "SyncClient",
]
