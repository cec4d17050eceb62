"""Links between objects in the store, as carried by the ``Link:`` header."""

from __future__ import annotations

import re
from urllib.parse import quote, unquote

LINK_PATTERN = re.compile(r'<([^>]+)>\s*;\s*(?:rel|riaktag)="([^"]+)"')


class Link:
    """A link to a related resource.

    Example:
        >>> Link.parse('</riak/boxes/lid>; riaktag="lid"')
        [Link('/riak/boxes/lid', 'lid')]
    """

    def __init__(self, url: str, rel: str) -> None:
        self.url = url
        self.rel = rel

    @classmethod
    def parse(cls, header: str | None) -> list[Link]:
        """Parse every link in a ``Link:`` header value."""
        if not header:
            return []
        return [cls(url, rel) for url, rel in LINK_PATTERN.findall(header)]

    @classmethod
    def to_object(cls, bucket: str, key: str, tag: str, prefix: str = "riak") -> Link:
        """Build a link to ``bucket/key`` tagged ``tag``."""
        return cls(f"/{prefix}/{quote(bucket, safe='')}/{quote(key, safe='')}", tag)

    @property
    def tag(self) -> str:
        return self.rel

    @property
    def bucket(self) -> str | None:
        parts = self._path_parts()
        return parts[1] if len(parts) > 1 else None

    @property
    def key(self) -> str | None:
        parts = self._path_parts()
        return parts[2] if len(parts) > 2 else None

    def _path_parts(self) -> list[str]:
        return [unquote(part) for part in self.url.strip("/").split("/")]

    def __str__(self) -> str:
        return f'<{self.url}>; rel="{self.rel}"'

    def __repr__(self) -> str:
        return f"Link({self.url!r}, {self.rel!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        return self.url == other.url and self.rel == other.rel

    def __hash__(self) -> int:
        return hash((self.url, self.rel))
