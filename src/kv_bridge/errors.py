"""Exceptions raised by kv-bridge.

Absence of a document is never an error for the plain finders: they return
``None``. Only the ``*_or_raise`` finders raise :class:`DocumentNotFound`.
Adapter failures surface as :class:`FailedRequest` subclasses.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

MESSAGES: dict[str, str] = {
    "document_not_found.no_key": "Couldn't find document without a key",
    "document_not_found.one_key": "Couldn't find document with key: {key}",
    "document_not_found.many_keys": "Couldn't find documents with keys: {keys}",
    "failed_request": "Expected {expected} from {method} but received {code}. {body}",
    "unknown_attribute": "{model} has no field named {name!r}",
}


def t(message_key: str, **kwargs: Any) -> str:
    """Look up and format a message."""
    return MESSAGES[message_key].format(**kwargs)


class KVBridgeError(Exception):
    """Base class for kv-bridge errors."""


class FailedRequest(KVBridgeError):
    """A request to the record store did not succeed."""

    @property
    def not_found(self) -> bool:
        return False


class HTTPFailedRequest(FailedRequest):
    """An HTTP request returned an unexpected status code."""

    def __init__(
        self,
        method: str,
        expected: int | Sequence[int],
        code: int,
        headers: Mapping[str, Any] | None = None,
        body: str = "",
    ) -> None:
        self.method = method
        self.expected = expected
        self.code = code
        self.headers = dict(headers or {})
        self.body = body
        super().__init__(
            t(
                "failed_request",
                method=method.upper(),
                expected=expected,
                code=code,
                body=body,
            ).rstrip()
        )

    @property
    def not_found(self) -> bool:
        return self.code == 404


class DocumentNotFound(KVBridgeError):
    """Raised by ``find_or_raise`` when a document cannot be found.

    Example:
        >>> try:
        ...     Box.find_or_raise("badkey")
        ... except DocumentNotFound:
        ...     print("No document here!")
    """

    def __init__(self, keys: Sequence[str], found: Any) -> None:
        self.keys = list(keys)
        self.missing: list[str] = []
        if not self.keys:
            message = t("document_not_found.no_key")
        elif len(self.keys) == 1:
            self.missing = list(self.keys)
            message = t("document_not_found.one_key", key=self.keys[0])
        else:
            found_keys = {doc.key for doc in (found or []) if doc is not None}
            self.missing = [key for key in self.keys if key not in found_keys]
            message = t("document_not_found.many_keys", keys=", ".join(self.missing))
        super().__init__(message)


class UnknownAttributeError(KVBridgeError, AttributeError):
    """Raised by strict bulk assignment of an undeclared field."""

    def __init__(self, model: str, name: str) -> None:
        super().__init__(t("unknown_attribute", model=model, name=name))
        self.model = model
        self.name = name
