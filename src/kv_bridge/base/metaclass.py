from __future__ import annotations

import re
from typing import Any, get_type_hints

from ..logging import get_logger
from .fields import Field

logger = get_logger(__name__)

# Document classes by name, used to resolve the "_type" tag of stored records
_document_types: dict[str, type[Any]] = {}


def pluralize(word: str) -> str:
    """Naive English plural used for default bucket names."""
    if re.search(r"(s|x|z|ch|sh)$", word):
        return word + "es"
    if re.search(r"[^aeiou]y$", word):
        return word[:-1] + "ies"
    return word + "s"


def underscore(name: str) -> str:
    """Convert a CamelCase class name to snake_case."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.lower()


def resolve_document_type(name: Any, default: type[Any]) -> type[Any]:
    """Return the registered document class named ``name``.

    Falls back to ``default`` when the name is missing, unknown, or names a
    class outside ``default``'s hierarchy.
    """
    if not isinstance(name, str):
        return default
    klass = _document_types.get(name)
    if klass is None or not issubclass(klass, default):
        return default
    return klass


class ModelMetaclass(type):
    """Metaclass for ODM documents that processes field definitions."""

    def __new__(
        mcs,
        name: str,
        bases: tuple[type[Any], ...],
        namespace: dict[str, Any],
        **kwargs: Any,
    ) -> ModelMetaclass:
        bucket = kwargs.pop("bucket", None)
        abstract = kwargs.pop("abstract", False)
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        # Collect fields from class and its bases
        fields: dict[str, Field[Any]] = {}

        for base in reversed(bases):
            if hasattr(base, "_fields"):
                fields.update(base._fields)  # type: ignore[attr-defined]

        for attr_name, attr_value in namespace.items():
            if isinstance(attr_value, Field):
                fields[attr_name] = attr_value

        cls._fields = fields  # type: ignore[attr-defined]
        cls._abstract = abstract  # type: ignore[attr-defined]

        # Subclasses of a concrete document share its bucket
        if bucket is None:
            for base in bases:
                if getattr(base, "_bucket_name", None) and not getattr(base, "_abstract", True):
                    bucket = base._bucket_name  # type: ignore[attr-defined]
                    break
        if bucket is None and not abstract:
            bucket = pluralize(underscore(name))
        cls._bucket_name = bucket  # type: ignore[attr-defined]

        if not abstract:
            try:
                hints = get_type_hints(cls)
                for field_name, field in fields.items():
                    if field_name in hints:
                        field.type = hints[field_name]
            except (NameError, AttributeError):
                # Type hints might not be resolvable during class creation
                pass
            previous = _document_types.get(name)
            if previous is not None and previous is not cls:
                # Last definition wins; stored "_type" tags resolve to it from now on
                logger.warning(
                    "document_type_replaced",
                    name=name,
                    previous=f"{previous.__module__}.{previous.__qualname__}",
                    replacement=f"{cls.__module__}.{cls.__qualname__}",
                )
            _document_types[name] = cls

        return cls  # type: ignore[return-value]
