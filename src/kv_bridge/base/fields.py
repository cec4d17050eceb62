from __future__ import annotations

from collections.abc import Callable
from typing import Any, Self, TypeVar, overload

T = TypeVar("T")


class Field[T]:
    """Base field descriptor storing its value in the document's attribute bag."""

    def __init__(
        self,
        default: T | None = None,
        *,
        default_factory: Callable[[], T] | None = None,
        required: bool = False,
        db_field: str | None = None,
    ) -> None:
        if default is not None and default_factory is not None:
            raise ValueError("Cannot specify both default and default_factory")

        self.default = default
        self.default_factory = default_factory
        self.required = required
        self.db_field = db_field
        self.name: str | None = None  # Set by __set_name__
        self.type: type[T] | None = None  # Set by metaclass

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self.name = name
        if self.db_field is None:
            self.db_field = name

    @property
    def key(self) -> str:
        """Name of the field inside the stored payload."""
        return self.db_field or self.name or ""

    def get_default(self) -> T | None:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    @overload
    def __get__(self, obj: None, objtype: type[Any]) -> Self: ...

    @overload
    def __get__(self, obj: Any, objtype: type[Any]) -> T: ...

    def __get__(self, obj: Any | None, objtype: type[Any]) -> Self | T:
        if obj is None:
            return self

        attributes = obj._attributes
        value = attributes.get(self.key)
        if value is None and self.key not in attributes:
            value = self.get_default()
            if self.default_factory is not None:
                attributes[self.key] = value

        return value

    def __set__(self, obj: Any, value: T) -> None:
        if self.required and value is None:
            raise ValueError(f"Field {self.name} is required")
        obj._attributes[self.key] = self.coerce(value)

    def coerce(self, value: Any) -> Any:
        """Convert an assigned value to the field's Python type."""
        return value


class IntField(Field[int]):
    """Integer field."""

    def coerce(self, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return int(value)
        return value


class FloatField(Field[float]):
    """Float field."""

    def coerce(self, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        return value


class StringField(Field[str]):
    """String field with optional length limits."""

    def __init__(
        self,
        default: str | None = None,
        *,
        max_length: int | None = None,
        min_length: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(default, **kwargs)
        self.max_length = max_length
        self.min_length = min_length

    def coerce(self, value: Any) -> Any:
        if value is None:
            return value
        value = str(value)
        if self.max_length is not None and len(value) > self.max_length:
            raise ValueError(f"Field {self.name} is longer than {self.max_length}")
        if self.min_length is not None and len(value) < self.min_length:
            raise ValueError(f"Field {self.name} is shorter than {self.min_length}")
        return value


class BoolField(Field[bool]):
    """Boolean field."""

    pass


class ListField[T](Field[list[T]]):
    """List field for array values."""

    def __init__(
        self,
        item_type: type[T] | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("default_factory", list)
        super().__init__(**kwargs)
        self.item_type = item_type


class DictField(Field[dict[str, Any]]):
    """Dictionary field for nested objects."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("default_factory", dict)
        super().__init__(**kwargs)
