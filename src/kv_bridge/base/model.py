from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from ..errors import UnknownAttributeError
from .fields import Field
from .metaclass import ModelMetaclass

if TYPE_CHECKING:
    from .backends.sync import SyncBucket, SyncClient

T = TypeVar("T", bound="BaseDocument")

TYPE_TAG = "_type"


class BaseDocument(metaclass=ModelMetaclass, abstract=True):
    """Base document class holding a key and an ordered attribute bag.

    Declared :class:`Field` descriptors read and write the bag; fields the
    class does not declare may still live in it (records loaded from the
    store keep everything they carried) and are reachable with ``doc[name]``.
    """

    _fields: ClassVar[dict[str, Field[Any]]]
    _bucket_name: ClassVar[str | None]
    _abstract: ClassVar[bool]
    _client: ClassVar[SyncClient | None] = None

    def __init__(self, key: str | None = None, **kwargs: Any) -> None:
        """Initialize a new document with field values."""
        self._key: str | None = None
        self._attributes: dict[str, Any] = {}
        self._new = True
        self._robject: Any = None
        for field in self._fields.values():
            if field.default is not None:
                self._attributes[field.key] = field.default
        if key is not None:
            self.key = key
        if kwargs:
            self.assign_attributes(kwargs)

    @classmethod
    def set_client(cls, client: SyncClient | None) -> None:
        """Set the store client for this document class and its subclasses."""
        cls._client = client

    @classmethod
    def client(cls) -> SyncClient:
        if cls._client is not None:
            return cls._client
        from ..connection import get_client

        return get_client()

    @classmethod
    def bucket(cls) -> SyncBucket:
        if cls._bucket_name is None:
            raise TypeError(f"{cls.__name__} is abstract and has no bucket")
        return cls.client().bucket(cls._bucket_name)

    @property
    def key(self) -> str | None:
        return self._key

    @key.setter
    def key(self, value: str | None) -> None:
        if not self._new and value != self._key:
            raise AttributeError(f"Cannot change the key of a loaded {self.__class__.__name__}")
        self._key = None if value is None else str(value)

    @property
    def robject(self) -> Any:
        """The raw record this document was loaded from, if any."""
        return self._robject

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    def is_new(self) -> bool:
        return self._new

    def assign_attributes(self, values: Mapping[str, Any], strict: bool = True) -> None:
        """Bulk-assign attributes.

        With ``strict`` (the default) declared fields go through their
        descriptors and undeclared names raise :class:`UnknownAttributeError`.
        Without it every value is stored verbatim under its payload name,
        which is how records loaded from the store are populated.
        """
        if not strict:
            self._attributes.update(values)
            return

        declared = {field.key: name for name, field in self._fields.items()}
        for attr_name, value in values.items():
            if attr_name in self._fields:
                setattr(self, attr_name, value)
            elif attr_name in declared:
                setattr(self, declared[attr_name], value)
            else:
                raise UnknownAttributeError(self.__class__.__name__, attr_name)

    def _mark_loaded(self, robject: Any) -> None:
        self._new = False
        self._robject = robject

    def __getitem__(self, name: str) -> Any:
        field = self._fields.get(name)
        if field is not None:
            return getattr(self, name)
        return self._attributes.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        if name in self._fields:
            setattr(self, name, value)
        else:
            self._attributes[name] = value

    def to_dict(self) -> dict[str, Any]:
        """Convert the document to the payload stored under its key."""
        result: dict[str, Any] = {}
        for field_name, field in self._fields.items():
            value = getattr(self, field_name, None)
            if value is not None:
                result[field.key] = value
        for attr_name, value in self._attributes.items():
            result.setdefault(attr_name, value)
        if self._is_subtype():
            result[TYPE_TAG] = self.__class__.__name__
        return result

    @classmethod
    def _is_subtype(cls) -> bool:
        return any(
            isinstance(base, ModelMetaclass) and not base._abstract  # type: ignore[attr-defined]
            for base in cls.__mro__[1:]
        )

    @classmethod
    def from_dict(cls: type[T], data: Mapping[str, Any], key: str | None = None) -> T:
        """Create a new (unsaved) document from a payload."""
        doc = cls(key=key)
        doc.assign_attributes({k: v for k, v in data.items() if k != TYPE_TAG}, strict=False)
        return doc

    def __repr__(self) -> str:
        values = [f"key={self._key!r}"]
        for attr_name, value in self._attributes.items():
            values.append(f"{attr_name}={value!r}")
        return f"{self.__class__.__name__}({', '.join(values)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__) or not isinstance(self, other.__class__):
            return False
        return self._key == other._key and self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]
