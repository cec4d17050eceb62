from ..base.model import BaseDocument
from .finders import Finders


class Document(BaseDocument, Finders, abstract=True):
    """Base class for documents stored as JSON objects in a Riak bucket.

    Example:
        >>> class Box(Document):
        ...     shape = StringField()
        >>> class CardboardBox(Box):
        ...     pass
        >>> Box.find("square")            # Box or None
        >>> Box.find("square", "circle")  # [Box | None, Box | None]
        >>> Box.all()                     # every Box (and CardboardBox) in "boxes"

    Subclasses of a concrete document share its bucket; records they save
    carry a ``_type`` tag so finders rebuild the right class. Request quorums
    are set per class through ``quorums``.
    """
