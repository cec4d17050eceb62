"""Map/reduce job builder."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from ..base.backends.sync import SyncClient


class MapReduce:
    """A map/reduce job over explicit bucket/key inputs.

    Example:
        >>> job = MapReduce(client).add("boxes", "square").add("boxes", "circle")
        >>> job.map("function(value) {return [value]}", keep=True)
        >>> results = job.run()
    """

    def __init__(self, client: SyncClient) -> None:
        self.client = client
        self.inputs: list[list[str]] = []
        self.query: list[dict[str, Any]] = []

    def add(self, bucket: str, key: str) -> Self:
        """Add a bucket/key pair to the job inputs."""
        self.inputs.append([bucket, key])
        return self

    def map(self, source: str, keep: bool = False, arg: Any = None) -> Self:
        """Append a JavaScript map phase."""
        phase: dict[str, Any] = {"language": "javascript", "source": source, "keep": keep}
        if arg is not None:
            phase["arg"] = arg
        self.query.append({"map": phase})
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"inputs": self.inputs, "query": self.query}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def run(self) -> list[Any]:
        """Execute the job, returning the raw results of the kept phases."""
        if not self.query:
            raise ValueError("A map/reduce job needs at least one phase")
        return list(self.client.mapred(self))

    def __repr__(self) -> str:
        return f"MapReduce(inputs={len(self.inputs)}, phases={len(self.query)})"
