"""
Listener result collection returned by event triggers.
"""

from typing import Any, Iterator, List


class ResponseCollection:
    """
    Ordered collection of listener return values.

    Records whether dispatch was short-circuited, either by a trigger-until
    predicate or by a listener stopping propagation.
    """

    def __init__(self) -> None:
        self._responses: List[Any] = []
        self.stopped = False

    def push(self, response: Any) -> None:
        self._responses.append(response)

    def first(self) -> Any:
        """Return the first response, or None if there is none."""
        return self._responses[0] if self._responses else None

    def last(self) -> Any:
        """Return the last response, or None if there is none."""
        return self._responses[-1] if self._responses else None

    def contains(self, value: Any) -> bool:
        return value in self._responses

    def __iter__(self) -> Iterator[Any]:
        return iter(self._responses)

    def __len__(self) -> int:
        return len(self._responses)

    def __repr__(self) -> str:
        return f"ResponseCollection({self._responses!r}, stopped={self.stopped})"
