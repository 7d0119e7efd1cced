"""
Task: one concrete interleaving of every client's statements.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Sequence, Tuple

from shuffler.models import Statement


class Task:
    """
    Single-pass, restartable sequence of statements.

    The elements never change after construction. Iterating advances an
    internal cursor; once exhausted the task yields nothing until reset().
    """

    __slots__ = ("_id", "_required_client_count", "_elements", "_cursor")

    def __init__(
        self,
        task_id: int,
        required_client_count: int,
        elements: Sequence[Statement],
    ):
        self._id = task_id
        self._required_client_count = required_client_count
        self._elements: Tuple[Statement, ...] = tuple(elements)
        self._cursor = 0

    @property
    def id(self) -> int:
        """Position of the task in generation order."""
        return self._id

    @property
    def required_client_count(self) -> int:
        """Number of clients the pool must hold before running the task."""
        return self._required_client_count

    @property
    def elements(self) -> Tuple[Statement, ...]:
        """Statements in execution order."""
        return self._elements

    @property
    def cursor(self) -> int:
        """Index of the next statement to yield."""
        return self._cursor

    @property
    def exhausted(self) -> bool:
        """True once every statement has been yielded."""
        return self._cursor >= len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Statement]:
        return self

    def __next__(self) -> Statement:
        if self._cursor >= len(self._elements):
            raise StopIteration
        stmt = self._elements[self._cursor]
        self._cursor += 1
        return stmt

    def reset(self) -> None:
        self._cursor = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self._id,
            "required_client_count": self._required_client_count,
            "statements": [stmt.to_dict() for stmt in self._elements],
        }

    def __repr__(self) -> str:
        return (
            f"Task(id={self._id}, clients={self._required_client_count}, "
            f"cursor={self._cursor}/{len(self._elements)})"
        )
