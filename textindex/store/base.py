"""
Ordered-set store contract used by the index.

A store keeps named sets of (member, score) pairs and can combine them
server-side. Everything one index call writes goes through a Batch so that
it applies atomically.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence, Union

Member = Union[str, int]


class Batch(ABC):
    """
    Commands queued for one atomic execution.

    Mutators return the batch so calls can be chained. execute() returns one
    result per queued command, in the order they were queued.
    """

    @abstractmethod
    def add(self, key: str, member: Member, score: float) -> 'Batch':
        pass

    @abstractmethod
    def increment(self, key: str, member: Member, amount: float) -> 'Batch':
        pass

    @abstractmethod
    def range_by_rank(self, key: str, start: int, stop: int, desc: bool = False) -> 'Batch':
        pass

    @abstractmethod
    def remove_member(self, key: str, member: Member) -> 'Batch':
        pass

    @abstractmethod
    def remove_by_rank_range(self, key: str, start: int, stop: int) -> 'Batch':
        pass

    @abstractmethod
    def intersect_into(self, dest: str, keys: Sequence[str]) -> 'Batch':
        pass

    @abstractmethod
    def union_into(self, dest: str, keys: Sequence[str]) -> 'Batch':
        pass

    @abstractmethod
    def delete_key(self, *keys: str) -> 'Batch':
        pass

    @abstractmethod
    def expire(self, key: str, seconds: int) -> 'Batch':
        pass

    @abstractmethod
    async def execute(self) -> List[Any]:
        pass


class OrderedSetStore(ABC):
    """Abstract ordered-set store."""

    @abstractmethod
    def batch(self) -> Batch:
        """Start a new atomic batch."""
        pass

    @abstractmethod
    async def add(self, key: str, member: Member, score: float) -> int:
        """Create or update a member's score. Returns 1 if the member is new."""
        pass

    @abstractmethod
    async def increment(self, key: str, member: Member, amount: float) -> float:
        """Add amount to a member's score (0 when absent). Returns the new score."""
        pass

    @abstractmethod
    async def range_by_rank(self, key: str, start: int, stop: int,
                            desc: bool = False) -> List[str]:
        """
        Members whose rank falls in [start, stop].

        Args:
            key: Set name
            start: First rank (negative counts from the end)
            stop: Last rank, inclusive (-1 is the last member)
            desc: Rank by descending score instead of ascending

        Returns:
            Members in rank order
        """
        pass

    @abstractmethod
    async def remove_member(self, key: str, member: Member) -> int:
        pass

    @abstractmethod
    async def remove_by_rank_range(self, key: str, start: int, stop: int) -> int:
        """Remove members ranked (ascending) in [start, stop]. Returns the count removed."""
        pass

    @abstractmethod
    async def intersect_into(self, dest: str, keys: Sequence[str]) -> int:
        """Store the score-summed intersection of keys in dest. Returns its size."""
        pass

    @abstractmethod
    async def union_into(self, dest: str, keys: Sequence[str]) -> int:
        """Store the score-summed union of keys in dest. Returns its size."""
        pass

    @abstractmethod
    async def delete_key(self, *keys: str) -> int:
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def expire(self, key: str, seconds: int) -> bool:
        pass

    @abstractmethod
    async def scan_keys(self, pattern: str) -> List[str]:
        """All keys matching a glob-style pattern."""
        pass

    async def close(self) -> None:
        """Release client resources."""
        pass
