"""
Abstract interface shared by the replicated set types.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Set, TypeVar

T = TypeVar('T', bound='ReplicatedSet')


class ReplicatedSet(ABC):
    """
    Abstract interface for replicated sets.

    Replicas of a set are mutated independently and reconciled with
    ``merge``. Implementations keep their own state; this class only
    fixes the operations every replica understands.
    """

    @abstractmethod
    def add(self, value: Hashable, *args: Any) -> Any:
        """Record an addition of ``value``."""

    @abstractmethod
    def remove(self, value: Hashable, *args: Any) -> None:
        """Record a removal of ``value``."""

    @abstractmethod
    def contains(self, value: Hashable) -> bool:
        """Return True if ``value`` is currently a member."""

    @abstractmethod
    def merge(self: T, other: T) -> T:
        """
        Merge another replica's state into this one.

        The merge operation must be:
        - Commutative: merge(a, b) == merge(b, a)
        - Associative: merge(merge(a, b), c) == merge(a, merge(b, c))
        - Idempotent: merge(a, a) == a

        ``other`` is only read, never modified, and no reference into
        its state is kept.

        Args:
            other: Another replica of the same type

        Returns:
            This replica, updated in place
        """

    @abstractmethod
    def values(self) -> Set[Any]:
        """Return the set of live elements."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """
        Copy the replica state into a plain dictionary.

        Returns:
            Dictionary representation of the replica state
        """

    @classmethod
    @abstractmethod
    def from_dict(cls: type[T], data: Dict[str, Any]) -> T:
        """
        Create a replica from a dictionary representation.

        Args:
            data: Dictionary produced by ``to_dict``

        Returns:
            A new replica reconstructed from the dictionary
        """

    def _check_peer(self, other: Any) -> None:
        if not isinstance(other, type(self)):
            raise TypeError(
                f"cannot merge {type(other).__name__} into {type(self).__name__}"
            )

    def __contains__(self, value: Hashable) -> bool:
        return self.contains(value)

    def __len__(self) -> int:
        return len(self.values())
