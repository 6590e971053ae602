"""
Last-Writer-Wins Element Set (LWW-Element-Set) CRDT implementation.
"""

import logging
import time
from enum import Enum
from typing import Any, Dict, Hashable, Optional, Set

from .base import ReplicatedSet
from .schemas import LWWElementSetSnapshot

logger = logging.getLogger(__name__)


class Bias(Enum):
    """Outcome of ``contains`` when add and remove timestamps are equal."""

    ADDS = 'adds'
    REMOVALS = 'removals'


class LWWElementSet(ReplicatedSet):
    """
    Last-Writer-Wins Element Set CRDT.

    Keeps, per element, the latest add timestamp and the latest remove
    timestamp. An element is a member when its add timestamp is newer
    than its remove timestamp; exact ties are settled by ``bias``.
    Entries are never deleted, so removals act as permanent tombstones.

    Timestamps can be any totally ordered values (floats, datetimes,
    logical clocks) as long as one set does not mix kinds.
    """

    def __init__(self, bias: Bias = Bias.ADDS, monotonic_local: bool = False):
        """
        Initialize an empty LWW-Element-Set.

        Args:
            bias: Tie-break rule for equal add/remove timestamps
            monotonic_local: If True, local add/remove keep the newest
                timestamp like merge does. If False, the last local call
                overwrites the recorded timestamp regardless of its value.
        """
        if not isinstance(bias, Bias):
            raise TypeError(f"bias must be a Bias, got {bias!r}")
        self.bias = bias
        self.monotonic_local = monotonic_local
        self.add_set: Dict[Hashable, Any] = {}
        self.remove_set: Dict[Hashable, Any] = {}

    def _record(self, mapping: Dict[Hashable, Any], value: Hashable,
                timestamp: Optional[Any]) -> None:
        if timestamp is None:
            timestamp = time.time()

        previous = mapping.get(value)
        if previous is not None and timestamp < previous:
            if self.monotonic_local:
                return
            logger.debug("Timestamp for %r moved back from %r to %r",
                         value, previous, timestamp)
        mapping[value] = timestamp

    def add(self, value: Hashable, timestamp: Optional[Any] = None) -> None:
        """
        Record an addition of ``value`` at ``timestamp``.

        Args:
            value: Element to add
            timestamp: Time of the addition (uses current time if None)
        """
        self._record(self.add_set, value, timestamp)

    def remove(self, value: Hashable, timestamp: Optional[Any] = None) -> None:
        """
        Record a removal of ``value`` at ``timestamp``.

        Removing an element that was never added is allowed; the removal
        is kept and still shadows any older add merged in later.

        Args:
            value: Element to remove
            timestamp: Time of the removal (uses current time if None)
        """
        self._record(self.remove_set, value, timestamp)

    def contains(self, value: Hashable) -> bool:
        """
        Check if an element is in the set.

        Args:
            value: Element to check

        Returns:
            True if the element's add timestamp beats its remove timestamp
        """
        if value not in self.add_set:
            return False
        if value not in self.remove_set:
            return True

        added = self.add_set[value]
        removed = self.remove_set[value]
        if added == removed:
            return self.bias is Bias.ADDS
        return added > removed

    def add_timestamp(self, value: Hashable) -> Optional[Any]:
        """Return the recorded add timestamp of ``value``, if any."""
        return self.add_set.get(value)

    def remove_timestamp(self, value: Hashable) -> Optional[Any]:
        """Return the recorded remove timestamp of ``value``, if any."""
        return self.remove_set.get(value)

    def values(self) -> Set[Any]:
        """
        Get all live elements.

        Returns:
            Set of elements for which ``contains`` is True
        """
        return {value for value in self.add_set if self.contains(value)}

    @staticmethod
    def _merge_latest(target: Dict[Hashable, Any],
                      source: Dict[Hashable, Any]) -> int:
        changed = 0
        for value, timestamp in list(source.items()):
            if value not in target or timestamp > target[value]:
                target[value] = timestamp
                changed += 1
        return changed

    def merge(self, other: 'LWWElementSet') -> 'LWWElementSet':
        """
        Merge another LWW-Element-Set into this one.

        Keeps the newest timestamp per element, separately for adds and
        removes. The bias of this replica is kept, so replicas must share
        one bias for merges to converge.

        Args:
            other: Another LWWElementSet instance

        Returns:
            This set, with merged timestamps
        """
        self._check_peer(other)
        added = self._merge_latest(self.add_set, other.add_set)
        removed = self._merge_latest(self.remove_set, other.remove_set)
        logger.debug("Merged LWW-Element-Set: %d add and %d remove entries updated",
                     added, removed)
        return self

    def copy(self) -> 'LWWElementSet':
        """Return an independent replica with the same state and options."""
        duplicate = LWWElementSet(self.bias, self.monotonic_local)
        duplicate.add_set = dict(self.add_set)
        duplicate.remove_set = dict(self.remove_set)
        return duplicate

    def to_dict(self) -> Dict[str, Any]:
        """
        Copy the LWW-Element-Set state into a dictionary.

        Returns:
            Dictionary representation of the LWW-Element-Set
        """
        return {
            'type': 'LWWElementSet',
            'bias': self.bias.value,
            'monotonic_local': self.monotonic_local,
            'adds': [
                {'element': value, 'timestamp': timestamp}
                for value, timestamp in self.add_set.items()
            ],
            'removes': [
                {'element': value, 'timestamp': timestamp}
                for value, timestamp in self.remove_set.items()
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LWWElementSet':
        """
        Create an LWWElementSet from a dictionary representation.

        Args:
            data: Dictionary containing serialized LWWElementSet state

        Returns:
            A new LWWElementSet instance

        Raises:
            pydantic.ValidationError: If the dictionary is malformed
        """
        snapshot = LWWElementSetSnapshot.model_validate(data)
        lww_set = cls(Bias(snapshot.bias), snapshot.monotonic_local)
        for entry in snapshot.adds:
            lww_set._merge_latest(lww_set.add_set, {entry.element: entry.timestamp})
        for entry in snapshot.removes:
            lww_set._merge_latest(lww_set.remove_set, {entry.element: entry.timestamp})
        return lww_set

    def __repr__(self) -> str:
        values_list = list(self.values())
        preview = values_list[:5]
        more = f", ... +{len(values_list) - 5} more" if len(values_list) > 5 else ""
        return (f"LWWElementSet(bias={self.bias.value}, size={len(values_list)}, "
                f"elements={preview}{more})")
