"""
Observed-Remove Set (OR-Set) CRDT implementation.
"""

import logging
from typing import Any, Dict, Hashable, Optional, Set

from .base import ReplicatedSet
from .schemas import ORSetSnapshot
from .tags import Tag, TagProvider, uuid_tag_provider

logger = logging.getLogger(__name__)


class ORSet(ReplicatedSet):
    """
    Observed-Remove Set CRDT.

    Every add mints a unique tag for the element. A remove tombstones
    only the tags it has seen, so an add made concurrently on another
    replica (with a tag the remover never observed) survives the merge.
    Tag sets only grow; tombstones are never collected.
    """

    def __init__(self, tag_provider: Optional[TagProvider] = None):
        """
        Initialize an empty OR-Set.

        Args:
            tag_provider: Zero-argument callable returning a fresh tag
                for each add (uses random UUID tags if None)
        """
        if tag_provider is None:
            tag_provider = uuid_tag_provider
        if not callable(tag_provider):
            raise TypeError(f"tag_provider must be callable, got {tag_provider!r}")
        self.tag_provider = tag_provider
        self.add_set: Dict[Hashable, Set[Tag]] = {}
        self.remove_set: Dict[Hashable, Set[Tag]] = {}

    def add(self, value: Hashable) -> Tag:
        """
        Add an element to the set with a fresh tag.

        Args:
            value: Element to add

        Returns:
            The tag minted for this addition
        """
        tag = self.tag_provider()
        self.add_set.setdefault(value, set()).add(tag)
        return tag

    def remove(self, value: Hashable) -> None:
        """
        Remove an element by tombstoning every tag observed for it.

        Tags added after this call, locally or through a merge, are not
        affected. Removing an unknown element does nothing.

        Args:
            value: Element to remove
        """
        observed = self.add_set.get(value)
        if observed is None:
            return
        self.remove_set.setdefault(value, set()).update(observed)

    def tags(self, value: Hashable) -> Set[Tag]:
        """
        Get the live tags of an element.

        Args:
            value: Element to look up

        Returns:
            Tags added for the element and not yet removed
        """
        return self.add_set.get(value, set()) - self.remove_set.get(value, set())

    def contains(self, value: Hashable) -> bool:
        """
        Check if an element exists in the set.

        Args:
            value: Element to check

        Returns:
            True if at least one add tag of the element is not removed
        """
        if value not in self.add_set:
            return False
        return bool(self.tags(value))

    def values(self) -> Set[Any]:
        """
        Get all live elements.

        Returns:
            Set of elements with at least one live tag
        """
        return {value for value in self.add_set if self.contains(value)}

    @staticmethod
    def _union_into(target: Dict[Hashable, Set[Tag]],
                    source: Dict[Hashable, Set[Tag]]) -> int:
        added = 0
        for value, tags in list(source.items()):
            current = target.setdefault(value, set())
            before = len(current)
            current.update(tags)
            added += len(current) - before
        return added

    def merge(self, other: 'ORSet') -> 'ORSet':
        """
        Merge another OR-Set into this one.

        Unions the add tags and the removed tags of every element.

        Args:
            other: Another ORSet instance

        Returns:
            This set, with merged tags
        """
        self._check_peer(other)
        added = self._union_into(self.add_set, other.add_set)
        removed = self._union_into(self.remove_set, other.remove_set)
        logger.debug("Merged OR-Set: %d new add tags, %d new removed tags",
                     added, removed)
        return self

    def copy(self) -> 'ORSet':
        """Return an independent replica sharing only the tag provider."""
        duplicate = ORSet(self.tag_provider)
        self._union_into(duplicate.add_set, self.add_set)
        self._union_into(duplicate.remove_set, self.remove_set)
        return duplicate

    def to_dict(self) -> Dict[str, Any]:
        """
        Copy the OR-Set state into a dictionary.

        Returns:
            Dictionary representation of the OR-Set
        """
        # Tags sorted by repr so equal replicas give equal snapshots
        return {
            'type': 'ORSet',
            'adds': [
                {'element': value, 'tags': sorted(tags, key=repr)}
                for value, tags in self.add_set.items()
            ],
            'removes': [
                {'element': value, 'tags': sorted(tags, key=repr)}
                for value, tags in self.remove_set.items()
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  tag_provider: Optional[TagProvider] = None) -> 'ORSet':
        """
        Create an ORSet from a dictionary representation.

        Args:
            data: Dictionary containing serialized ORSet state
            tag_provider: Tag provider for the new replica's own adds

        Returns:
            A new ORSet instance

        Raises:
            pydantic.ValidationError: If the dictionary is malformed
        """
        snapshot = ORSetSnapshot.model_validate(data)
        or_set = cls(tag_provider)
        for entry in snapshot.adds:
            or_set.add_set.setdefault(entry.element, set()).update(entry.tags)
        for entry in snapshot.removes:
            or_set.remove_set.setdefault(entry.element, set()).update(entry.tags)
        return or_set

    def __repr__(self) -> str:
        values_list = list(self.values())
        preview = values_list[:5]
        more = f", ... +{len(values_list) - 5} more" if len(values_list) > 5 else ""
        return f"ORSet(size={len(values_list)}, elements={preview}{more})"
