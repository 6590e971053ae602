"""
Tags identify individual add operations in an OR-Set.

A tag can be any hashable value that is unique per add, such as a
string, an integer or a ``uuid.UUID``.
"""

import itertools
import uuid
from typing import Callable, Hashable

Tag = Hashable
TagProvider = Callable[[], Tag]


def uuid_tag_provider() -> Tag:
    """Mint a random, globally unique tag."""
    return str(uuid.uuid4())


class SequentialTagProvider:
    """
    Deterministic tag provider.

    Produces ``"{prefix}-1"``, ``"{prefix}-2"``, ... Two providers only
    produce disjoint tags when their prefixes differ, so give each
    replica its own prefix.
    """

    def __init__(self, prefix: str = "tag", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> Tag:
        return f"{self.prefix}-{next(self._counter)}"

    def __repr__(self) -> str:
        return f"SequentialTagProvider(prefix={self.prefix!r})"
