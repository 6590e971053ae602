"""Replicated set CRDTs: LWW-Element-Set and OR-Set."""

from .base import ReplicatedSet
from .lww_element_set import Bias, LWWElementSet
from .or_set import ORSet
from .tags import SequentialTagProvider, Tag, TagProvider, uuid_tag_provider

__all__ = [
    'ReplicatedSet',
    'Bias',
    'LWWElementSet',
    'ORSet',
    'SequentialTagProvider',
    'Tag',
    'TagProvider',
    'uuid_tag_provider',
]
