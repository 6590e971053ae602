"""
Pydantic models for validating replica snapshots passed to ``from_dict``.
"""

from typing import Any, Hashable, List, Literal

from pydantic import BaseModel


class TimestampEntry(BaseModel):
    element: Any
    timestamp: Any


class TagsEntry(BaseModel):
    element: Any
    tags: List[Hashable]


class LWWElementSetSnapshot(BaseModel):
    type: Literal['LWWElementSet'] = 'LWWElementSet'
    bias: Literal['adds', 'removals'] = 'adds'
    monotonic_local: bool = False
    adds: List[TimestampEntry] = []
    removes: List[TimestampEntry] = []


class ORSetSnapshot(BaseModel):
    type: Literal['ORSet'] = 'ORSet'
    adds: List[TagsEntry] = []
    removes: List[TagsEntry] = []
