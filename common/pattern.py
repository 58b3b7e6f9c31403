"""Boolean tag predicates and the matching engine used by every search."""

from collections import abc
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from common.types import Group, Tag


@dataclass(frozen=True)
class And:
    """Matches when every sub-predicate matches. ``And(())`` is true."""
    preds: Tuple["TagPredicate", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "preds", tuple(self.preds))

    @classmethod
    def of(cls, *items) -> "And":
        return cls(tuple(to_predicate(item) for item in _flatten(items)))


@dataclass(frozen=True)
class Or:
    """Matches when any sub-predicate matches. ``Or(())`` is false."""
    preds: Tuple["TagPredicate", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "preds", tuple(self.preds))

    @classmethod
    def of(cls, *items) -> "Or":
        return cls(tuple(to_predicate(item) for item in _flatten(items)))


@dataclass(frozen=True)
class Not:
    """Inverts a predicate."""
    pred: "TagPredicate"

    @classmethod
    def of(cls, item) -> "Not":
        return cls(to_predicate(item))


@dataclass(frozen=True)
class HasGroup:
    """Matches when any tag belongs to the group."""
    group: Group


@dataclass(frozen=True)
class HasName:
    """Matches when any tag has the name, whatever its group."""
    name: str


@dataclass(frozen=True)
class HasTag:
    """Matches when the exact tag is present."""
    tag: Tag


TagPredicate = Union[And, Or, Not, HasGroup, HasName, HasTag]

TagPattern = Union[Tag, Sequence[Tag], TagPredicate]

_PREDICATE_TYPES = (And, Or, Not, HasGroup, HasName, HasTag)


def _flatten(items) -> List:
    """Allow both ``And.of(a, b)`` and ``And.of([a, b])``."""
    if len(items) == 1:
        only = items[0]
        if not isinstance(only, (str, Tag, Group) + _PREDICATE_TYPES) and isinstance(only, abc.Iterable):
            return list(only)
    return list(items)


def to_predicate(item) -> TagPredicate:
    """
    Convert a tag, group or predicate into a predicate node.

    Raises:
        TypeError: If item cannot be converted
    """
    if isinstance(item, _PREDICATE_TYPES):
        return item
    if isinstance(item, Tag):
        return HasTag(item)
    if isinstance(item, Group):
        return HasGroup(item)
    raise TypeError(f"Cannot build a tag predicate from {type(item).__name__}")


def validate_pattern(pattern: TagPattern) -> None:
    """
    Check every node of a pattern without evaluating it.

    Raises:
        TypeError: If any node, at any depth, is not a supported pattern type
    """
    if isinstance(pattern, Tag):
        return
    if isinstance(pattern, (list, tuple)):
        for wanted in pattern:
            if not isinstance(wanted, Tag):
                raise TypeError(f"Tag list patterns may only hold tags, got {type(wanted).__name__}")
        return

    if isinstance(pattern, (And, Or)):
        for pred in pattern.preds:
            validate_pattern(pred)
        return
    if isinstance(pattern, Not):
        validate_pattern(pattern.pred)
        return
    if isinstance(pattern, HasGroup):
        if not isinstance(pattern.group, Group):
            raise TypeError(f"HasGroup needs a Group, got {type(pattern.group).__name__}")
        return
    if isinstance(pattern, HasName):
        if not isinstance(pattern.name, str):
            raise TypeError(f"HasName needs a str, got {type(pattern.name).__name__}")
        return
    if isinstance(pattern, HasTag):
        if not isinstance(pattern.tag, Tag):
            raise TypeError(f"HasTag needs a Tag, got {type(pattern.tag).__name__}")
        return

    raise TypeError(f"Unsupported tag pattern: {type(pattern).__name__}")


def match_tags(pattern: TagPattern, tags: Iterable[Tag]) -> bool:
    """
    Match a pattern against a file's tags.

    ``tags`` may be a single-pass iterator; nodes that need several passes
    buffer it first.

    Args:
        pattern: A Tag, a list/tuple of tags (all must be present) or a
            predicate tree
        tags: Candidate tags of one file

    Returns:
        True if the pattern matches

    Raises:
        TypeError: If pattern is not a supported pattern type
    """
    if isinstance(pattern, Tag):
        return any(tag == pattern for tag in tags)
    if isinstance(pattern, (list, tuple)):
        candidates = set(tags)
        for wanted in pattern:
            if not isinstance(wanted, Tag):
                raise TypeError(f"Tag list patterns may only hold tags, got {type(wanted).__name__}")
        return all(wanted in candidates for wanted in pattern)

    if isinstance(pattern, And):
        candidates = list(tags)
        return all(match_tags(pred, candidates) for pred in pattern.preds)
    if isinstance(pattern, Or):
        candidates = list(tags)
        return any(match_tags(pred, candidates) for pred in pattern.preds)
    if isinstance(pattern, Not):
        return not match_tags(pattern.pred, tags)
    if isinstance(pattern, HasGroup):
        return any(tag.group == pattern.group for tag in tags)
    if isinstance(pattern, HasName):
        return any(tag.name == pattern.name for tag in tags)
    if isinstance(pattern, HasTag):
        return match_tags(pattern.tag, tags)

    raise TypeError(f"Unsupported tag pattern: {type(pattern).__name__}")
