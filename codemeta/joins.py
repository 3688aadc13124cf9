"""Keyed joins between consecutive renders, for animated transitions."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Join(Generic[T]):
    enter: list[T] = field(default_factory=list)
    update: list[T] = field(default_factory=list)
    exit: list[str] = field(default_factory=list)  # keys no longer present
    keys: list[str] = field(default_factory=list)  # keys of the new render, in order


def keyed_join(previous_keys: Iterable[str], items: list[T], key: Callable[[T], str]) -> Join[T]:
    """Split the new items into entering and updating, and list exiting keys."""
    previous = list(previous_keys)
    seen = set(previous)
    join: Join[T] = Join()
    for item in items:
        k = key(item)
        join.keys.append(k)
        if k in seen:
            join.update.append(item)
        else:
            join.enter.append(item)
    current = set(join.keys)
    join.exit = [k for k in previous if k not in current]
    return join
