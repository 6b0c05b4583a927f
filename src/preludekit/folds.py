"""Keep-first folds into key/value mappings.

Each element maps to a small mapping; the pieces are merged so that for a
duplicate key the value met first in traversal order is kept. Values are
wrapped in the :class:`First` semigroup while accumulating and unwrapped
at the end. Result keys are in first-seen order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class First[T]:
    """Semigroup that keeps the left operand: ``First(a) + First(b) == First(a)``."""

    value: T

    def __add__(self, other: First[T]) -> First[T]:
        return self


def _merge_first[K: Hashable, V](pieces: Iterable[Mapping[K, V]]) -> dict[K, V]:
    acc: dict[K, First[V]] = {}
    dropped = 0
    for piece in pieces:
        for key, value in piece.items():
            if key in acc:
                acc[key] = acc[key] + First(value)
                dropped += 1
            else:
                acc[key] = First(value)
    if dropped:
        logger.debug("Keep-first fold dropped %d duplicate key(s)", dropped)
    return {key: wrapped.value for key, wrapped in acc.items()}


def fold_map_first[A, K: Hashable, V](f: Callable[[A], Mapping[K, V]], items: Iterable[A]) -> dict[K, V]:
    """Fold *items* through *f* into one mapping; the first value per key wins.

    Example:
        >>> fold_map_first(lambda kv: {kv[0]: kv[1]}, [("k", "a"), ("k", "b")])
        {'k': 'a'}
    """
    return _merge_first(f(item) for item in items)


def fold_map_with_index_first[K: Hashable, V](
    f: Callable[[Any, Any], Mapping[K, V]],
    items: Iterable[Any] | Mapping[Any, Any],
) -> dict[K, V]:
    """Like :func:`fold_map_first`, with ``f(index, item)``.

    The index is the position for plain iterables and the key for
    mappings, which are traversed in their own iteration order.
    """
    if isinstance(items, Mapping):
        indexed: Iterable[tuple[Any, Any]] = items.items()
    else:
        indexed = enumerate(items)
    return _merge_first(f(index, item) for index, item in indexed)


def first_wins[K: Hashable, V](pairs: Iterable[tuple[K, V]]) -> dict[K, V]:
    """Build a mapping from ``(key, value)`` pairs, keeping the first value per key."""
    return _merge_first({key: value} for key, value in pairs)
