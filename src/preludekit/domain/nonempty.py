"""Sequences guaranteed to hold at least one element."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, overload

from preludekit.domain.labels import UNSET
from preludekit.domain.maybe import NOTHING, Just, Maybe
from preludekit.errors import FieldAccessError


@dataclass(frozen=True, slots=True)
class NonEmptyArray[T]:
    """Immutable ``head`` + ``tail``; iterates as ``(head, *tail)``."""

    head: T
    tail: tuple[T, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.tail, tuple):
            object.__setattr__(self, "tail", tuple(self.tail))

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> Maybe[NonEmptyArray[T]]:
        """``Just`` the items as a NonEmptyArray, or ``NOTHING`` when empty."""
        it = iter(items)
        for head in it:
            return Just(cls(head, tuple(it)))
        return NOTHING

    def __iter__(self) -> Iterator[T]:
        yield self.head
        yield from self.tail

    def __len__(self) -> int:
        return 1 + len(self.tail)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[T, ...]: ...

    def __getitem__(self, index: int | slice) -> T | tuple[T, ...]:
        return self.to_tuple()[index]

    @property
    def last(self) -> T:
        return self.tail[-1] if self.tail else self.head

    def to_tuple(self) -> tuple[T, ...]:
        return (self.head, *self.tail)

    def to_list(self) -> list[T]:
        return [self.head, *self.tail]

    def map[U](self, f: Callable[[T], U]) -> NonEmptyArray[U]:
        return NonEmptyArray(f(self.head), tuple(f(x) for x in self.tail))

    def cons(self, item: T) -> NonEmptyArray[T]:
        """Prepend *item*."""
        return NonEmptyArray(item, self.to_tuple())

    def append(self, item: T) -> NonEmptyArray[T]:
        return NonEmptyArray(self.head, (*self.tail, item))


def non_empty_array(
    record: Mapping[str, Any] | None = None,
    /,
    *,
    head: Any = UNSET,
    tail: Iterable[Any] = (),
) -> NonEmptyArray[Any]:
    """Build a NonEmptyArray from a ``{head, tail}`` record.

    ``non_empty_array(head=1, tail=[2, 3])`` and
    ``non_empty_array({"head": 1, "tail": [2, 3]})`` both yield ``1, 2, 3``.
    ``tail`` may be omitted.
    """
    if record is not None:
        unknown = set(record) - {"head", "tail"}
        if unknown:
            raise FieldAccessError(f"Unexpected fields for a non-empty array: {', '.join(sorted(unknown))}")
        if "head" not in record:
            raise FieldAccessError("A non-empty array record needs a 'head' field")
        return NonEmptyArray(record["head"], tuple(record.get("tail", ())))
    if head is UNSET:
        raise FieldAccessError("A non-empty array needs a head", hint="Pass head=... (and optionally tail=[...]).")
    return NonEmptyArray(head, tuple(tail))
