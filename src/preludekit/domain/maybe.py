"""Present/absent indicator returned by optional field access.

``Just(None)`` is a present value and is distinct from ``NOTHING``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final


@dataclass(frozen=True, slots=True)
class Just[T]:
    """A present value."""

    value: T

    def is_just(self) -> bool:
        return True

    def is_nothing(self) -> bool:
        return False

    def with_default(self, default: Any) -> T:
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Just[U]:
        return Just(f(self.value))

    def to_optional(self) -> T:
        return self.value


class Nothing:
    """The absent value. Use the :data:`NOTHING` singleton."""

    __slots__ = ()
    _instance: Nothing | None = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOTHING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple[type[Nothing], tuple[()]]:
        return (Nothing, ())

    def is_just(self) -> bool:
        return False

    def is_nothing(self) -> bool:
        return True

    def with_default[D](self, default: D) -> D:
        return default

    def map(self, f: Callable[[Any], Any]) -> Nothing:
        return self

    def to_optional(self) -> None:
        return None


NOTHING: Final = Nothing()

type Maybe[T] = Just[T] | Nothing
