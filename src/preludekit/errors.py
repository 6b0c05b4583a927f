"""Exception hierarchy for preludekit.

Checks that a row-polymorphic type system would make at compile time
(field labels, union membership, exhaustive matches) are made at call
time here. Every failure maps to a subclass of :class:`PreludeError`,
which also derives from the closest builtin so callers may catch either.

Hierarchy
---------
PreludeError
├── SelectorError            (ValueError)
├── FieldAccessError         (LookupError)
├── RecordDefinitionError    (TypeError)
├── VariantConstructionError (ValueError)
├── MatchError               (TypeError)
│   ├── NonExhaustiveMatchError
│   ├── UnexpectedHandlerError
│   └── DuplicateHandlerError
├── ConfigError              (ValueError)
└── VariantError             (raised by ``throw``)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from preludekit.domain.variant import Variant


class PreludeError(Exception):
    """Base exception for all preludekit errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance for the caller."""


# --- Labels and fields -----------------------------------------------------


class SelectorError(PreludeError, ValueError):
    """Raised when a selector does not carry exactly one field label."""


class FieldAccessError(PreludeError, LookupError):
    """Raised when a container cannot serve the requested field."""


class RecordDefinitionError(PreludeError, TypeError):
    """Raised when an OptionRecord subclass declares an invalid field."""


# --- Variants --------------------------------------------------------------


class VariantConstructionError(PreludeError, ValueError):
    """Raised when a label/payload pair is not a member of the target row."""


class MatchError(PreludeError, TypeError):
    """Raised when a handler table cannot be used to match a variant."""


class NonExhaustiveMatchError(MatchError):
    """Raised when a label of the variant's row has no handler."""


class UnexpectedHandlerError(MatchError):
    """Raised for handlers outside the row when extra handlers are disallowed."""


class DuplicateHandlerError(MatchError):
    """Raised when the same label is handled more than once."""


class ConfigError(PreludeError, ValueError):
    """Raised when a ``[tool.preludekit]`` table cannot be read."""


class VariantError(PreludeError):
    """A labeled failure raised by :func:`preludekit.throw`.

    The library never catches this; callers recover the payload through
    :attr:`variant` and typically :func:`preludekit.match` on it.
    """

    def __init__(self, variant: Variant) -> None:
        super().__init__(f"{variant.label}: {variant.value!r}")
        self.variant: Variant = variant
