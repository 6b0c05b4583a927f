"""Open tagged unions: construction, widening, and exhaustive matching.

A :class:`Variant` carries exactly one label and one payload. A
:class:`VariantRow` declares a label set with a payload type per label;
variants built through a row are checked against it and remember it, so
:func:`match` can insist every label of the row is handled::

    Outcome = VariantRow("Outcome", ok=int, error=str)
    result = Outcome.inj(error="boom")
    match({"ok": str, "error": len}, result)   # -> 4

Variants built with the module-level :func:`inj` are open: they belong to
any row containing their label.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, NoReturn

from pydantic import ConfigDict, TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from preludekit.config.settings import get_settings
from preludekit.domain.labels import UNSET, check_label, single_field
from preludekit.domain.maybe import NOTHING, Just, Maybe
from preludekit.errors import (
    DuplicateHandlerError,
    MatchError,
    NonExhaustiveMatchError,
    UnexpectedHandlerError,
    VariantConstructionError,
    VariantError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Variant:
    """One label and its payload. Equality ignores the row."""

    label: str
    value: Any
    row: VariantRow | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.row is not None:
            self.row._require(self.label)

    def project(self, label: str) -> Maybe[Any]:
        """``Just(payload)`` if *label* is the active label, else ``NOTHING``."""
        return Just(self.value) if self.label == label else NOTHING

    def match(self, handlers: Mapping[str, Callable[[Any], Any]] | None = None, /, **more: Any) -> Any:
        """Method form of :func:`match`."""
        return match(handlers or {}, self, **more)


def _adapter_for(tp: Any) -> TypeAdapter[Any]:
    try:
        return TypeAdapter(tp)
    except PydanticSchemaGenerationError:
        # Plain classes without a pydantic schema get an isinstance check.
        return TypeAdapter(tp, config=ConfigDict(arbitrary_types_allowed=True))


class VariantRow:
    """A declared set of labels, each mapped to a payload type.

    ``typing.Any`` accepts every payload. Payloads are checked with a
    strict pydantic ``TypeAdapter`` while the ``validate_payloads``
    setting is on.
    """

    __slots__ = ("_adapters", "_types", "name")

    def __init__(self, name: str | None = None, /, **alternatives: Any) -> None:
        if not alternatives:
            raise VariantConstructionError("A variant row needs at least one label")
        self.name = name
        self._types: dict[str, Any] = {check_label(label): tp for label, tp in alternatives.items()}
        self._adapters: dict[str, TypeAdapter[Any]] = {
            label: _adapter_for(tp) for label, tp in self._types.items()
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{label}={getattr(tp, '__name__', tp)!s}" for label, tp in self._types.items())
        if self.name:
            return f"VariantRow({self.name!r}, {fields})"
        return f"VariantRow({fields})"

    def __contains__(self, label: object) -> bool:
        return label in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    @property
    def labels(self) -> frozenset[str]:
        return frozenset(self._types)

    def payload_type(self, label: str) -> Any:
        self._require(label)
        return self._types[label]

    def describe(self) -> str:
        return self.name or repr(self)

    def _require(self, label: str) -> None:
        if label not in self._types:
            raise VariantConstructionError(
                f"Label {label!r} is not part of {self.describe()}",
                hint=f"Known labels: {', '.join(self._types)}",
            )

    def _checked(self, label: str, value: Any) -> Any:
        self._require(label)
        if not get_settings().validate_payloads:
            return value
        try:
            return self._adapters[label].validate_python(value, strict=True)
        except ValidationError as exc:
            msg = f"Payload for {self.describe()}.{label} rejected: {exc.error_count()} error(s)"
            raise VariantConstructionError(msg) from exc

    def inj(self, record: Any = UNSET, /, **fields: Any) -> Variant:
        """Build a variant of this row from a single-field record literal."""
        label, value = single_field(record, fields)
        return Variant(label, self._checked(label, value), self)

    def expand(self, value: Variant) -> Variant:
        """Re-home *value* into this row. Its label must be a member."""
        if value.row is self:
            return value
        return Variant(value.label, self._checked(value.label, value.value), self)

    def contract(self, value: Variant) -> Maybe[Variant]:
        """Narrow *value* into this row, or ``NOTHING`` when its label is not a member."""
        if value.label not in self._types:
            return NOTHING
        return Just(self.expand(value))

    def union(self, other: VariantRow) -> VariantRow:
        """A row holding the labels of both rows."""
        merged = dict(self._types)
        for label, tp in other._types.items():
            if label in merged and merged[label] != tp:
                raise VariantConstructionError(
                    f"Label {label!r} has conflicting payload types in "
                    f"{self.describe()} and {other.describe()}"
                )
            merged[label] = tp
        name = " | ".join(n for n in (self.name, other.name) if n) or None
        return VariantRow(name, **merged)


def inj(record: Any = UNSET, /, **fields: Any) -> Variant:
    """Build an open variant from a single-field record literal.

    ``inj(error="boom")`` and ``inj({"error": "boom"})`` both carry the
    label ``"error"`` and the payload ``"boom"``.
    """
    label, value = single_field(record, fields)
    return Variant(label, value)


variant = inj


def match(
    handlers: Mapping[str, Callable[[Any], Any]],
    value: Variant,
    /,
    **more_handlers: Callable[[Any], Any],
) -> Any:
    """Dispatch *value* to the handler keyed by its active label.

    Handlers may come from the *handlers* mapping, keyword arguments, or
    both. A rowed variant needs a handler for every label of its row,
    checked before dispatch. Handlers for labels outside the row are
    accepted unless the ``allow_extra_handlers`` setting is off.

    Raises:
        DuplicateHandlerError: A label is handled both ways.
        NonExhaustiveMatchError: A label of the row (or the active label
            of an open variant) has no handler.
        UnexpectedHandlerError: Extra handlers while they are disallowed.
        MatchError: *value* is not a Variant or a handler is not callable.
    """
    if not isinstance(value, Variant):
        raise MatchError(f"Can only match a Variant, got {type(value).__name__}")

    table: dict[str, Callable[[Any], Any]] = dict(handlers)
    duplicated = table.keys() & more_handlers.keys()
    if duplicated:
        raise DuplicateHandlerError(f"Labels handled twice: {', '.join(sorted(duplicated))}")
    table.update(more_handlers)

    for label, handler in table.items():
        if not callable(handler):
            raise MatchError(f"Handler for {label!r} is not callable: {handler!r}")

    row = value.row
    if row is None:
        if value.label not in table:
            raise NonExhaustiveMatchError(
                f"No handler for label {value.label!r}",
                hint=f"Handled labels: {', '.join(sorted(table)) or '(none)'}",
            )
    else:
        missing = row.labels - table.keys()
        if missing:
            raise NonExhaustiveMatchError(
                f"Match on {row.describe()} is not exhaustive; unhandled: {', '.join(sorted(missing))}"
            )
        extra = table.keys() - row.labels
        if extra:
            if not get_settings().allow_extra_handlers:
                raise UnexpectedHandlerError(
                    f"Handlers for labels outside {row.describe()}: {', '.join(sorted(extra))}"
                )
            logger.debug("Ignoring handlers outside %s: %s", row.describe(), sorted(extra))

    return table[value.label](value.value)


def throw(record: Any = UNSET, /, **fields: Any) -> NoReturn:
    """Raise a labeled failure.

    The single field is injected into a one-label row and raised as
    :class:`~preludekit.errors.VariantError`; recover the payload with
    ``except VariantError as exc: match(..., exc.variant)``.
    """
    label, value = single_field(record, fields)
    row = VariantRow(None, **{label: Any})
    logger.debug("Raising variant %s", label)
    raise VariantError(row.inj({label: value}))
