"""Optional and required field access over any supported container.

``get_optional(selector, container)`` answers with a present/absent
:data:`~preludekit.domain.maybe.Maybe`; ``get_required(selector, container)``
answers with the raw value and only works where the container guarantees
the field. Both dispatch on the container type through
:func:`functools.singledispatch` tables, so other container types can
join by registering an implementation::

    @lookup_optional.register
    def _(container: MyBag, label: str) -> Maybe[Any]: ...

Built-in instances:

================  ==========================  ===========================
container         get_optional                get_required
================  ==========================  ===========================
OptionRecord      Just / NOTHING by presence  required fields only
Variant           Just if label is active     not supported
Mapping           Just / NOTHING by key       key must exist
pydantic model    Just(attribute)             declared field value
================  ==========================  ===========================
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from preludekit.domain.labels import Selector, symbol
from preludekit.domain.maybe import NOTHING, Just, Maybe
from preludekit.domain.records import OptionRecord
from preludekit.domain.variant import Variant
from preludekit.errors import FieldAccessError


def _unsupported(container: Any, kind: str) -> FieldAccessError:
    return FieldAccessError(
        f"{type(container).__name__} does not support {kind} field access",
        hint=f"Register an implementation with lookup_{kind}.register.",
    )


# --- Optional access ---------------------------------------------------------


@functools.singledispatch
def lookup_optional(container: Any, label: str) -> Maybe[Any]:
    """Optional lookup of *label* in *container*; dispatches on the container type."""
    raise _unsupported(container, "optional")


@lookup_optional.register
def _(container: OptionRecord, label: str) -> Maybe[Any]:
    return container.get(label)


@lookup_optional.register
def _(container: Variant, label: str) -> Maybe[Any]:
    if container.row is not None and label not in container.row:
        raise FieldAccessError(
            f"Label {label!r} is not part of {container.row.describe()}",
            hint=f"Known labels: {', '.join(container.row)}",
        )
    return container.project(label)


@lookup_optional.register
def _(container: Mapping, label: str) -> Maybe[Any]:
    if label in container:
        return Just(container[label])
    return NOTHING


@lookup_optional.register
def _(container: BaseModel, label: str) -> Maybe[Any]:
    return Just(_model_field(container, label))


# --- Required access ---------------------------------------------------------


@functools.singledispatch
def lookup_required(container: Any, label: str) -> Any:
    """Required lookup of *label* in *container*; dispatches on the container type."""
    raise _unsupported(container, "required")


@lookup_required.register
def _(container: OptionRecord, label: str) -> Any:
    if label in container.optional_fields():
        raise FieldAccessError(
            f"{type(container).__name__}.{label} is optional",
            hint="Use get_optional for fields that may be absent.",
        )
    return container.get(label).to_optional()


@lookup_required.register
def _(container: Variant, label: str) -> Any:
    raise FieldAccessError(
        f"Variant payloads are never guaranteed present (asked for {label!r})",
        hint="Use get_optional or match on the variant.",
    )


@lookup_required.register
def _(container: Mapping, label: str) -> Any:
    try:
        return container[label]
    except KeyError:
        raise FieldAccessError(f"Mapping has no field {label!r}") from None


@lookup_required.register
def _(container: BaseModel, label: str) -> Any:
    return _model_field(container, label)


def _model_field(container: BaseModel, label: str) -> Any:
    if label not in type(container).model_fields:
        raise FieldAccessError(f"{type(container).__name__} has no field {label!r}")
    return getattr(container, label)


# --- Public surface ----------------------------------------------------------


def get_optional(selector: Selector, container: Any) -> Maybe[Any]:
    """The selected field of *container*, wrapped as present or absent.

    Example:
        >>> get_optional(lambda v: {"port": v}, {"host": "localhost"})
        NOTHING
    """
    return lookup_optional(container, symbol(selector))


def get_required(selector: Selector, container: Any) -> Any:
    """The selected field of *container*, which must guarantee its presence.

    Example:
        >>> get_required("host", {"host": "localhost"})
        'localhost'
    """
    return lookup_required(container, symbol(selector))


def optional_at(container: Any, selector: Selector) -> Maybe[Any]:
    """Flipped :func:`get_optional`."""
    return get_optional(selector, container)


def required_at(container: Any, selector: Selector) -> Any:
    """Flipped :func:`get_required`."""
    return get_required(selector, container)
