"""Field labels carried by single-field record literals.

A selector names one field without a separate token. Accepted forms::

    symbol("name")                  # the label itself
    symbol({"name": ...})           # one-key mapping
    symbol(name=...)                # one keyword
    symbol(lambda v: {"name": v})   # callable returning a one-key mapping

The same single-field shape carries a payload for variant injection
(``inj(error="boom")``), which is what :func:`single_field` parses.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Final

from preludekit.errors import SelectorError

type Selector = str | Mapping[str, Any] | Callable[[Any], Mapping[str, Any]]

UNSET: Final = object()


class _Probe:
    """Placeholder value passed to callable selectors."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<probe>"


_PROBE: Final = _Probe()


def check_label(label: object) -> str:
    if not isinstance(label, str) or not label:
        raise SelectorError(f"Field labels must be non-empty strings, got {label!r}")
    return label


def _sole_item(record: Mapping[Any, Any], source: str) -> tuple[str, Any]:
    if len(record) != 1:
        raise SelectorError(
            f"{source} must have exactly one field, got {len(record)}",
            hint="Pass a single-field record such as {'name': value} or name=value.",
        )
    ((label, value),) = record.items()
    return check_label(label), value


def single_field(record: Any = UNSET, fields: Mapping[str, Any] | None = None) -> tuple[str, Any]:
    """Return ``(label, value)`` from a single-field record literal.

    Exactly one of *record* (a one-key mapping) or *fields* (keyword
    arguments collected by the caller) must carry the field.
    """
    fields = fields or {}
    if record is UNSET or record is None:
        return _sole_item(fields, "Record literal")
    if fields:
        raise SelectorError("Pass the field either as a mapping or as a keyword, not both")
    if not isinstance(record, Mapping):
        raise SelectorError(f"Expected a single-field mapping, got {type(record).__name__}")
    return _sole_item(record, "Record literal")


def symbol(selector: Any = UNSET, /, **field: Any) -> str:
    """Extract the field label carried by *selector*.

    Raises:
        SelectorError: If the selector does not carry exactly one label.
    """
    if selector is UNSET:
        label, _ = _sole_item(field, "Selector")
        return label
    if field:
        raise SelectorError("Pass the selector either positionally or as a keyword, not both")
    if isinstance(selector, str):
        return check_label(selector)
    if isinstance(selector, Mapping):
        label, _ = _sole_item(selector, "Selector")
        return label
    if callable(selector):
        produced = selector(_PROBE)
        if not isinstance(produced, Mapping):
            raise SelectorError(
                f"Callable selector must return a mapping, got {type(produced).__name__}"
            )
        label, _ = _sole_item(produced, "Selector result")
        return label
    raise SelectorError(f"Unsupported selector type: {type(selector).__name__}")
