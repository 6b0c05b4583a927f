"""Records whose fields are partitioned into required and optional groups.

Declare a subclass with pydantic field syntax::

    class Server(OptionRecord):
        host: str                  # required
        port: int | None = None    # optional

INVARIANT: the partition is fixed when the subclass is defined. Optional
fields must default to ``None``, which is how absence is stored.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict

from preludekit.domain.maybe import NOTHING, Just, Maybe
from preludekit.errors import FieldAccessError, RecordDefinitionError


class OptionRecord(BaseModel):
    """Frozen record with a required/optional field partition."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    __partition__: ClassVar[tuple[frozenset[str], frozenset[str]]] = (frozenset(), frozenset())

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        required: set[str] = set()
        optional: set[str] = set()
        for name, info in cls.model_fields.items():
            if info.is_required():
                required.add(name)
                continue
            if info.default_factory is not None or info.default is not None:
                shown = "a default factory" if info.default_factory is not None else repr(info.default)
                raise RecordDefinitionError(
                    f"Optional field {cls.__name__}.{name} defaults to {shown}",
                    hint="Optional fields must default to None; absence is stored as None.",
                )
            optional.add(name)
        cls.__partition__ = (frozenset(required), frozenset(optional))

    # --- Partition ---

    @classmethod
    def required_fields(cls) -> frozenset[str]:
        return cls.__partition__[0]

    @classmethod
    def optional_fields(cls) -> frozenset[str]:
        return cls.__partition__[1]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build a validated record from *data*; absent optional keys stay absent."""
        return cls.model_validate(dict(data))

    def _check_label(self, label: str) -> None:
        if label not in type(self).model_fields:
            raise FieldAccessError(
                f"{type(self).__name__} has no field {label!r}",
                hint=f"Known fields: {', '.join(sorted(type(self).model_fields))}",
            )

    # --- Access ---

    def get(self, label: str) -> Maybe[Any]:
        """Return ``Just(value)`` for a present field, ``NOTHING`` for an absent one."""
        self._check_label(label)
        value = getattr(self, label)
        if value is None and label in self.optional_fields():
            return NOTHING
        return Just(value)

    def present_fields(self) -> frozenset[str]:
        required = self.required_fields()
        return frozenset(
            name
            for name in type(self).model_fields
            if name in required or getattr(self, name) is not None
        )

    def to_dict(self) -> dict[str, Any]:
        """Present fields only, in declaration order."""
        present = self.present_fields()
        return {name: getattr(self, name) for name in type(self).model_fields if name in present}

    # --- Updates (each returns a new validated record) ---

    def set(self, label: str, value: Any) -> Self:
        self._check_label(label)
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data[label] = value
        return type(self).model_validate(data)

    def delete(self, label: str) -> Self:
        self._check_label(label)
        if label in self.required_fields():
            raise FieldAccessError(
                f"Cannot delete required field {type(self).__name__}.{label}",
                hint="Only optional fields can be absent.",
            )
        return self.set(label, None)

    def modify(self, label: str, f: Callable[[Any], Any]) -> Self:
        """Apply *f* to a present field; absent fields are left absent."""
        current = self.get(label)
        if current.is_nothing():
            return self
        return self.set(label, f(current.with_default(None)))

