"""preludekit — ergonomic helpers over optional records, variants, and non-empty arrays.

Flat imports (preferred)::

    from preludekit import OptionRecord, VariantRow, get_optional, inj, match

Labels are carried by single-field record literals, so no separate label
token is ever spelled out: ``get_optional(lambda v: {"port": v}, server)``,
``inj(error="boom")``, ``non_empty_array(head=1, tail=[2, 3])``.
"""

from preludekit.access import (
    get_optional,
    get_required,
    lookup_optional,
    lookup_required,
    optional_at,
    required_at,
)
from preludekit.config.logging import configure_logging
from preludekit.config.settings import PreludeSettings, get_settings, reset_settings
from preludekit.domain.labels import symbol
from preludekit.domain.maybe import NOTHING, Just, Maybe, Nothing
from preludekit.domain.nonempty import NonEmptyArray, non_empty_array
from preludekit.domain.records import OptionRecord
from preludekit.domain.variant import Variant, VariantRow, inj, match, throw, variant
from preludekit.errors import (
    ConfigError,
    DuplicateHandlerError,
    FieldAccessError,
    MatchError,
    NonExhaustiveMatchError,
    PreludeError,
    RecordDefinitionError,
    SelectorError,
    UnexpectedHandlerError,
    VariantConstructionError,
    VariantError,
)
from preludekit.folds import First, first_wins, fold_map_first, fold_map_with_index_first

__version__ = "0.1.0"

__all__: list[str] = [
    "NOTHING",
    "ConfigError",
    "DuplicateHandlerError",
    "FieldAccessError",
    "First",
    "Just",
    "MatchError",
    "Maybe",
    "NonEmptyArray",
    "NonExhaustiveMatchError",
    "Nothing",
    "OptionRecord",
    "PreludeError",
    "PreludeSettings",
    "RecordDefinitionError",
    "SelectorError",
    "UnexpectedHandlerError",
    "Variant",
    "VariantConstructionError",
    "VariantError",
    "VariantRow",
    "__version__",
    "configure_logging",
    "first_wins",
    "fold_map_first",
    "fold_map_with_index_first",
    "get_optional",
    "get_required",
    "get_settings",
    "inj",
    "lookup_optional",
    "lookup_required",
    "match",
    "non_empty_array",
    "optional_at",
    "required_at",
    "reset_settings",
    "symbol",
    "throw",
    "variant",
]
