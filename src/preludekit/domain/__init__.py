"""Domain layer — optional records, variants, and non-empty sequences.

This layer depends only on stdlib, pydantic, and preludekit.errors.
The one exception is variant, which reads its two runtime switches
through preludekit.config.settings.get_settings.
It must never import from access or folds, and config never imports it.
"""
