"""Configuration layer — settings discovery and logging setup.

This layer may import from errors only.
It must never import from domain, access, or folds.
"""
