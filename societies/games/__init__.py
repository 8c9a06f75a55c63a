"""
Games - Game-specific rules and reference data.

Secret Societies is currently the only game.
"""

from .secret_societies import create_secret_societies_catalog

__all__ = ["create_secret_societies_catalog"]
