"""
Chord quality catalogues.

Named chord qualities are configuration data: YAML files in the built-in
library, optionally overridden by files in a project directory.
"""

from chuk_mcp_theory.catalogue.loader import CatalogueLoader

__all__ = ["CatalogueLoader"]
