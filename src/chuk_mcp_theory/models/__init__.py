"""
Pydantic models for the theory system.

This module provides:
- IntervalModel, KeyModel, PitchModel: Interchange forms of the pitch values
- ChordExtensionModel, ChordTypeModel, ChordModel: Interchange forms of chords
- Catalogue, CatalogueEntry: Named chord qualities loaded from YAML
"""

from chuk_mcp_theory.models.theory import (
    Catalogue,
    CatalogueEntry,
    ChordExtensionModel,
    ChordModel,
    ChordTypeModel,
    IntervalModel,
    KeyModel,
    PitchModel,
)

__all__ = [
    "Catalogue",
    "CatalogueEntry",
    "ChordExtensionModel",
    "ChordModel",
    "ChordTypeModel",
    "IntervalModel",
    "KeyModel",
    "PitchModel",
]
