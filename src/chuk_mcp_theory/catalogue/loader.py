"""
Catalogue loader - discovers and loads chord quality catalogues.

Catalogues can come from:
1. Built-in library (shipped with package)
2. Project catalogues (user's project directory)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_theory.core.chord_type import ChordType
from chuk_mcp_theory.core.errors import ChordParseError
from chuk_mcp_theory.models.theory import Catalogue, CatalogueEntry

logger = logging.getLogger(__name__)


class CatalogueLoader:
    """
    Discovers and loads chord quality catalogues.

    Catalogues are loaded from YAML files in the library and project directories.
    Project catalogues override library catalogues with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the catalogue loader.

        Args:
            library_path: Path to built-in catalogue library
            project_path: Path to project catalogue directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, Catalogue] = {}

    def list_catalogues(self) -> list[Catalogue]:
        """
        List all available catalogues.

        Returns catalogues from both library and project, with project
        catalogues taking precedence. Loaded catalogues are cached.
        """
        names: dict[str, None] = {}

        for directory in (self.library_path, self.project_path):
            if directory and directory.exists():
                for path in sorted(directory.glob("*.yaml")):
                    names.setdefault(path.stem)

        catalogues = (self.get_catalogue(name) for name in names)
        return [catalogue for catalogue in catalogues if catalogue is not None]

    def get_catalogue(self, name: str) -> Catalogue | None:
        """
        Get a catalogue by name.

        Project catalogues take precedence over library catalogues.

        Args:
            name: Catalogue name

        Returns:
            Catalogue if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        for directory in (self.project_path, self.library_path):
            if directory is None:
                continue
            path = directory / f"{name}.yaml"
            if path.exists():
                catalogue = self._load_catalogue_file(path)
                if catalogue:
                    self._cache[name] = catalogue
                    return catalogue

        return None

    def identify(self, chord_type: ChordType) -> list[tuple[Catalogue, CatalogueEntry]]:
        """
        Find catalogue entries that sound like a chord type.

        Args:
            chord_type: Chord type to look up

        Returns:
            Matching (catalogue, entry) pairs, in catalogue order
        """
        return [
            (catalogue, entry)
            for catalogue in self.list_catalogues()
            for entry in catalogue.entries
            if entry.to_core() == chord_type
        ]

    def _load_catalogue_file(self, path: Path) -> Catalogue | None:
        """Load a catalogue from a YAML file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
            catalogue = self._parse_catalogue(data, path)
        except (OSError, yaml.YAMLError, ValidationError, AttributeError) as e:
            logger.warning("Skipping catalogue %s: %s", path, e)
            return None
        logger.debug("Loaded catalogue %r with %d entries", catalogue.name, len(catalogue.entries))
        return catalogue

    def _parse_catalogue(self, data: dict[str, Any], path: Path) -> Catalogue:
        """Parse a catalogue from YAML data, dropping entries whose symbol does not parse."""
        entries = []
        for entry_data in data.get("entries", []):
            entry = CatalogueEntry.model_validate(entry_data)
            try:
                entry.to_core()
            except ChordParseError as e:
                logger.warning("Skipping entry %r in %s: %s", entry.name, path, e)
                continue
            entries.append(entry)

        return Catalogue(
            name=data.get("name", path.stem),
            description=data.get("description", ""),
            entries=entries,
        )

    def clear_cache(self) -> None:
        """Clear the catalogue cache."""
        self._cache.clear()
