"""
Tests for the chord quality catalogue loader.
"""

from pathlib import Path

from chuk_mcp_theory.catalogue import CatalogueLoader
from chuk_mcp_theory.core import ChordType


def write_catalogue(directory: Path, filename: str, content: str) -> Path:
    path = directory / filename
    path.write_text(content, encoding="utf-8")
    return path


class TestLibrary:
    """Tests for the built-in library."""

    def test_list_catalogues(self) -> None:
        """The library ships common and jazz catalogues."""
        loader = CatalogueLoader()
        catalogues = {c.name: c for c in loader.list_catalogues()}
        assert set(catalogues) == {"common", "jazz"}
        assert len(catalogues["common"].entries) == 17
        assert len(catalogues["jazz"].entries) == 12

    def test_every_entry_parses(self) -> None:
        """Every shipped symbol and alias is a valid chord type."""
        loader = CatalogueLoader()
        for catalogue in loader.list_catalogues():
            for entry in catalogue.entries:
                chord_type = entry.to_core()
                for alias in entry.aliases:
                    assert ChordType.parse(alias) == chord_type

    def test_get_catalogue(self) -> None:
        """Catalogues are found by name."""
        loader = CatalogueLoader()
        jazz = loader.get_catalogue("jazz")
        assert jazz is not None
        assert any(e.name == "dominant ninth" for e in jazz.entries)

    def test_missing_catalogue(self) -> None:
        """Unknown names return None."""
        assert CatalogueLoader().get_catalogue("nonexistent") is None

    def test_identify(self) -> None:
        """identify matches by sound."""
        loader = CatalogueLoader()
        matches = loader.identify(ChordType.parse("m7"))
        assert [(c.name, e.name) for c, e in matches] == [("common", "minor seventh")]

    def test_identify_half_diminished(self) -> None:
        """Different spellings of the same quality match."""
        loader = CatalogueLoader()
        matches = loader.identify(ChordType.parse("m7(b5)"))
        assert [e.name for _, e in matches] == ["half diminished"]

    def test_identify_unknown(self) -> None:
        """Uncatalogued types have no matches."""
        assert CatalogueLoader().identify(ChordType.parse("m(add11)")) == []


class TestProjectCatalogues:
    """Tests for project catalogues."""

    def test_project_overrides_library(self, temp_dir: Path) -> None:
        """A project catalogue replaces the library one of the same name."""
        write_catalogue(
            temp_dir,
            "common.yaml",
            "name: common\nentries:\n  - name: major\n    symbol: \"\"\n",
        )
        loader = CatalogueLoader(project_path=temp_dir)
        catalogues = {c.name: c for c in loader.list_catalogues()}
        assert len(catalogues["common"].entries) == 1
        assert len(catalogues["jazz"].entries) == 12

        common = loader.get_catalogue("common")
        assert common is not None
        assert len(common.entries) == 1

    def test_new_project_catalogue(self, temp_dir: Path) -> None:
        """Project catalogues are listed after the library."""
        write_catalogue(
            temp_dir,
            "mine.yaml",
            "name: mine\ndescription: Custom\nentries:\n  - name: mu\n    symbol: \"(add9)\"\n",
        )
        loader = CatalogueLoader(project_path=temp_dir)
        assert [c.name for c in loader.list_catalogues()] == ["common", "jazz", "mine"]
        matches = loader.identify(ChordType.parse("(add9)"))
        assert ("mine", "mu") in [(c.name, e.name) for c, e in matches]

    def test_name_defaults_to_filename(self, temp_dir: Path) -> None:
        """Catalogues without a name use the file stem."""
        write_catalogue(temp_dir, "extra.yaml", "entries:\n  - name: minor\n    symbol: m\n")
        catalogue = CatalogueLoader(project_path=temp_dir).get_catalogue("extra")
        assert catalogue is not None
        assert catalogue.name == "extra"

    def test_bad_entry_skipped(self, temp_dir: Path) -> None:
        """Entries whose symbol does not parse are dropped."""
        write_catalogue(
            temp_dir,
            "broken.yaml",
            "name: broken\nentries:\n"
            "  - name: fine\n    symbol: m7\n"
            "  - name: nonsense\n    symbol: xyz\n",
        )
        catalogue = CatalogueLoader(project_path=temp_dir).get_catalogue("broken")
        assert catalogue is not None
        assert [e.name for e in catalogue.entries] == ["fine"]

    def test_invalid_yaml_skipped(self, temp_dir: Path) -> None:
        """Unreadable files are skipped."""
        write_catalogue(temp_dir, "bad.yaml", "name: [unclosed\n")
        write_catalogue(temp_dir, "list.yaml", "- just\n- a list\n")
        loader = CatalogueLoader(project_path=temp_dir)
        assert loader.get_catalogue("bad") is None
        assert loader.get_catalogue("list") is None
        assert [c.name for c in loader.list_catalogues()] == ["common", "jazz"]

    def test_invalid_entry_schema_skipped(self, temp_dir: Path) -> None:
        """Entries missing required fields invalidate the file."""
        write_catalogue(temp_dir, "schema.yaml", "name: schema\nentries:\n  - symbol: m\n")
        assert CatalogueLoader(project_path=temp_dir).get_catalogue("schema") is None

    def test_clear_cache(self, temp_dir: Path) -> None:
        """Cached catalogues are reloaded after clear_cache."""
        path = write_catalogue(temp_dir, "live.yaml", "name: live\nentries: []\n")
        loader = CatalogueLoader(project_path=temp_dir)
        first = loader.get_catalogue("live")
        assert first is not None
        assert first.entries == []

        path.write_text("name: live\nentries:\n  - name: minor\n    symbol: m\n", encoding="utf-8")
        assert loader.get_catalogue("live") is first

        loader.clear_cache()
        reloaded = loader.get_catalogue("live")
        assert reloaded is not None
        assert len(reloaded.entries) == 1

    def test_identify_uses_cache(self, temp_dir: Path) -> None:
        """Identification reads catalogues once until the cache is cleared."""
        path = write_catalogue(temp_dir, "live.yaml", "name: live\nentries: []\n")
        loader = CatalogueLoader(project_path=temp_dir)
        minor = ChordType.parse("m")
        assert ("live", "minor") not in [(c.name, e.name) for c, e in loader.identify(minor)]

        path.write_text("name: live\nentries:\n  - name: minor\n    symbol: m\n", encoding="utf-8")
        assert ("live", "minor") not in [(c.name, e.name) for c, e in loader.identify(minor)]
        assert loader.list_catalogues()[-1] is loader.get_catalogue("live")

        loader.clear_cache()
        assert ("live", "minor") in [(c.name, e.name) for c, e in loader.identify(minor)]
