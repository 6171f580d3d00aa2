"""Tests for the YAML content loader."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from tactics_core.content.loader import DEFAULT_CONTENT_PATH, ContentLoader, load_default_content
from tactics_core.content.repository import ContentRepository
from tactics_core.core.exceptions import ContentLoadError, DuplicateDefinitionError
from tactics_core.models import AbilityCategory, EquipmentType, StatType


ABILITIES_YAML = """
abilities:
  slash:
    name: Slash
    category: Action
    experience_price: 10
  guard:
    name: Guard
    category: Reaction
    experience_price: 20
"""

EQUIPMENT_YAML = """
equipment:
  club:
    name: Club
    type: OneHandedWeapon
    modifiers: {physicalPower: 3, speed: -1}
    min_range: 1
    max_range: 1
"""

CLASSES_YAML = """
classes:
  brawler:
    name: Brawler
    learnable_abilities: [slash, guard]
    base_stat_grants: {health: 5}
    stat_multipliers: {physicalPower: 1.5}
  champion:
    name: Champion
    learnable_abilities: [slash]
    requirements: {brawler: 50}
"""


def write(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.write_text(dedent(content), encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """A content directory with all three files."""
    write(tmp_path, "abilities.yaml", ABILITIES_YAML)
    write(tmp_path, "equipment.yaml", EQUIPMENT_YAML)
    write(tmp_path, "classes.yaml", CLASSES_YAML)
    return tmp_path


class TestLoadDirectory:
    """Tests for loading a whole content directory."""

    def test_loads_everything(self, content_dir: Path) -> None:
        """All three files are loaded and ids come from the keys."""
        repository = ContentLoader().load_directory(content_dir)

        assert repository.summary() == {"abilities": 2, "classes": 2, "equipment": 1}
        guard = repository.abilities.get_by_id("guard")
        assert guard is not None
        assert guard.category is AbilityCategory.REACTION

        club = repository.equipment.get_by_id("club")
        assert club is not None
        assert club.type is EquipmentType.ONE_HANDED_WEAPON
        assert club.modifiers.get(StatType.SPEED) == -1

    def test_classes_resolve_abilities(self, content_dir: Path) -> None:
        """A class's learnable ids become the registered ability objects."""
        repository = ContentLoader().load_directory(content_dir)

        brawler = repository.classes.get_by_id("brawler")
        assert brawler is not None
        assert [a.id for a in brawler.learnable_abilities] == ["slash", "guard"]
        assert brawler.learnable_abilities[0] is repository.abilities.get_by_id("slash")
        assert brawler.base_stat_grants.get(StatType.MAX_HEALTH) == 5
        assert brawler.stat_multipliers.get(StatType.PHYSICAL_POWER) == 1.5

    def test_requirements(self, content_dir: Path) -> None:
        """Class requirements are loaded."""
        repository = ContentLoader().load_directory(content_dir)

        champion = repository.classes.get_by_id("champion")
        assert champion is not None
        assert champion.requirements == {"brawler": 50}

    def test_fills_given_repository(self, content_dir: Path) -> None:
        """A supplied repository is filled in place."""
        repository = ContentRepository()
        assert ContentLoader(repository).load_directory(str(content_dir)) is repository
        assert len(repository.abilities) == 2

    def test_missing_files_skipped(self, tmp_path: Path) -> None:
        """Absent files are not errors."""
        write(tmp_path, "abilities.yaml", ABILITIES_YAML)

        repository = ContentLoader().load_directory(tmp_path)

        assert repository.summary() == {"abilities": 2, "classes": 0, "equipment": 0}

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory raises ContentLoadError."""
        with pytest.raises(ContentLoadError):
            ContentLoader().load_directory(tmp_path / "nope")

    def test_loading_twice_raises(self, content_dir: Path) -> None:
        """Loading the same files into one repository hits duplicate ids."""
        loader = ContentLoader()
        loader.load_directory(content_dir)

        with pytest.raises(DuplicateDefinitionError):
            loader.load_directory(content_dir)


class TestReferences:
    """Tests for unknown ability and class references."""

    def test_unknown_ability_skipped(self, tmp_path: Path) -> None:
        """Lenient loading drops unknown learnable ids."""
        write(tmp_path, "abilities.yaml", ABILITIES_YAML)
        write(
            tmp_path,
            "classes.yaml",
            """
            classes:
              brawler:
                name: Brawler
                learnable_abilities: [slash, meteor]
            """,
        )

        repository = ContentLoader(strict_references=False).load_directory(tmp_path)

        brawler = repository.classes.get_by_id("brawler")
        assert brawler is not None
        assert [a.id for a in brawler.learnable_abilities] == ["slash"]

    def test_unknown_ability_strict(self, tmp_path: Path) -> None:
        """Strict loading rejects unknown learnable ids."""
        write(tmp_path, "abilities.yaml", ABILITIES_YAML)
        write(
            tmp_path,
            "classes.yaml",
            """
            classes:
              brawler:
                name: Brawler
                learnable_abilities: [meteor]
            """,
        )

        with pytest.raises(ContentLoadError) as exc_info:
            ContentLoader(strict_references=True).load_directory(tmp_path)
        assert exc_info.value.details["entry_id"] == "brawler"

    def test_strict_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Strictness defaults to the content settings."""
        monkeypatch.setenv("TACTICS_CONTENT_STRICT_REFERENCES", "true")
        write(
            tmp_path,
            "classes.yaml",
            """
            classes:
              brawler:
                name: Brawler
                learnable_abilities: [meteor]
            """,
        )

        with pytest.raises(ContentLoadError):
            ContentLoader().load_directory(tmp_path)

    def test_unknown_required_class(self, tmp_path: Path) -> None:
        """Unknown required classes are tolerated unless strict."""
        classes = """
            classes:
              champion:
                name: Champion
                requirements: {ghost: 10}
            """
        write(tmp_path, "classes.yaml", classes)

        repository = ContentLoader(strict_references=False).load_directory(tmp_path)
        assert "champion" in repository.classes

        with pytest.raises(ContentLoadError):
            ContentLoader(strict_references=True).load_directory(tmp_path)


class TestMalformedContent:
    """Tests for files that cannot be loaded."""

    def test_invalid_starter_config(self, tmp_path: Path) -> None:
        """Unknown starter config keys are rejected with the entry id."""
        path = write(
            tmp_path,
            "classes.yaml",
            """
            classes:
              brawler:
                name: Brawler
                starter_config: {off_hand_id: club}
            """,
        )

        with pytest.raises(ContentLoadError) as exc_info:
            ContentLoader().load_classes(path)
        assert exc_info.value.details["entry_id"] == "brawler"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Unparseable YAML raises ContentLoadError."""
        path = write(tmp_path, "abilities.yaml", "abilities: [unclosed\n")

        with pytest.raises(ContentLoadError) as exc_info:
            ContentLoader().load_abilities(path)
        assert exc_info.value.details["source_file"] == str(path)

    def test_top_level_not_mapping(self, tmp_path: Path) -> None:
        """The file must hold a mapping."""
        path = write(tmp_path, "abilities.yaml", "- just\n- a list\n")

        with pytest.raises(ContentLoadError):
            ContentLoader().load_abilities(path)

    def test_section_not_mapping(self, tmp_path: Path) -> None:
        """The section must map ids to definitions."""
        path = write(tmp_path, "abilities.yaml", "abilities: [slash, guard]\n")

        with pytest.raises(ContentLoadError):
            ContentLoader().load_abilities(path)

    def test_invalid_definition(self, tmp_path: Path) -> None:
        """Model validation failures name the entry."""
        path = write(
            tmp_path,
            "abilities.yaml",
            """
            abilities:
              slash:
                name: Slash
                category: Ultimate
            """,
        )

        with pytest.raises(ContentLoadError) as exc_info:
            ContentLoader().load_abilities(path)
        assert exc_info.value.details["entry_id"] == "slash"

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file loads nothing."""
        path = write(tmp_path, "equipment.yaml", "")
        assert ContentLoader().load_equipment(path) == 0


class TestDefaultContent:
    """Tests for the bundled sample content."""

    def test_bundled_path_exists(self) -> None:
        """The sample content ships with the package."""
        assert (DEFAULT_CONTENT_PATH / "classes.yaml").is_file()

    def test_load_default_content(self) -> None:
        """The bundled content loads with every reference resolved."""
        repository = load_default_content()

        assert repository.summary() == {"abilities": 9, "classes": 3, "equipment": 11}

        squire = repository.classes.get_by_id("squire")
        assert squire is not None
        assert len(squire.learnable_abilities) == 5

        knight = repository.classes.get_by_id("knight")
        assert knight is not None
        assert knight.requirements == {"squire": 100}
        assert knight.starter_config is None

    def test_starter_config_loaded(self) -> None:
        """Starter configs load with their stats and content ids."""
        squire = load_default_content().classes.get_by_id("squire")

        assert squire is not None
        assert squire.starter_config is not None
        assert squire.starter_config.base_stats.health == 30
        assert squire.starter_config.right_hand_id == "iron-sword"
        assert squire.starter_config.learned_ability_ids == ("power-strike",)

    def test_bundled_content_is_strictly_valid(self) -> None:
        """Every bundled reference resolves under strict loading."""
        repository = ContentLoader(strict_references=True).load_directory(DEFAULT_CONTENT_PATH)
        assert len(repository.classes) == 3

    def test_content_path_setting(self, content_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The content path setting overrides the bundled content."""
        monkeypatch.setenv("TACTICS_CONTENT_CONTENT_PATH", str(content_dir))

        repository = load_default_content()

        assert "brawler" in repository.classes
        assert "squire" not in repository.classes
