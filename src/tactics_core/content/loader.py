"""YAML content loader.

A content directory holds up to three files, each a mapping under a single
top-level key, with entries keyed by id:

    abilities.yaml:
        abilities:
          power-strike:
            name: Power Strike
            category: Action
            experience_price: 20

    equipment.yaml:
        equipment:
          iron-sword:
            name: Iron Sword
            type: OneHandedWeapon
            modifiers: {physicalPower: 4}

    classes.yaml:
        classes:
          squire:
            name: Squire
            learnable_abilities: [power-strike]
            base_stat_grants: {health: 10}

Abilities and equipment load before classes, so a class's
``learnable_abilities`` can be resolved to ability objects. An unknown
ability id is logged and skipped, or raises ContentLoadError when
``ContentSettings.strict_references`` is set.

Example:
    >>> repository = load_default_content()
    >>> repository.classes.get_by_id("squire").name
    'Squire'
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from tactics_core.content.repository import ContentRepository
from tactics_core.core.config import get_settings
from tactics_core.core.constants import ABILITIES_FILE, CLASSES_FILE, EQUIPMENT_FILE
from tactics_core.core.exceptions import ContentLoadError
from tactics_core.core.logging import get_logger
from tactics_core.models.abilities import CombatAbility
from tactics_core.models.classes import UnitClass
from tactics_core.models.equipment import Equipment


logger = get_logger(__name__)

DEFAULT_CONTENT_PATH = Path(__file__).resolve().parent.parent / "data"
"""Sample content shipped with the package."""


class ContentLoader:
    """Loads content YAML files into a ContentRepository.

    Attributes:
        repository: Destination for loaded definitions.
        strict_references: Raise on unknown ability references instead of
            skipping them.
    """

    def __init__(
        self,
        repository: ContentRepository | None = None,
        *,
        strict_references: bool | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            repository: Repository to fill; a new one is created if omitted.
            strict_references: Overrides ``ContentSettings.strict_references``.
        """
        self.repository = repository if repository is not None else ContentRepository()
        if strict_references is None:
            strict_references = get_settings().content.strict_references
        self.strict_references = strict_references

    # -------------------------------------------------------------------------
    # File reading
    # -------------------------------------------------------------------------

    def _read_section(self, path: Path, section: str) -> dict[str, dict[str, Any]]:
        """Read one top-level section of a YAML file as id -> entry mapping."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as exc:
            raise ContentLoadError(f"Cannot read content file: {exc}", source_file=str(path)) from exc
        except yaml.YAMLError as exc:
            raise ContentLoadError(f"Invalid YAML: {exc}", source_file=str(path)) from exc

        if not isinstance(data, dict):
            raise ContentLoadError("Content file must contain a mapping", source_file=str(path))

        entries = data.get(section) or {}
        if not isinstance(entries, dict):
            raise ContentLoadError(
                f"'{section}' must map ids to definitions",
                source_file=str(path),
            )
        for entry_id, entry in entries.items():
            if not isinstance(entry, dict):
                raise ContentLoadError(
                    "Definition must be a mapping",
                    source_file=str(path),
                    entry_id=str(entry_id),
                )
        return entries

    @staticmethod
    def _build(model: type, path: Path, entry_id: str, entry: dict[str, Any]) -> Any:
        try:
            return model(id=entry_id, **entry)
        except (PydanticValidationError, TypeError) as exc:
            raise ContentLoadError(
                f"Invalid definition: {exc}",
                source_file=str(path),
                entry_id=entry_id,
            ) from exc

    # -------------------------------------------------------------------------
    # Loaders
    # -------------------------------------------------------------------------

    def load_abilities(self, path: Path) -> int:
        """Load ability definitions from a file.

        Returns:
            Number of abilities registered.
        """
        entries = self._read_section(path, "abilities")
        for entry_id, entry in entries.items():
            self.repository.abilities.register(self._build(CombatAbility, path, str(entry_id), entry))
        logger.debug("Abilities loaded", source_file=str(path), count=len(entries))
        return len(entries)

    def load_equipment(self, path: Path) -> int:
        """Load equipment definitions from a file.

        Returns:
            Number of items registered.
        """
        entries = self._read_section(path, "equipment")
        for entry_id, entry in entries.items():
            self.repository.equipment.register(self._build(Equipment, path, str(entry_id), entry))
        logger.debug("Equipment loaded", source_file=str(path), count=len(entries))
        return len(entries)

    def load_classes(self, path: Path) -> int:
        """Load class definitions, resolving learnable ability ids.

        Returns:
            Number of classes registered.

        Raises:
            ContentLoadError: On a malformed entry, or on an unknown ability
                id when references are strict.
        """
        entries = self._read_section(path, "classes")
        for entry_id, entry in entries.items():
            class_id = str(entry_id)
            data = dict(entry)
            data["learnable_abilities"] = self._resolve_abilities(
                data.get("learnable_abilities") or [], path, class_id
            )
            self.repository.classes.register(self._build(UnitClass, path, class_id, data))
        self._check_requirements(path)
        logger.debug("Classes loaded", source_file=str(path), count=len(entries))
        return len(entries)

    def _resolve_abilities(self, ability_ids: list[Any], path: Path, class_id: str) -> list[CombatAbility]:
        resolved: list[CombatAbility] = []
        for ability_id in ability_ids:
            ability = self.repository.abilities.get_by_id(str(ability_id))
            if ability is not None:
                resolved.append(ability)
                continue
            if self.strict_references:
                raise ContentLoadError(
                    f"Class references unknown ability: {ability_id}",
                    source_file=str(path),
                    entry_id=class_id,
                )
            logger.warning(
                "Unknown learnable ability skipped",
                class_id=class_id,
                ability_id=ability_id,
            )
        return resolved

    def _check_requirements(self, path: Path) -> None:
        for unit_class in self.repository.classes:
            for required_id in unit_class.requirements:
                if required_id in self.repository.classes:
                    continue
                if self.strict_references:
                    raise ContentLoadError(
                        f"Class requires unknown class: {required_id}",
                        source_file=str(path),
                        entry_id=unit_class.id,
                    )
                logger.warning(
                    "Class requirement references unknown class",
                    class_id=unit_class.id,
                    required_class_id=required_id,
                )

    def load_directory(self, path: Path | str) -> ContentRepository:
        """Load every content file present in a directory.

        Missing files are skipped; abilities and equipment load before
        classes.

        Returns:
            The filled repository.

        Raises:
            ContentLoadError: If the directory does not exist or a file is
                malformed.
        """
        directory = Path(path)
        if not directory.is_dir():
            raise ContentLoadError(f"Content directory not found: {directory}", source_file=str(directory))

        loaders = (
            (ABILITIES_FILE, self.load_abilities),
            (EQUIPMENT_FILE, self.load_equipment),
            (CLASSES_FILE, self.load_classes),
        )
        for filename, load in loaders:
            file_path = directory / filename
            if file_path.exists():
                load(file_path)
            else:
                logger.debug("Content file absent", source_file=str(file_path))

        logger.info("Content loaded", directory=str(directory), **self.repository.summary())
        return self.repository


def load_default_content(repository: ContentRepository | None = None) -> ContentRepository:
    """Load the configured content directory, or the bundled sample content.

    Args:
        repository: Repository to fill; a new one is created if omitted.

    Returns:
        The filled repository.
    """
    path = get_settings().content.content_path or DEFAULT_CONTENT_PATH
    return ContentLoader(repository).load_directory(path)


__all__ = [
    "DEFAULT_CONTENT_PATH",
    "ContentLoader",
    "load_default_content",
]
