"""Save-record codec for combat units.

A unit is saved as a flat, JSON-safe camelCase record that stores content by
id. Restoring resolves those ids against a ContentRepository:

* an unresolvable ``unitClassId`` means no unit can be built;
* any other unresolvable id is dropped and reported as a RestoreWarning;
* experience ledgers and stat modifiers are copied as saved, never
  recomputed.

Example:
    >>> record = to_record(unit)
    >>> record["unitClassId"]
    'squire'
    >>> result = restore_unit(record, repository)
    >>> result.unit.name == unit.name
    True
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from tactics_core.content.repository import ContentRepository, Registry
from tactics_core.core.constants import DEFAULT_HUMANOID_SPRITE, DEFAULT_MONSTER_SPRITE
from tactics_core.core.exceptions import SerializationError
from tactics_core.core.logging import get_logger
from tactics_core.models.enums import EquipmentSlot, StatType, UnitKind
from tactics_core.models.modifiers import StatModifier
from tactics_core.models.stats import BaseStats
from tactics_core.models.units import CombatUnit, HumanoidUnit, MonsterUnit


logger = get_logger(__name__)


# =============================================================================
# Record Schemas
# =============================================================================


class _UnitRecord(BaseModel):
    """Fields shared by every unit record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str = Field(min_length=1)
    unit_class_id: str
    learned_ability_ids: list[str] = Field(default_factory=list)
    reaction_ability_id: str | None = None
    movement_ability_id: str | None = None
    passive_ability_id: str | None = None

    base_health: int = Field(default=0, ge=0)
    base_mana: int = Field(default=0, ge=0)
    base_physical_power: int = Field(default=0, ge=0)
    base_magic_power: int = Field(default=0, ge=0)
    base_speed: int = Field(default=0, ge=0)
    base_movement: int = Field(default=0, ge=0)
    base_physical_evade: int = Field(default=0, ge=0)
    base_magic_evade: int = Field(default=0, ge=0)
    base_courage: int = Field(default=0, ge=0)
    base_attunement: int = Field(default=0, ge=0)

    wounds: int = Field(default=0, ge=0)
    mana_used: int = Field(default=0, ge=0)
    turn_gauge: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("turnGauge", "actionTimer", "turn_gauge"),
        serialization_alias="turnGauge",
    )
    stat_modifiers: list[StatModifier] = Field(default_factory=list)
    is_player_controlled: bool = False

    def base_stats(self) -> BaseStats:
        return BaseStats(**{stat.base_field: getattr(self, f"base_{stat.base_field}") for stat in StatType})


class HumanoidUnitRecord(_UnitRecord):
    """Save record of a HumanoidUnit."""

    kind: Literal["humanoid"] = "humanoid"
    secondary_class_id: str | None = None
    sprite_id: str = DEFAULT_HUMANOID_SPRITE

    left_hand_id: str | None = None
    right_hand_id: str | None = None
    head_id: str | None = None
    body_id: str | None = None
    accessory_id: str | None = None
    can_dual_wield: bool = False

    total_experience: int = Field(default=0, ge=0)
    class_experience: dict[str, int] = Field(default_factory=dict)
    class_experience_spent: dict[str, int] = Field(default_factory=dict)


class MonsterUnitRecord(_UnitRecord):
    """Save record of a MonsterUnit."""

    kind: Literal["monster"] = "monster"
    sprite_id: str = DEFAULT_MONSTER_SPRITE


_RECORD_TYPES: dict[str, type[_UnitRecord]] = {
    UnitKind.HUMANOID.value: HumanoidUnitRecord,
    UnitKind.MONSTER.value: MonsterUnitRecord,
}


# =============================================================================
# Restore Results
# =============================================================================


class RestoreWarning(BaseModel):
    """A saved reference that could not be resolved and was dropped.

    Attributes:
        field: Record field holding the reference (e.g., 'rightHandId').
        reference_id: The id that was not found.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    reference_id: str

    @property
    def message(self) -> str:
        return f"{self.field}: {self.reference_id!r} not found"


class RestoreResult(BaseModel):
    """A restored unit plus every reference dropped along the way.

    Attributes:
        unit: The restored unit, or None if its primary class is unknown.
        warnings: Dropped references, in record order.
    """

    unit: CombatUnit | None
    warnings: list[RestoreWarning] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check whether the unit was restored with every reference intact."""
        return self.unit is not None and not self.warnings


# =============================================================================
# Encoding
# =============================================================================


def _ref(item: Any) -> str | None:
    return item.id if item is not None else None


def to_record(unit: CombatUnit) -> dict[str, Any]:
    """Encode a unit as a JSON-safe save record.

    Args:
        unit: The unit to encode.

    Returns:
        A camelCase dictionary suitable for ``json.dumps``.
    """
    common: dict[str, Any] = {
        "name": unit.name,
        "unit_class_id": unit.unit_class.id,
        "learned_ability_ids": list(unit.learned_abilities),
        "reaction_ability_id": _ref(unit.reaction_ability),
        "movement_ability_id": _ref(unit.movement_ability),
        "passive_ability_id": _ref(unit.passive_ability),
        "wounds": unit.wounds,
        "mana_used": unit.mana_used,
        "turn_gauge": unit.turn_gauge,
        "stat_modifiers": list(unit.stat_modifiers),
        "sprite_id": unit.sprite_id,
        "is_player_controlled": unit.is_player_controlled,
    }
    for stat in StatType:
        common[f"base_{stat.base_field}"] = unit.base_stats.get(stat)

    if isinstance(unit, HumanoidUnit):
        record: _UnitRecord = HumanoidUnitRecord(
            **common,
            secondary_class_id=_ref(unit.secondary_class),
            left_hand_id=_ref(unit.left_hand),
            right_hand_id=_ref(unit.right_hand),
            head_id=_ref(unit.head),
            body_id=_ref(unit.body),
            accessory_id=_ref(unit.accessory),
            can_dual_wield=unit.can_dual_wield,
            total_experience=unit.total_experience,
            class_experience=unit.class_experience,
            class_experience_spent=unit.class_experience_spent,
        )
    elif isinstance(unit, MonsterUnit):
        record = MonsterUnitRecord(**common)
    else:
        raise SerializationError(
            f"Unsupported unit type: {type(unit).__name__}",
            unit_name=unit.name,
        )

    return record.model_dump(mode="json", by_alias=True)


def dumps(unit: CombatUnit, *, indent: int | None = None) -> str:
    """Encode a unit as JSON text."""
    return json.dumps(to_record(unit), indent=indent)


# =============================================================================
# Decoding
# =============================================================================


def _parse_record(record: Mapping[str, Any]) -> _UnitRecord:
    if not isinstance(record, Mapping):
        raise SerializationError(f"Unit record must be a mapping, got {type(record).__name__}")

    name = record.get("name")
    unit_name = name if isinstance(name, str) else None
    kind = record.get("kind", UnitKind.HUMANOID.value)
    record_type = _RECORD_TYPES.get(kind) if isinstance(kind, str) else None
    if record_type is None:
        raise SerializationError(
            f"Unknown unit kind: {kind!r}",
            unit_name=unit_name,
            details={"kind": kind},
        )

    try:
        return record_type.model_validate(dict(record))
    except PydanticValidationError as exc:
        raise SerializationError(
            f"Malformed unit record: {exc.error_count()} validation error(s)",
            unit_name=unit_name,
            details={"errors": [f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()]},
        ) from exc


class _Resolver:
    """Resolves ids for one restore, collecting warnings for misses."""

    def __init__(self, unit_name: str) -> None:
        self.unit_name = unit_name
        self.warnings: list[RestoreWarning] = []

    def resolve(self, registry: Registry[Any], field: str, reference_id: str | None) -> Any:
        if reference_id is None:
            return None
        item = registry.get_by_id(reference_id)
        if item is None:
            self.warnings.append(RestoreWarning(field=field, reference_id=reference_id))
            logger.warning(
                "Dropped unresolved reference",
                unit=self.unit_name,
                field=field,
                reference_id=reference_id,
            )
        return item


def restore_unit(record: Mapping[str, Any], repository: ContentRepository) -> RestoreResult:
    """Rebuild a unit from a save record.

    Args:
        record: A record produced by ``to_record`` (or an older save).
        repository: Content to resolve ids against.

    Returns:
        The unit and the references that had to be dropped. ``unit`` is None
        if the primary class cannot be resolved.

    Raises:
        SerializationError: If the record is structurally malformed.
    """
    parsed = _parse_record(record)
    resolver = _Resolver(parsed.name)

    unit_class = repository.classes.get_by_id(parsed.unit_class_id)
    if unit_class is None:
        logger.error(
            "Cannot restore unit: primary class not found",
            unit=parsed.name,
            class_id=parsed.unit_class_id,
        )
        warning = RestoreWarning(field="unitClassId", reference_id=parsed.unit_class_id)
        return RestoreResult(unit=None, warnings=[warning])

    learned = {}
    for ability_id in parsed.learned_ability_ids:
        ability = resolver.resolve(repository.abilities, "learnedAbilityIds", ability_id)
        if ability is not None:
            learned[ability.id] = ability

    fields: dict[str, Any] = {
        "name": parsed.name,
        "unit_class": unit_class,
        "sprite_id": parsed.sprite_id,
        "base_stats": parsed.base_stats(),
        "learned_abilities": learned,
        "reaction_ability": resolver.resolve(repository.abilities, "reactionAbilityId", parsed.reaction_ability_id),
        "movement_ability": resolver.resolve(repository.abilities, "movementAbilityId", parsed.movement_ability_id),
        "passive_ability": resolver.resolve(repository.abilities, "passiveAbilityId", parsed.passive_ability_id),
        "wounds": parsed.wounds,
        "mana_used": parsed.mana_used,
        "turn_gauge": parsed.turn_gauge,
        "is_player_controlled": parsed.is_player_controlled,
        "stat_modifiers": [m for m in parsed.stat_modifiers if not m.is_expired],
    }

    unit: CombatUnit
    if isinstance(parsed, HumanoidUnitRecord):
        fields["secondary_class"] = resolver.resolve(
            repository.classes, "secondaryClassId", parsed.secondary_class_id
        )
        for slot in EquipmentSlot:
            field = to_camel(f"{slot.value}_id")
            fields[slot.value] = resolver.resolve(repository.equipment, field, getattr(parsed, f"{slot.value}_id"))
        fields["can_dual_wield"] = parsed.can_dual_wield
        fields["experience"] = {
            "total_experience": parsed.total_experience,
            "class_experience": dict(parsed.class_experience),
            "class_experience_spent": dict(parsed.class_experience_spent),
        }
        unit = HumanoidUnit(**fields)
    else:
        unit = MonsterUnit(**fields)

    logger.debug("Unit restored", unit=unit.name, kind=unit.kind.value, warnings=len(resolver.warnings))
    return RestoreResult(unit=unit, warnings=resolver.warnings)


def from_record(record: Mapping[str, Any], repository: ContentRepository) -> CombatUnit | None:
    """Rebuild a unit from a save record, discarding restore warnings.

    Returns:
        The unit, or None if its primary class cannot be resolved.
    """
    return restore_unit(record, repository).unit


def loads(text: str, repository: ContentRepository) -> CombatUnit | None:
    """Rebuild a unit from JSON text.

    Raises:
        SerializationError: If the text is not JSON or not a unit record.
    """
    try:
        record = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Invalid JSON: {exc.msg}") from exc
    return from_record(record, repository)


__all__ = [
    "HumanoidUnitRecord",
    "MonsterUnitRecord",
    "RestoreWarning",
    "RestoreResult",
    "to_record",
    "dumps",
    "restore_unit",
    "from_record",
    "loads",
]
