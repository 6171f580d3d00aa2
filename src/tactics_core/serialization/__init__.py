"""Save-record codec for combat units.

Submodules:
    codec: to_record / restore_unit and their JSON-text wrappers.
    roster: create_starter_unit for new characters of a starter class.
"""

from __future__ import annotations

from tactics_core.serialization.codec import (
    HumanoidUnitRecord,
    MonsterUnitRecord,
    RestoreResult,
    RestoreWarning,
    dumps,
    from_record,
    loads,
    restore_unit,
    to_record,
)
from tactics_core.serialization.roster import create_starter_unit, starter_record


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
    "starter_record",
    "create_starter_unit",
]
