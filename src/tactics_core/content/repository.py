"""In-memory content registries.

A ContentRepository holds every ability, class and equipment definition a
game session can reference, keyed by id. It is built once at load time and
passed explicitly to whatever needs to resolve ids (mainly the save codec);
there is no process-wide registry.

Example:
    >>> repository = ContentRepository()
    >>> repository.abilities.register(focus)
    >>> repository.abilities.get_by_id("focus") is focus
    True
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, Protocol, TypeVar

from tactics_core.core.exceptions import DuplicateDefinitionError
from tactics_core.models.abilities import CombatAbility
from tactics_core.models.classes import UnitClass
from tactics_core.models.equipment import Equipment


class _Identified(Protocol):
    id: str


T = TypeVar("T", bound=_Identified)


class Registry(Generic[T]):
    """Id-keyed store for one kind of content definition.

    Iteration and ``get_all`` follow registration order.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._items: dict[str, T] = {}

    def register(self, item: T) -> None:
        """Add a definition.

        Raises:
            DuplicateDefinitionError: If the id is already registered.
        """
        if item.id in self._items:
            raise DuplicateDefinitionError(
                f"Duplicate {self.kind} id: {item.id}",
                kind=self.kind,
                definition_id=item.id,
            )
        self._items[item.id] = item

    def get_by_id(self, item_id: str) -> T | None:
        """Look up a definition, returning None if it is not registered."""
        return self._items.get(item_id)

    def get_all(self) -> list[T]:
        return list(self._items.values())

    def ids(self) -> list[str]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __repr__(self) -> str:
        return f"Registry(kind={self.kind!r}, size={len(self)})"


class ContentRepository:
    """The three content registries a session resolves ids against.

    Attributes:
        abilities: Ability definitions.
        classes: Unit class definitions.
        equipment: Equipment definitions.
    """

    def __init__(self) -> None:
        self.abilities: Registry[CombatAbility] = Registry("ability")
        self.classes: Registry[UnitClass] = Registry("class")
        self.equipment: Registry[Equipment] = Registry("equipment")

    def clear(self) -> None:
        """Empty every registry."""
        self.abilities.clear()
        self.classes.clear()
        self.equipment.clear()

    def summary(self) -> dict[str, int]:
        """Count of definitions per registry."""
        return {
            "abilities": len(self.abilities),
            "classes": len(self.classes),
            "equipment": len(self.equipment),
        }

    def __repr__(self) -> str:
        counts = ", ".join(f"{name}={count}" for name, count in self.summary().items())
        return f"ContentRepository({counts})"


__all__ = [
    "Registry",
    "ContentRepository",
]
