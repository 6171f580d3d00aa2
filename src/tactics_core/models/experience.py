"""Per-class experience ledger for units with an experience economy.

Experience is earned into a running total and, when attributed to a class,
into that class's earned figure. Abilities are bought with a class's
unspent experience: earned minus spent in that same class. Spending in one
class never touches another class's figures.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from tactics_core.core.exceptions import ExperienceError


class ExperienceLedger(BaseModel):
    """Earned and spent experience, tracked per class id.

    Attributes:
        total_experience: All experience ever earned.
        class_experience: Class id -> experience earned while in that class.
        class_experience_spent: Class id -> experience spent on abilities
            bought from that class.

    Example:
        >>> ledger = ExperienceLedger()
        >>> ledger.add(25, "squire")
        >>> ledger.spend("squire", 20)
        True
        >>> ledger.unspent("squire")
        5
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    total_experience: int = Field(default=0, ge=0)
    class_experience: dict[str, int] = Field(default_factory=dict)
    class_experience_spent: dict[str, int] = Field(default_factory=dict)

    def add(self, amount: int, class_id: str | None = None) -> None:
        """Credit experience to the total and optionally to one class.

        Args:
            amount: Experience to add.
            class_id: Class to attribute the experience to.

        Raises:
            ExperienceError: If amount is negative.
        """
        if amount < 0:
            raise ExperienceError(
                "Cannot add negative experience",
                amount=amount,
                class_id=class_id,
            )
        self.total_experience += amount
        if class_id is not None:
            self.class_experience[class_id] = self.earned(class_id) + amount

    def earned(self, class_id: str) -> int:
        """Experience earned in a class (0 if never attributed)."""
        return self.class_experience.get(class_id, 0)

    def spent(self, class_id: str) -> int:
        """Experience spent from a class (0 if nothing bought)."""
        return self.class_experience_spent.get(class_id, 0)

    def unspent(self, class_id: str) -> int:
        """Experience still available to spend in a class."""
        return self.earned(class_id) - self.spent(class_id)

    @property
    def unspent_total(self) -> int:
        """Total experience minus everything spent across all classes."""
        return self.total_experience - sum(self.class_experience_spent.values())

    def can_spend(self, class_id: str, amount: int) -> bool:
        """Check whether a class has enough unspent experience."""
        return self.unspent(class_id) >= amount

    def spend(self, class_id: str, amount: int) -> bool:
        """Debit a class's unspent experience.

        Args:
            class_id: Class to spend from.
            amount: Experience to spend.

        Returns:
            False, leaving the ledger untouched, if the class cannot afford it.
        """
        if not self.can_spend(class_id, amount):
            return False
        self.class_experience_spent[class_id] = self.spent(class_id) + amount
        return True

    def refund(self, class_id: str, amount: int) -> None:
        """Return spent experience to a class, never going below zero spent."""
        self.class_experience_spent[class_id] = max(0, self.spent(class_id) - amount)


__all__ = ["ExperienceLedger"]
