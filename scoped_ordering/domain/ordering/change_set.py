"""
Explicit change signal handed to the save hook.

The persistence host captures what changed on a record since it was loaded
and passes it in, so the ordering rules never inspect hidden dirty state.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScopeChange:
    """Former and current value of one scope key."""

    key: str
    former: object
    current: object


@dataclass(frozen=True)
class ChangeSet:
    """Changes relevant to ordering for a single save."""

    is_new: bool
    former_position: int | None = None
    scope_changes: tuple[ScopeChange, ...] = ()

    @property
    def scope_changed(self) -> bool:
        return bool(self.scope_changes)

    @property
    def changed_keys(self) -> tuple[str, ...]:
        return tuple(change.key for change in self.scope_changes)

    def former_scope_values(self) -> dict[str, object]:
        """Scope values before this save, for the changed keys only."""
        return {change.key: change.former for change in self.scope_changes}

    @classmethod
    def for_new_record(cls) -> "ChangeSet":
        return cls(is_new=True)

    @classmethod
    def unchanged(cls, position: int | None) -> "ChangeSet":
        """Change set for a persisted record whose scope did not move."""
        return cls(is_new=False, former_position=position)
