from enum import StrEnum


class MoveAction(StrEnum):
    """Reordering operations available on a single record."""

    UP = "up"
    DOWN = "down"
    TOP = "top"
    BOTTOM = "bottom"
    ABOVE = "above"
    BELOW = "below"

    @property
    def needs_target(self) -> bool:
        return self in (MoveAction.ABOVE, MoveAction.BELOW)
