"""Audit enums."""

from enum import Enum


class ActionCategory(Enum):
    """
    Display category of an audited action.

    The audit-writing side may supply the category explicitly. When it does
    not, ``from_action`` infers it from the English wording of the action
    label; labels matching none of the keywords are neutral.
    """

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    NEUTRAL = "neutral"

    @property
    def color(self) -> str:
        return _COLORS[self]

    @classmethod
    def from_action(cls, action: str) -> "ActionCategory":
        """Infer the category by substring match; first keyword wins."""
        for keyword, category in _KEYWORDS:
            if keyword in action:
                return category
        return cls.NEUTRAL

    @classmethod
    def parse(cls, value: str | None) -> "ActionCategory | None":
        """Parse an explicit category label; unknown or empty labels give None."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


_KEYWORDS = (
    ("Created", ActionCategory.CREATED),
    ("Updated", ActionCategory.UPDATED),
    ("Deleted", ActionCategory.DELETED),
)

_COLORS = {
    ActionCategory.CREATED: "green",
    ActionCategory.UPDATED: "blue",
    ActionCategory.DELETED: "red",
    ActionCategory.NEUTRAL: "gray",
}
