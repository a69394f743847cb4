"""Result types returned by the weekday and week extraction helpers."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WeekdayValidationResult:
    """Outcome of checking a collection of weekday strings."""

    is_valid: bool
    missing: tuple[str, ...] = ()  # Canonical order
    invalid: tuple[object, ...] = ()  # Input order, raw values
    normalized: tuple[str, ...] = ()  # First-seen order, no duplicates


@dataclass(frozen=True)
class WeekTextInspection:
    """
    Breakdown of which week pattern matched in a piece of text.

    Note: `extracted` is None when neither pattern yields a usable week; the
    current-week fallback is not applied here.
    """

    text: str
    date_token: str | None = None  # "YYYYMMDD" after "Vecka "
    week_token: str | None = None  # 1-2 digits after "Vecka "
    extracted: int | None = None


@dataclass
class MenuWeek:
    """A lunch menu page reduced to its week number and weekday sections."""

    week: int
    sections: dict[str, str | None] = field(default_factory=dict)

    def to_dict(self):
        """Convert to dictionary for JSON serialization."""
        return {"week": self.week, "sections": dict(self.sections)}
