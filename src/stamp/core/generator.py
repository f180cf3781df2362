"""Timestamp-based note names with timezone support."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_LAYOUT = "%Y-%m-%d-%H%M"
DAILY_LAYOUT = "%Y-%m-%d"
FLEETING_LAYOUT = "%Y-%m-%d-F%H%M%S"
VOICE_LAYOUT = "%Y-%m-%d-VT%H%M%S"
MONTHLY_LAYOUT = "%Y-%m"
YEARLY_LAYOUT = "%Y"

# Analog counters are always keyed by ISO date
SCOPE_LAYOUT = "%Y-%m-%d"


class GeneratorError(Exception):
    """Raised when the generator cannot be configured."""

    pass


@dataclass(frozen=True)
class LayoutOverrides:
    """strftime templates replacing the default/daily renderings.

    Empty strings leave the built-in layout in place.
    """

    default: str = ""
    daily: str = ""


class Generator:
    """Renders dated note names in the configured timezone."""

    def __init__(
        self,
        timezone: str | None = None,
        clock: Callable[[tzinfo | None], datetime] | None = None,
    ):
        """
        Initialize generator.

        Args:
            timezone: IANA timezone name; empty or None uses system local time
            clock: Callable taking a tzinfo and returning the current time
                (defaults to datetime.now)

        Raises:
            GeneratorError: If the timezone is unknown
        """
        self.location: tzinfo | None = None
        if timezone:
            try:
                self.location = ZoneInfo(timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise GeneratorError(f"invalid timezone {timezone}: {e}") from e

        self._clock = clock or datetime.now
        self.default_layout = DEFAULT_LAYOUT
        self.daily_layout = DAILY_LAYOUT

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        current = self._clock(self.location)
        if self.location is None:
            return current
        return current.astimezone(self.location)

    def apply_layouts(self, overrides: LayoutOverrides) -> None:
        """Replace the default and/or daily layouts with non-empty overrides."""
        if overrides.default:
            self.default_layout = overrides.default
        if overrides.daily:
            self.daily_layout = overrides.daily

    def default(self) -> str:
        """YYYY-MM-DD-HHMM (or the vault's default layout)."""
        return self.now().strftime(self.default_layout)

    def daily(self) -> str:
        """YYYY-MM-DD (or the vault's daily layout)."""
        return self.now().strftime(self.daily_layout)

    def fleeting(self) -> str:
        """YYYY-MM-DD-FHHMMSS"""
        return self.now().strftime(FLEETING_LAYOUT)

    def voice(self) -> str:
        """YYYY-MM-DD-VTHHMMSS"""
        return self.now().strftime(VOICE_LAYOUT)

    def monthly(self) -> str:
        return self.now().strftime(MONTHLY_LAYOUT)

    def yearly(self) -> str:
        return self.now().strftime(YEARLY_LAYOUT)

    def current_date(self) -> str:
        """Return today's ISO date, the scope key for analog counters."""
        return self.now().strftime(SCOPE_LAYOUT)
