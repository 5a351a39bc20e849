"""Error hierarchy for schedule import.

Only input-level failures are raised: the pasted text as a whole cannot be
used and the user has to copy the table again. Anything that merely degrades
the result (misaligned cells, rejected room codes, stray lines) is recorded
in the debug trace instead.
"""


class ScheduleParseError(ValueError):
    """Base exception for all schedule import errors."""

    pass


class HeaderNotFoundError(ScheduleParseError):
    """No 'Time ... Mon ...' header line in the pasted text."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Couldn't find schedule header. Please copy the entire AISIS page "
            "including the header row with 'Time Mon Tue Wed Thur Fri Sat'."
        )


class NoTimeSlotsError(ScheduleParseError):
    """Header found, but no time-slot rows (e.g. '800-830') after it."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Found header but no time slots (e.g., '800-830'). "
            "Make sure you copied the full schedule table from AISIS."
        )


class NoScheduleTableError(ScheduleParseError):
    """Saved HTML page does not contain the weekly schedule table."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Could not find the schedule table in the HTML.\n"
            "Possible causes:\n"
            "  1. The page saved is not 'My Class Schedule'\n"
            "  2. The page was saved before the schedule finished loading\n"
            "Please save the complete page and try again."
        )
