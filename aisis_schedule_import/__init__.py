"""Parse class schedules copied from AISIS into structured schedule blocks."""

__version__ = "0.1.0"

from .errors import (
    HeaderNotFoundError,
    NoScheduleTableError,
    NoTimeSlotsError,
    ScheduleParseError,
)
from .models import DebugTrace, ParseResult, ScheduleBlock
from .parser import parse_aisis_schedule

__all__ = [
    "parse_aisis_schedule",
    "ScheduleBlock",
    "DebugTrace",
    "ParseResult",
    "ScheduleParseError",
    "HeaderNotFoundError",
    "NoTimeSlotsError",
    "NoScheduleTableError",
]
