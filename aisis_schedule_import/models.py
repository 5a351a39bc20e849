"""Pydantic models for parsed schedule blocks and the parser's debug trace.

Field names are snake_case in Python; serialized output uses the camelCase
aliases (``courseCode``, ``startTime``...) that downstream consumers read.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_HHMM_RE = re.compile(r"^\d{2}:\d{2}$")


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ScheduleBlock(_CamelModel):
    """One contiguous class meeting on one day.

    Produced by the block assembler; never mutated once emitted.
    """

    course_code: str = Field(alias="courseCode")  # "MATH 31.1"
    section: str  # "A1"; "N/A" when the cell had no detail lines, "" when they held only a mode
    room: str  # "F201", "SEC-A210 (FULLY ONSITE)", "TBD"
    day: int = Field(ge=1, le=6)  # 1 = Mon ... 6 = Sat
    start_time: str = Field(alias="startTime")  # "HH:MM"
    end_time: str = Field(alias="endTime")  # "HH:MM"

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_hhmm(cls, value: str) -> str:
        if not _HHMM_RE.match(value):
            raise ValueError(f"expected HH:MM, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "ScheduleBlock":
        if self.start_time >= self.end_time:
            raise ValueError(
                f"start_time {self.start_time} must be before end_time {self.end_time}"
            )
        return self

    @property
    def key(self) -> tuple[int, str, str, str]:
        """Identity used when stitching adjacent blocks."""
        return (self.day, self.course_code, self.section, self.room)


# ──────────────────────────────────────────────────────────────────
#  Debug trace
# ──────────────────────────────────────────────────────────────────

LaneEventType = Literal["header", "detail", "gap", "detail_orphan", "inline"]


class RawAnalysis(_CamelModel):
    total_lines: int = Field(default=0, alias="totalLines")
    header_line: int = Field(default=-1, alias="headerLine")
    header_content: str = Field(default="", alias="headerContent")
    time_slot_groups: int = Field(default=0, alias="timeSlotGroups")
    uses_tab_separator: bool = Field(default=False, alias="usesTabSeparator")
    footer_lines_ignored: int = Field(default=0, alias="footerLinesIgnored")


class LaneEvent(_CamelModel):
    """One placement decision made by the lane resolver."""

    line_index: int = Field(alias="lineIndex")
    cell_index: int = Field(alias="cellIndex")
    type: LaneEventType
    text: str
    pos_assigned: int | None = Field(default=None, alias="posAssigned")
    note: str | None = None


class LaneOverview(_CamelModel):
    """Final state of one ordinal position after a group is resolved."""

    ordinal_pos: int = Field(alias="ordinalPos")
    gap: bool
    header: str = ""
    details: list[str] = Field(default_factory=list)
    state: str
    resolved_day: str | None = Field(default=None, alias="resolvedDay")


class LaneDebug(_CamelModel):
    """Per-group record filled in by the lane resolver."""

    raw_lines: list[str] = Field(default_factory=list, alias="rawLines")
    lane_events: list[LaneEvent] = Field(default_factory=list, alias="laneEvents")
    lanes_overview: list[LaneOverview] = Field(default_factory=list, alias="lanesOverview")
    end_of_table_tripped: bool = Field(default=False, alias="endOfTableTripped")
    multiple_time_slots: bool = Field(default=False, alias="multipleTimeSlots")
    alignment_overflow: bool = Field(default=False, alias="alignmentOverflow")


class ColumnExtraction(LaneDebug):
    time_slot: str = Field(alias="timeSlot")
    line_number: int | None = Field(default=None, alias="lineNumber")
    collapsed_columns: list[str] = Field(default_factory=list, alias="collapsedColumns")
    cells_with_content: list[int] = Field(default_factory=list, alias="cellsWithContent")


class ValidationResult(_CamelModel):
    day_name: str = Field(alias="dayName")
    time_range: str = Field(alias="timeRange")
    cell_content: str = Field(alias="cellContent")
    result: Literal["accepted", "rejected", "empty"]
    reason: str
    course_code: str | None = Field(default=None, alias="courseCode")
    line_number: int | None = Field(default=None, alias="lineNumber")


class CommonIssue(_CamelModel):
    type: Literal["alignment", "regex", "format", "footer"]
    severity: Literal["error", "warning", "info"]
    message: str
    line_numbers: list[int] = Field(default_factory=list, alias="lineNumbers")


class DebugTrace(_CamelModel):
    """Append-only diagnostic record of one parse run."""

    raw_analysis: RawAnalysis = Field(default_factory=RawAnalysis, alias="rawAnalysis")
    column_extractions: list[ColumnExtraction] = Field(
        default_factory=list, alias="columnExtractions"
    )
    validation_results: list[ValidationResult] = Field(
        default_factory=list, alias="validationResults"
    )
    common_issues: list[CommonIssue] = Field(default_factory=list, alias="commonIssues")

    def record_validation(self, **fields) -> None:
        self.validation_results.append(ValidationResult(**fields))

    def add_issue(self, type: str, severity: str, message: str, line_numbers=None) -> None:
        self.common_issues.append(
            CommonIssue(
                type=type,
                severity=severity,
                message=message,
                line_numbers=line_numbers or [],
            )
        )


class ParseResult(_CamelModel):
    blocks: list[ScheduleBlock]
    debug: DebugTrace
