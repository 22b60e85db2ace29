"""Month-field locking for the project form.

A project's fiscal month is either chosen freely or derived from its
meeting start date, never both:

  FREE            -- no meeting start date; the month is user-chosen
  LOCKED_TO_DATE  -- a meeting start date is set; the month follows it

Transitions:
  FREE -> LOCKED_TO_DATE: a meeting start date is entered
  LOCKED_TO_DATE -> LOCKED_TO_DATE: the start date changes (month re-derived)
  LOCKED_TO_DATE -> FREE: the start date is cleared (month keeps its value)
"""

import enum
import logging
from typing import Optional

from fiscal_tracker.engine.dates import format_date, to_date
from fiscal_tracker.engine.errors import MonthLockedError
from fiscal_tracker.engine.fiscal_calendar import calendar_date_to_fiscal_month, validate_fiscal_index
from fiscal_tracker.schemas.models import Project

logger = logging.getLogger(__name__)


class MonthFieldMode(enum.Enum):
    """Two modes of the month field."""

    FREE = "free"
    LOCKED_TO_DATE = "locked_to_date"


class MonthSelection:
    """The month field of a project form and the date that may lock it.

    Args:
        start_month: Initial fiscal index, used while FREE.
        meeting_start_date: Initial meeting start date; when given the
            selection starts LOCKED_TO_DATE and the month is derived from it.
    """

    def __init__(self, start_month: int = 0, meeting_start_date: Optional[str] = None):
        self._start_month = validate_fiscal_index(start_month)
        self._meeting_start_date: Optional[str] = None
        self._mode = MonthFieldMode.FREE
        self.set_meeting_start(meeting_start_date)

    @classmethod
    def from_project(cls, project: Project) -> "MonthSelection":
        return cls(project.start_month, project.meeting_start_date)

    @property
    def mode(self) -> MonthFieldMode:
        return self._mode

    @property
    def is_locked(self) -> bool:
        return self._mode == MonthFieldMode.LOCKED_TO_DATE

    @property
    def start_month(self) -> int:
        return self._start_month

    @property
    def meeting_start_date(self) -> Optional[str]:
        return self._meeting_start_date

    def set_meeting_start(self, value: Optional[str]) -> int:
        """Set or clear the meeting start date. Returns the resulting month.

        Raises:
            InvalidDateError: If ``value`` is a malformed date string.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            if self._mode == MonthFieldMode.LOCKED_TO_DATE:
                logger.debug("Month unlocked, keeping fiscal month %d", self._start_month)
            self._meeting_start_date = None
            self._mode = MonthFieldMode.FREE
            return self._start_month

        normalized = format_date(to_date(value))
        self._start_month = calendar_date_to_fiscal_month(normalized)
        self._meeting_start_date = normalized
        self._mode = MonthFieldMode.LOCKED_TO_DATE
        logger.debug("Month locked to %s -> fiscal month %d", normalized, self._start_month)
        return self._start_month

    def choose_month(self, fiscal_index: int) -> int:
        """Choose the month directly. Only allowed while FREE.

        Raises:
            MonthLockedError: While locked to a meeting start date.
            FiscalIndexError: If ``fiscal_index`` is not in 0..11.
        """
        if self._mode == MonthFieldMode.LOCKED_TO_DATE:
            raise MonthLockedError(self._start_month, self._meeting_start_date)
        self._start_month = validate_fiscal_index(fiscal_index)
        return self._start_month
