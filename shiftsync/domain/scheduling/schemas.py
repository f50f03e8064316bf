from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class CalendarEntry(BaseModel):
    """One occurrence of a shift or study session on the calendar"""

    kind: Literal["shift", "study_session"]
    id: int
    title: str
    startDatetime: datetime
    endDatetime: datetime
    isRecurring: bool
    color: Optional[str] = None
