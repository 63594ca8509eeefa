from datetime import date
from typing import Optional

from pydantic import BaseModel


class Interval(BaseModel):
    start: date
    end: date

    def union(self, other: "Interval") -> "Interval":
        """Return the smallest interval covering both."""
        return Interval(
            start=min(self.start, other.start),
            end=max(self.end, other.end),
        )

    def duration_days(self) -> int:
        return (self.end - self.start).days


class Warning(BaseModel):
    code: str
    message: str
    source: Optional[str] = None  # e.g. "rxTba[3]" or "medHistory[1].lines[0]"
