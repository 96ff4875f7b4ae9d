"""
Data model for the meeting optimizer
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List


@dataclass(frozen=True)
class Meeting:
    """A pending meeting waiting for a slot"""
    id: str
    priority: int  # 1-10 scale
    duration_minutes: int
    deadline: datetime
    title: str = ""

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=self.duration_minutes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "priority": self.priority,
            "duration_minutes": self.duration_minutes,
            "deadline": self.deadline.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Meeting":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            priority=int(data["priority"]),
            duration_minutes=int(data["duration_minutes"]),
            deadline=datetime.fromisoformat(data["deadline"]),
        )


@dataclass(frozen=True)
class AvailabilityWindow:
    """One contiguous block of free time on the calendar"""
    start_time: datetime
    end_time: datetime

    def contains(self, start: datetime, end: datetime) -> bool:
        return self.start_time <= start and end <= self.end_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AvailabilityWindow":
        return cls(
            start_time=datetime.fromisoformat(data["start_time"]),
            end_time=datetime.fromisoformat(data["end_time"]),
        )


@dataclass(frozen=True)
class OccupiedInterval:
    """A slot already claimed by a meeting placed earlier in the same run"""
    start: datetime
    end: datetime

    def overlaps(self, start: datetime, end: datetime) -> bool:
        # Half-open intervals: touching endpoints do not conflict
        return not (end <= self.start or start >= self.end)


@dataclass(frozen=True)
class ScheduledMeeting:
    meeting: Meeting
    scheduled_start: datetime
    scheduled_end: datetime
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meeting": self.meeting.to_dict(),
            "scheduled_start": self.scheduled_start.isoformat(),
            "scheduled_end": self.scheduled_end.isoformat(),
            "score": round(self.score, 6),
        }


@dataclass
class OptimizationResult:
    """Outcome of one optimization run"""
    scheduled: List[ScheduledMeeting] = field(default_factory=list)
    unscheduled: List[Meeting] = field(default_factory=list)

    @property
    def optimization_score(self) -> float:
        """Mean placement score, 0.0 when nothing was scheduled"""
        if not self.scheduled:
            return 0.0
        return sum(sm.score for sm in self.scheduled) / len(self.scheduled)

    @property
    def scheduled_count(self) -> int:
        return len(self.scheduled)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheduled": [sm.to_dict() for sm in self.scheduled],
            "unscheduled": [m.id for m in self.unscheduled],
            "scheduled_count": self.scheduled_count,
            "optimization_score": round(self.optimization_score, 6),
        }
